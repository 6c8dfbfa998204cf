"""
Core data models for CDMA simulation.

This module defines the data structures shared by the code generator, the
engine and the export utilities: the immutable Walsh code matrix, stations
and their decoded output, and the engine phase tag.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

import numpy as np


class EnginePhase(Enum):
    """Ordered phases of a single simulation run."""

    REGISTRATION = "registration"
    CODES_ASSIGNED = "codes_assigned"
    TRANSMITTED = "transmitted"


@dataclass(frozen=True, eq=False)
class CodeMatrix:
    """Walsh-Hadamard code matrix of a given order.

    Attributes:
        order: Exponent k such that the matrix is 2^k x 2^k
        codes: Read-only int8 array of +1/-1 values, one code per row
    """

    order: int
    codes: np.ndarray

    def __post_init__(self):
        expected = 1 << self.order
        if self.codes.shape != (expected, expected):
            raise ValueError(
                f"Order {self.order} matrix must have shape {(expected, expected)}, "
                f"got {self.codes.shape}"
            )
        self.codes.setflags(write=False)

    @property
    def num_codes(self) -> int:
        """Number of codes (rows) in the matrix."""
        return self.codes.shape[0]

    @property
    def code_length(self) -> int:
        """Length of each code in chips."""
        return self.codes.shape[1]

    def get_code(self, index: int) -> np.ndarray:
        """Get a specific code by row index.

        Args:
            index: Row index (0-based)

        Returns:
            Read-only view of the code

        Raises:
            IndexError: If index is out of range
        """
        if index < 0 or index >= self.num_codes:
            raise IndexError(f"Code index {index} out of range [0, {self.num_codes - 1}]")
        return self.codes[index]

    def __len__(self) -> int:
        return self.num_codes

    def __getitem__(self, index: int) -> np.ndarray:
        return self.get_code(index)

    def __iter__(self):
        return iter(self.codes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CodeMatrix):
            return NotImplemented
        return self.order == other.order and np.array_equal(self.codes, other.codes)

    def __hash__(self) -> int:
        return hash(self.order)


@dataclass
class Station:
    """A transmitting station.

    Attributes:
        name: Unique station name
        word: Text the station transmits
        bits: Bit sequence of the word (8 bits per character)
        walsh_code: Assigned spreading code, None until codes are generated
    """

    name: str
    word: str
    bits: np.ndarray
    walsh_code: Optional[np.ndarray] = None

    @property
    def bit_length(self) -> int:
        return len(self.bits)

    @property
    def has_code(self) -> bool:
        return self.walsh_code is not None

    def signal_at(self, slot: int) -> int:
        """Antipodal level of the bit sent in ``slot``: +1, -1, or 0 when silent."""
        if slot >= self.bit_length:
            return 0
        return 1 if self.bits[slot] == 1 else -1


@dataclass
class DecodedWord:
    """Recovered output for one station.

    Attributes:
        name: Station name
        bits: Recovered bits that were converted to text
        text: Recovered text
        original_word: Word the station transmitted
    """

    name: str
    bits: np.ndarray
    text: str
    original_word: str

    @property
    def matches_original(self) -> bool:
        return self.text == self.original_word

    def as_pair(self) -> tuple:
        return (self.name, self.text)


@dataclass
class TransmissionSummary:
    """Summary of a completed run, used for reporting and export.

    Attributes:
        station_names: Station names in code assignment order
        order: Walsh matrix order used
        code_length: Length of each assigned code
        num_slots: Number of time slots simulated
        decoded_words: Recovered output per station
        completed_at: When transmission finished
        metadata: Additional information about the run
    """

    station_names: List[str]
    order: int
    code_length: int
    num_slots: int
    decoded_words: List[DecodedWord]
    completed_at: datetime = field(default_factory=datetime.now)
    metadata: Dict = field(default_factory=dict)

    @property
    def num_stations(self) -> int:
        return len(self.station_names)

    @property
    def all_recovered(self) -> bool:
        """Whether every station recovered exactly the word it sent."""
        return all(word.matches_original for word in self.decoded_words)

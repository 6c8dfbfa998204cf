"""
CDMA engine: station registration, Walsh code assignment, and the
spread/superpose/correlate transmission cycle.

A run moves through three phases in order: stations are registered, one
Walsh code is assigned to each station in registration order, then every
time slot is transmitted and decoded. Each phase operation may only be called
in its own phase; anything else raises OutOfSequenceError.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

import numpy as np

from .bit_codec import bits_to_text, format_bits, text_to_bits
from .config_manager import ConfigurationError, get_config
from .correlation_analyzer import CorrelationAnalyzer
from .error_handling import DomainError, OutOfSequenceError
from .models import CodeMatrix, DecodedWord, EnginePhase, Station, TransmissionSummary
from .orthogonality_tester import OrthogonalityTester
from .validation import InputValidator
from .walsh_code_generator import WalshCodeGenerator

logger = logging.getLogger(__name__)


class DataProcessor(ABC):
    """Operations a CDMA simulation exposes to its driver."""

    @abstractmethod
    def add_station(self, name: str, word: str) -> None:
        """Register a station and the word it transmits."""

    @abstractmethod
    def generate_walsh_codes(self) -> None:
        """Assign one Walsh code per registered station."""

    @abstractmethod
    def transmit_data(self) -> None:
        """Transmit every time slot and decode it for every station."""

    @abstractmethod
    def display_decoded_words(self) -> List[Tuple[str, str]]:
        """Return (station name, decoded text) pairs."""


class CDMAEngine(DataProcessor):
    """Single-run CDMA channel simulation over Walsh-Hadamard codes."""

    def __init__(
        self,
        walsh_code_generator: Optional[WalshCodeGenerator] = None,
        config_file: Optional[str] = None,
        truncate_to_word_length: Optional[bool] = None,
        record_composite_signals: Optional[bool] = None,
        verify_orthogonality: Optional[bool] = None,
    ):
        """Initialize the engine.

        Args:
            walsh_code_generator: Source of code matrices. If None, creates a new one.
            config_file: Path to configuration file (uses default if None)
            truncate_to_word_length: Cut each station's decoded bits to its own
                word length before text conversion (uses config if None)
            record_composite_signals: Keep every slot's composite signal (uses config if None)
            verify_orthogonality: Check assigned codes after assignment (uses config if None)
        """
        self.walsh_code_generator = walsh_code_generator or WalshCodeGenerator()
        self.correlation_analyzer = CorrelationAnalyzer()
        self.orthogonality_tester = OrthogonalityTester(self.correlation_analyzer)

        try:
            engine_config = get_config(config_file).get_engine_config()
        except (ConfigurationError, Exception) as e:
            engine_config = {
                "truncate_to_word_length": True,
                "record_composite_signals": True,
                "verify_orthogonality": True,
            }
            logger.warning(f"Could not load engine configuration: {e}. Using defaults")

        if truncate_to_word_length is not None:
            engine_config["truncate_to_word_length"] = truncate_to_word_length
        if record_composite_signals is not None:
            engine_config["record_composite_signals"] = record_composite_signals
        if verify_orthogonality is not None:
            engine_config["verify_orthogonality"] = verify_orthogonality

        self.truncate_to_word_length = engine_config["truncate_to_word_length"]
        self.record_composite_signals = engine_config["record_composite_signals"]
        self.verify_orthogonality = engine_config["verify_orthogonality"]

        self._stations: Dict[str, Station] = {}
        self._decoded_bits: Dict[str, List[int]] = {}
        self._max_length = 0
        self._phase = EnginePhase.REGISTRATION
        self._code_matrix: Optional[CodeMatrix] = None
        self._composite_signals: List[np.ndarray] = []

    def _require_phase(self, expected: EnginePhase, operation: str) -> None:
        if self._phase != expected:
            raise OutOfSequenceError(
                f"{operation}() requires the {expected.value} phase, "
                f"engine is in the {self._phase.value} phase",
                operation=operation,
                current_phase=self._phase.value,
            )

    def add_station(self, name: str, word: str) -> None:
        """Register a station, replacing any station with the same name.

        Args:
            name: Station name
            word: Single-byte text the station transmits

        Raises:
            InvalidArgumentError: If the name or word is invalid
            OutOfSequenceError: If codes have already been assigned
        """
        self._require_phase(EnginePhase.REGISTRATION, "add_station")
        InputValidator.validate_station_name(name)
        bits = text_to_bits(word)

        if name in self._stations:
            logger.info(f"Station '{name}' re-registered, previous word replaced")

        station = Station(name=name, word=word, bits=bits)
        self._stations[name] = station
        self._decoded_bits[name] = []

        if station.bit_length > self._max_length:
            self._max_length = station.bit_length

        logger.debug(f"Station '{name}' registered: {format_bits(bits)}")

    def generate_walsh_codes(self) -> None:
        """Assign the i-th Walsh code to the i-th registered station.

        The matrix order is ceil(log2(station count)); codes beyond the
        station count are discarded.

        Raises:
            DomainError: If no station is registered
            OutOfSequenceError: If codes have already been assigned
        """
        self._require_phase(EnginePhase.REGISTRATION, "generate_walsh_codes")

        station_count = len(self._stations)
        if station_count == 0:
            raise DomainError(
                "Cannot generate Walsh codes without any registered station",
                station_count=0,
            )

        order = WalshCodeGenerator.order_for_station_count(station_count)
        code_matrix = self.walsh_code_generator.generate_matrix(order)

        for station, code in zip(self._stations.values(), code_matrix):
            station.walsh_code = code

        self._code_matrix = code_matrix
        self._phase = EnginePhase.CODES_ASSIGNED

        if self.verify_orthogonality:
            result = self.orthogonality_tester.test_code_set_orthogonality(self._assigned_codes())
            if not result["is_set_orthogonal"]:
                logger.warning(
                    f"Assigned codes are not orthogonal "
                    f"(max cross-correlation {result['max_cross_correlation']})"
                )

        logger.info(
            f"Assigned order-{order} Walsh codes (length {code_matrix.code_length}) "
            f"to {station_count} stations"
        )

    def _assigned_codes(self) -> np.ndarray:
        return np.stack([station.walsh_code for station in self._stations.values()]).astype(
            np.int64
        )

    def transmit_data(self) -> None:
        """Transmit and decode every time slot.

        In slot t each station holding a bit at t adds its code scaled by +1
        (bit 1) or -1 (bit 0) to the composite signal; stations with shorter
        words stay silent. Every station then decodes 1 when the composite's
        correlation with its own code is positive, else 0.

        Raises:
            OutOfSequenceError: If codes are not assigned yet or data was
                already transmitted
        """
        self._require_phase(EnginePhase.CODES_ASSIGNED, "transmit_data")

        stations = list(self._stations.values())
        codes = self._assigned_codes()

        for slot in range(self._max_length):
            levels = np.array([station.signal_at(slot) for station in stations], dtype=np.int64)
            composite = levels @ codes

            if self.record_composite_signals:
                self._composite_signals.append(composite)

            self._decode_signal(composite, stations, codes)

            logger.debug(f"Slot {slot}: composite signal {composite.tolist()}")

        self._phase = EnginePhase.TRANSMITTED
        logger.info(f"Transmitted {self._max_length} slots for {len(stations)} stations")

    def _decode_signal(
        self, composite: np.ndarray, stations: List[Station], codes: np.ndarray
    ) -> None:
        correlations = self.correlation_analyzer.despread(composite, codes)
        for station, correlation in zip(stations, correlations):
            self._decoded_bits[station.name].append(1 if correlation > 0 else 0)

    def get_decoded_words(self) -> List[DecodedWord]:
        """Decoded output of every station, in registration order.

        Raises:
            OutOfSequenceError: If data has not been transmitted yet
        """
        self._require_phase(EnginePhase.TRANSMITTED, "get_decoded_words")

        decoded_words = []
        for name, station in self._stations.items():
            bits = np.array(self._decoded_bits[name], dtype=np.uint8)
            if self.truncate_to_word_length:
                bits = bits[: station.bit_length]
            decoded_words.append(
                DecodedWord(
                    name=name, bits=bits, text=bits_to_text(bits), original_word=station.word
                )
            )
        return decoded_words

    def display_decoded_words(self) -> List[Tuple[str, str]]:
        """Return (station name, decoded text) pairs in registration order.

        Raises:
            OutOfSequenceError: If data has not been transmitted yet
        """
        self._require_phase(EnginePhase.TRANSMITTED, "display_decoded_words")
        return [decoded.as_pair() for decoded in self.get_decoded_words()]

    def get_summary(self) -> TransmissionSummary:
        """Summarize a completed run.

        Raises:
            OutOfSequenceError: If data has not been transmitted yet
        """
        decoded_words = self.get_decoded_words()
        return TransmissionSummary(
            station_names=self.station_names,
            order=self._code_matrix.order,
            code_length=self._code_matrix.code_length,
            num_slots=self._max_length,
            decoded_words=decoded_words,
            metadata={
                "truncate_to_word_length": self.truncate_to_word_length,
                "record_composite_signals": self.record_composite_signals,
            },
        )

    @property
    def phase(self) -> EnginePhase:
        return self._phase

    @property
    def station_count(self) -> int:
        return len(self._stations)

    @property
    def station_names(self) -> List[str]:
        return list(self._stations)

    @property
    def max_length(self) -> int:
        """Longest registered bit sequence, i.e. the number of time slots."""
        return self._max_length

    @property
    def code_matrix(self) -> Optional[CodeMatrix]:
        return self._code_matrix

    @property
    def code_length(self) -> int:
        return self._code_matrix.code_length if self._code_matrix is not None else 0

    @property
    def composite_signals(self) -> np.ndarray:
        """Recorded composite signals, one row per transmitted slot."""
        if not self._composite_signals:
            return np.zeros((0, self.code_length), dtype=np.int64)
        return np.stack(self._composite_signals)

    def get_station(self, name: str) -> Station:
        """Get a registered station by name.

        Raises:
            KeyError: If no station has that name
        """
        if name not in self._stations:
            raise KeyError(f"Unknown station: '{name}'")
        return self._stations[name]

    def get_decoded_bits(self, name: str) -> np.ndarray:
        """Untruncated decoded bits of a station, one per processed slot."""
        if name not in self._decoded_bits:
            raise KeyError(f"Unknown station: '{name}'")
        return np.array(self._decoded_bits[name], dtype=np.uint8)

    def __repr__(self) -> str:
        return (
            f"CDMAEngine(stations={self.station_count}, phase={self._phase.value}, "
            f"max_length={self._max_length})"
        )

"""
Input validation for the CDMA Walsh simulator.

This module checks arguments crossing the public API (generation orders,
text to encode, bit sequences to decode, station names and input lines) and
raises InvalidArgumentError with a descriptive message on the first problem.
"""

from typing import Tuple

import numpy as np

from .error_handling import InvalidArgumentError


class InputValidator:
    """Validator class for simulator inputs."""

    BITS_PER_SYMBOL = 8
    MAX_SYMBOL_VALUE = 255

    @classmethod
    def validate_order(cls, order) -> int:
        """Validate a Walsh matrix generation order.

        Args:
            order: Requested order

        Returns:
            The order as a plain int

        Raises:
            InvalidArgumentError: If order is not a non-negative integer
        """
        if isinstance(order, bool) or not isinstance(order, (int, np.integer)):
            raise InvalidArgumentError("order must be an integer", "order", order)
        if order < 0:
            raise InvalidArgumentError(f"order must be >= 0, got {order}", "order", order)
        return int(order)

    @classmethod
    def validate_text(cls, text) -> None:
        """Validate text for single-byte encoding.

        Raises:
            InvalidArgumentError: If text is not a string or holds a character
                outside the range 0-255
        """
        if not isinstance(text, str):
            raise InvalidArgumentError("text must be a string", "text", text)
        for position, char in enumerate(text):
            if ord(char) > cls.MAX_SYMBOL_VALUE:
                raise InvalidArgumentError(
                    f"Character {char!r} at position {position} is outside the "
                    f"single-byte range (code point {ord(char)} > {cls.MAX_SYMBOL_VALUE})",
                    "text",
                    text,
                )

    @classmethod
    def validate_bits(cls, bits: np.ndarray) -> None:
        """Validate a bit sequence for text decoding.

        Raises:
            InvalidArgumentError: If the sequence is not 1-dimensional, holds a
                value other than 0 or 1, or its length is not a multiple of 8
        """
        if bits.ndim != 1:
            raise InvalidArgumentError("bits must be 1-dimensional", "bits", bits)
        if bits.size % cls.BITS_PER_SYMBOL != 0:
            raise InvalidArgumentError(
                f"Bit sequence length {bits.size} is not a multiple of {cls.BITS_PER_SYMBOL}",
                "bits",
                bits,
            )
        if np.any((bits != 0) & (bits != 1)):
            raise InvalidArgumentError("Bit sequence may only contain 0 and 1", "bits", bits)

    @classmethod
    def validate_station_name(cls, name) -> None:
        """Validate a station name.

        Raises:
            InvalidArgumentError: If name is not a non-empty string
        """
        if not isinstance(name, str):
            raise InvalidArgumentError("Station name must be a string", "name", name)
        if not name:
            raise InvalidArgumentError("Station name cannot be empty", "name", name)

    @classmethod
    def parse_station_line(cls, line: str) -> Tuple[str, str]:
        """Split an input line into a station name and its word.

        Args:
            line: Raw input line

        Returns:
            Tuple of (name, word)

        Raises:
            InvalidArgumentError: If the line does not hold exactly two
                whitespace-separated tokens
        """
        parts = line.split()
        if len(parts) != 2:
            raise InvalidArgumentError(
                "Enter a station name and a word separated by a space", "line", line
            )
        return parts[0], parts[1]

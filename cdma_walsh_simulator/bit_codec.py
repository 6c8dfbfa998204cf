"""
Bit-packing codec between text and 8-bit binary symbol sequences.

Each character maps to its code point written as 8 big-endian bits, so only
single-byte text (code points 0-255) can be carried.
"""

from typing import Sequence, Union

import numpy as np

from .error_handling import InvalidArgumentError
from .validation import InputValidator

BITS_PER_SYMBOL = InputValidator.BITS_PER_SYMBOL

BitsLike = Union[np.ndarray, Sequence[int]]


def text_to_bits(text: str) -> np.ndarray:
    """Convert text to its big-endian bit sequence.

    Args:
        text: Text whose characters all have code points in [0, 255]

    Returns:
        uint8 array of 0/1 values, 8 per character

    Raises:
        InvalidArgumentError: If a character is outside the single-byte range
    """
    InputValidator.validate_text(text)

    symbols = np.fromiter((ord(char) for char in text), dtype=np.uint8, count=len(text))
    return np.unpackbits(symbols)


def bits_to_text(bits: BitsLike) -> str:
    """Convert a bit sequence back to text.

    Args:
        bits: Sequence of 0/1 values whose length is a multiple of 8

    Returns:
        Decoded text, one character per 8-bit group

    Raises:
        InvalidArgumentError: If the length is not a multiple of 8 or a value
            other than 0 or 1 is present
    """
    try:
        bit_array = np.asarray(bits)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"bits must be array-like: {e}", "bits", bits)

    InputValidator.validate_bits(bit_array)

    symbols = np.packbits(bit_array.astype(np.uint8))
    return "".join(chr(symbol) for symbol in symbols)


def format_bits(bits: BitsLike) -> str:
    """Render bits as space-separated 8-bit groups, e.g. ``"01000001 01000010"``."""
    digits = "".join(str(int(bit)) for bit in np.asarray(bits).ravel())
    return " ".join(
        digits[i : i + BITS_PER_SYMBOL] for i in range(0, len(digits), BITS_PER_SYMBOL)
    )

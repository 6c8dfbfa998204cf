"""
Walsh-Hadamard code generation.

The order-k matrix is built by doubling the order-(k-1) matrix: the top half
repeats each row twice, the bottom half appends each row's negation. Starting
from [[1]], every row of the result is orthogonal to every other row.
"""

import logging

import numpy as np

from .error_handling import DomainError, InvalidArgumentError
from .models import CodeMatrix
from .validation import InputValidator

logger = logging.getLogger(__name__)


class WalshCodeGenerator:
    """Generator for orthogonal Walsh-Hadamard code matrices."""

    def __init__(self):
        self._cache = {}

    def generate_matrix(self, order: int) -> CodeMatrix:
        """Generate the Walsh code matrix of the given order.

        Args:
            order: Non-negative exponent k; the result is 2^k x 2^k

        Returns:
            CodeMatrix whose rows are pairwise orthogonal +1/-1 codes

        Raises:
            InvalidArgumentError: If order is negative or not an integer
        """
        order = InputValidator.validate_order(order)

        if order in self._cache:
            return self._cache[order]

        codes = np.ones((1, 1), dtype=np.int8)
        for _ in range(order):
            codes = np.block([[codes, codes], [codes, -codes]])

        matrix = CodeMatrix(order=order, codes=codes)
        self._cache[order] = matrix

        logger.debug(f"Generated Walsh matrix of order {order} ({matrix.num_codes} codes)")
        return matrix

    def generate_code(self, order: int, index: int = 0) -> np.ndarray:
        """Return a single code (row) of the order-``order`` matrix.

        Args:
            order: Matrix order
            index: Row index, defaults to the first row

        Raises:
            InvalidArgumentError: If order is invalid or index is out of range
        """
        matrix = self.generate_matrix(order)
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise InvalidArgumentError("index must be an integer", "index", index)
        if not 0 <= index < matrix.num_codes:
            raise InvalidArgumentError(
                f"Code index {index} out of range [0, {matrix.num_codes - 1}]", "index", index
            )
        return matrix.get_code(int(index))

    @staticmethod
    def order_for_station_count(station_count: int) -> int:
        """Smallest order whose matrix has a code for every station.

        Equivalent to ceil(log2(station_count)), computed exactly.

        Raises:
            DomainError: If station_count is less than 1
        """
        if station_count < 1:
            raise DomainError(
                f"Cannot size a code matrix for {station_count} stations "
                "(log2 is undefined for counts below 1)",
                station_count=station_count,
            )
        return (station_count - 1).bit_length()

    def clear_cache(self) -> None:
        self._cache.clear()


def generate_walsh_matrix(order: int) -> CodeMatrix:
    """Generate a Walsh code matrix with a fresh generator."""
    return WalshCodeGenerator().generate_matrix(order)

"""
Zero-lag correlation between spreading codes and received signals.

Walsh codes are chip-synchronous, so every correlation here is a plain dot
product; no lag search is needed.
"""

import logging
from typing import List, Union

import numpy as np

logger = logging.getLogger(__name__)


class CorrelationAnalyzer:
    """Dot-product correlator for codes and composite signals."""

    def compute_correlation(self, sig1: np.ndarray, sig2: np.ndarray) -> int:
        """Compute the dot product of two equal-length integer signals.

        Args:
            sig1: First signal array
            sig2: Second signal array

        Returns:
            Dot product as a Python int

        Raises:
            ValueError: If the signals differ in length
        """
        sig1 = np.asarray(sig1)
        sig2 = np.asarray(sig2)
        if sig1.shape != sig2.shape:
            raise ValueError(
                f"Signals must have the same shape, got {sig1.shape} and {sig2.shape}"
            )
        return int(np.dot(sig1.astype(np.int64), sig2.astype(np.int64)))

    def compute_normalized_correlation(self, sig1: np.ndarray, sig2: np.ndarray) -> float:
        """Dot product divided by the product of the signal norms (0 for silent signals)."""
        dot = self.compute_correlation(sig1, sig2)
        norm = float(np.linalg.norm(sig1) * np.linalg.norm(sig2))
        if norm == 0:
            return 0.0
        return dot / norm

    def compute_correlation_matrix(
        self, codes: Union[np.ndarray, List[np.ndarray]]
    ) -> np.ndarray:
        """Compute the Gram matrix of a code set.

        Args:
            codes: 2-D array or list of equal-length codes

        Returns:
            Integer matrix whose (i, j) entry is codes[i] . codes[j]
        """
        code_array = np.asarray(codes, dtype=np.int64)
        if code_array.ndim != 2:
            raise ValueError("codes must form a 2-dimensional array")
        return code_array @ code_array.T

    def despread(self, composite: np.ndarray, codes: np.ndarray) -> np.ndarray:
        """Correlate one composite signal against every code.

        Args:
            composite: Summed signal for one time slot, length equal to the code length
            codes: 2-D array with one code per row

        Returns:
            Integer array with one correlation per code
        """
        composite = np.asarray(composite, dtype=np.int64)
        code_array = np.asarray(codes, dtype=np.int64)
        if code_array.ndim != 2 or code_array.shape[1] != composite.shape[0]:
            raise ValueError(
                f"Composite signal of length {composite.shape[0]} does not match "
                f"codes of shape {code_array.shape}"
            )
        return code_array @ composite

"""
Orthogonality testing for Walsh code sets.

This module checks code pairs and whole code matrices for exact orthogonality
and renders a text report of the result.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import numpy as np

from .correlation_analyzer import CorrelationAnalyzer
from .models import CodeMatrix

logger = logging.getLogger(__name__)


class OrthogonalityTester:
    """Exact orthogonality checks for +1/-1 code sets."""

    def __init__(self, correlation_analyzer: Optional[CorrelationAnalyzer] = None):
        """Initialize orthogonality tester.

        Args:
            correlation_analyzer: Correlator to use. If None, creates a new one.
        """
        self.correlation_analyzer = correlation_analyzer or CorrelationAnalyzer()

    def test_code_pair_orthogonality(self, code1: np.ndarray, code2: np.ndarray) -> Dict[str, Any]:
        """Test orthogonality between two codes.

        Args:
            code1: First code
            code2: Second code

        Returns:
            Dictionary with the dot product, normalized correlation and verdict
        """
        dot_product = self.correlation_analyzer.compute_correlation(code1, code2)
        normalized = self.correlation_analyzer.compute_normalized_correlation(code1, code2)

        return {
            "dot_product": dot_product,
            "normalized_correlation": normalized,
            "is_orthogonal": dot_product == 0,
        }

    def test_code_set_orthogonality(
        self, codes: Union[CodeMatrix, np.ndarray, List[np.ndarray]]
    ) -> Dict[str, Any]:
        """Test a complete code set for exact orthogonality.

        A set is orthogonal when every off-diagonal entry of its Gram matrix is
        zero and every diagonal entry equals the code length.

        Args:
            codes: CodeMatrix, 2-D array or list of codes

        Returns:
            Dictionary with comprehensive orthogonality analysis
        """
        code_array = codes.codes if isinstance(codes, CodeMatrix) else np.asarray(codes)
        num_codes = code_array.shape[0]
        if num_codes < 1:
            raise ValueError("Need at least 1 code for orthogonality testing")

        code_length = code_array.shape[1]
        gram = self.correlation_analyzer.compute_correlation_matrix(code_array)

        diagonal = np.diag(gram)
        cross_correlations = gram[np.triu_indices(num_codes, k=1)]

        orthogonal_pairs = int(np.count_nonzero(cross_correlations == 0))
        total_pairs = cross_correlations.size

        max_cross_correlation = (
            int(np.max(np.abs(cross_correlations))) if cross_correlations.size else 0
        )
        diagonal_ok = bool(np.all(diagonal == code_length))

        return {
            "num_codes": num_codes,
            "code_length": code_length,
            "correlation_matrix": gram,
            "max_cross_correlation": max_cross_correlation,
            "orthogonal_pairs": orthogonal_pairs,
            "total_pairs": total_pairs,
            "diagonal_equals_length": diagonal_ok,
            "is_set_orthogonal": diagonal_ok and max_cross_correlation == 0,
        }

    def generate_orthogonality_report(
        self, codes: Union[CodeMatrix, np.ndarray, List[np.ndarray]]
    ) -> str:
        """Generate a text orthogonality report for a code set.

        Args:
            codes: CodeMatrix, 2-D array or list of codes

        Returns:
            Formatted report string
        """
        result = self.test_code_set_orthogonality(codes)

        report = []
        report.append("=" * 60)
        report.append("WALSH CODE ORTHOGONALITY REPORT")
        report.append("=" * 60)
        if isinstance(codes, CodeMatrix):
            report.append(f"Matrix order: {codes.order}")
        report.append(f"Number of codes: {result['num_codes']}")
        report.append(f"Code length: {result['code_length']}")
        report.append("")

        report.append("CORRELATION STATISTICS:")
        report.append(f"  Maximum |cross-correlation|: {result['max_cross_correlation']}")
        report.append(f"  Orthogonal pairs: {result['orthogonal_pairs']}/{result['total_pairs']}")
        report.append(
            f"  Auto-correlation equals code length: "
            f"{'YES' if result['diagonal_equals_length'] else 'NO'}"
        )
        report.append(f"  Set is orthogonal: {'YES' if result['is_set_orthogonal'] else 'NO'}")
        report.append("")

        report.append("CODES:")
        code_array = codes.codes if isinstance(codes, CodeMatrix) else np.asarray(codes)
        for i, code in enumerate(code_array):
            chips = " ".join("+" if chip > 0 else "-" for chip in code)
            report.append(f"  {i:3d}: {chips}")

        report.append("=" * 60)

        return "\n".join(report)

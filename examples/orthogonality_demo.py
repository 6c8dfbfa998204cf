#!/usr/bin/env python3
"""
Orthogonality Testing Demo

This script demonstrates Walsh code generation and the orthogonality
checks used to verify that every station can be separated from the sum.
"""

import numpy as np

from cdma_walsh_simulator import (
    CorrelationAnalyzer,
    OrthogonalityTester,
    WalshCodeGenerator,
)


def demonstrate_code_generation():
    """Show how the matrix grows by doubling."""
    print("=" * 60)
    print("WALSH CODE GENERATION")
    print("=" * 60)

    generator = WalshCodeGenerator()
    for order in range(4):
        matrix = generator.generate_matrix(order)
        print(f"\nOrder {order} ({matrix.num_codes} codes of length {matrix.code_length}):")
        for code in matrix:
            print("   " + " ".join(f"{chip:+d}" for chip in code))

    print("\nOrders needed for a given number of stations:")
    for count in (1, 2, 3, 5, 8, 9, 100):
        order = WalshCodeGenerator.order_for_station_count(count)
        print(f"   {count:3d} stations -> order {order} ({1 << order} codes)")


def demonstrate_correlation_analysis():
    """Demonstrate correlation of codes and composite signals."""
    print("\n" + "=" * 60)
    print("CORRELATION ANALYSIS DEMONSTRATION")
    print("=" * 60)

    analyzer = CorrelationAnalyzer()
    codes = WalshCodeGenerator().generate_matrix(2).codes

    print("\n1. Cross-correlation between Walsh codes:")
    for i in range(len(codes)):
        for j in range(i + 1, len(codes)):
            print(f"   Code {i} vs Code {j}: {analyzer.compute_correlation(codes[i], codes[j])}")

    print("\n2. Despreading a composite signal:")
    levels = np.array([1, -1, 0, 1])
    composite = levels @ codes.astype(np.int64)
    print(f"   Station levels:   {levels.tolist()}")
    print(f"   Composite signal: {composite.tolist()}")
    print(f"   Correlations:     {analyzer.despread(composite, codes).tolist()}")


def demonstrate_orthogonality_testing():
    """Compare a Walsh set with a non-orthogonal one."""
    print("\n" + "=" * 60)
    print("ORTHOGONALITY TESTING DEMONSTRATION")
    print("=" * 60)

    tester = OrthogonalityTester()

    print(tester.generate_orthogonality_report(WalshCodeGenerator().generate_matrix(3)))

    non_orthogonal = np.array([[1, 1, 1, 1], [1, 1, 1, -1], [1, -1, 1, -1]])
    result = tester.test_code_set_orthogonality(non_orthogonal)
    print("\nHand-made code set:")
    print(f"   Max |cross-correlation|: {result['max_cross_correlation']}")
    print(f"   Orthogonal pairs: {result['orthogonal_pairs']}/{result['total_pairs']}")
    print(f"   Set is orthogonal: {result['is_set_orthogonal']}")


def main():
    """Main demonstration function."""
    demonstrate_code_generation()
    demonstrate_correlation_analysis()
    demonstrate_orthogonality_testing()


if __name__ == "__main__":
    main()

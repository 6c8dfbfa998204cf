#!/usr/bin/env python3
"""
Error Handling Demonstration for the CDMA Walsh Simulator

This script demonstrates the three error kinds raised by the simulator,
result values from attempt(), and the diagnostics kept by ErrorHandler.
"""

from cdma_walsh_simulator import CDMAEngine, ErrorHandler, attempt, bits_to_text, text_to_bits
from cdma_walsh_simulator.error_handling import create_error_context


def demonstrate_error_kinds():
    """Trigger one error of each kind."""
    print("=" * 60)
    print("ERROR KIND DEMONSTRATION")
    print("=" * 60)

    engine = CDMAEngine()

    failing_calls = [
        ("text_to_bits", lambda: text_to_bits("Привет")),
        ("bits_to_text", lambda: bits_to_text([0, 1, 1])),
        ("generate_walsh_codes", engine.generate_walsh_codes),
        ("transmit_data", engine.transmit_data),
    ]

    error_handler = ErrorHandler()
    for operation, call in failing_calls:
        result = attempt(call)
        print(f"\n{operation}():")
        print(f"  Kind: {result.kind.value}")
        print(f"  Message: {result.error.message}")

        report = error_handler.handle_error(
            result.error, create_error_context(operation, "ErrorDemo")
        )
        print(f"  Severity: {report.severity.value}")
        print(f"  Recoverable: {report.recoverable}")

    print()
    print(error_handler.generate_diagnostic_report())


def demonstrate_results():
    """Show Ok values for successful calls."""
    print("\n" + "=" * 60)
    print("RESULT VALUES")
    print("=" * 60)

    result = attempt(text_to_bits, "OK")
    print(f"attempt(text_to_bits, 'OK') -> is_ok={result.is_ok}, {result.unwrap().tolist()}")


def main():
    """Main demonstration function."""
    demonstrate_error_kinds()
    demonstrate_results()


if __name__ == "__main__":
    main()

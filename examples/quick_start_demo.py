#!/usr/bin/env python3
"""
Quick start demonstration of the CDMA Walsh Simulator.

This example shows the simplest way to get started with the system,
demonstrating the most common use cases in just a few lines of code.

Run with: uv run python examples/quick_start_demo.py
"""

import io

from cdma_walsh_simulator import (
    CDMACommunicationApp,
    CDMAEngine,
    format_bits,
    simulate_transmission,
)


def quick_start_example():
    """Demonstrate the quickest way to use the system."""
    print("🚀 CDMA Walsh Simulator - Quick Start")
    print("=" * 50)

    # Method 1: Use convenience functions (simplest)
    print("\n1️⃣ Using convenience functions:")

    decoded = simulate_transmission([("A", "Hi"), ("B", "Hello"), ("C", "CDMA")])
    for name, text in decoded:
        print(f"✓ {name} says: {text}")

    # Method 2: Drive the engine phase by phase (more control)
    print("\n2️⃣ Using the engine directly:")

    engine = CDMAEngine()
    engine.add_station("Alice", "ping")
    engine.add_station("Bob", "pong!")
    engine.generate_walsh_codes()
    print(f"✓ Assigned codes of length {engine.code_length} to {engine.station_count} stations")

    engine.transmit_data()
    print(f"✓ Transmitted {engine.max_length} slots")
    print(f"✓ First composite signal: {engine.composite_signals[0].tolist()}")

    for decoded_word in engine.get_decoded_words():
        print(f"✓ {decoded_word.name}: {format_bits(decoded_word.bits)} -> {decoded_word.text!r}")

    # Method 3: Feed the interactive loop from any text stream
    print("\n3️⃣ Using the interactive application:")

    app = CDMACommunicationApp(
        CDMAEngine(), input_stream=io.StringIO("X one\nY two\nexit\n"), output_stream=io.StringIO()
    )
    for name, text in app.run():
        print(f"✓ {name} says: {text}")

    print("\n✅ Quick start completed! The system is working correctly.")
    print("\nNext steps:")
    print("• Check examples/orthogonality_demo.py for code matrix analysis")
    print("• Modify config.toml to customize parameters")
    print("• Run cdma-sim --report for the interactive simulator")


if __name__ == "__main__":
    quick_start_example()

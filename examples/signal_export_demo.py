#!/usr/bin/env python3
"""
Run Export and Visualization Demo

This example demonstrates exporting a finished CDMA run to JSON and NumPy
files, loading it back, and plotting the code matrix and composite signals.
"""

import tempfile
from pathlib import Path

from cdma_walsh_simulator import (
    CDMAEngine,
    TransmissionExporter,
    TransmissionLoader,
    TransmissionVisualizer,
)


def create_sample_run():
    """Run a small three-station simulation."""
    print("Running sample simulation...")

    engine = CDMAEngine()
    for name, word in [("A", "Walsh"), ("B", "code"), ("C", "hi")]:
        engine.add_station(name, word)
    engine.generate_walsh_codes()
    engine.transmit_data()

    summary = engine.get_summary()
    print(f"✓ {summary.num_stations} stations, {summary.num_slots} slots")
    print(f"✓ All words recovered: {summary.all_recovered}")
    return engine


def demonstrate_export(engine, output_dir):
    print("\nExporting run...")
    exporter = TransmissionExporter(output_dir)

    json_path = exporter.export_run(engine, "demo_run", format="json")
    npz_path = exporter.export_run(engine, "demo_run", format="numpy")
    print(f"✓ JSON export:  {json_path.name}")
    print(f"✓ NumPy export: {npz_path.name}")

    data = TransmissionLoader().load_run(json_path)
    print(f"✓ Loaded run with order {data['order']}, composite shape {data['composite_signals'].shape}")
    for station in data["stations"]:
        print(f"   {station['name']}: {station['word']!r} -> {station['decoded_text']!r}")


def demonstrate_visualization(engine, output_dir):
    print("\nCreating plots...")
    visualizer = TransmissionVisualizer()

    visualizer.plot_code_matrix(engine.code_matrix, save_path=output_dir / "code_matrix.png")
    visualizer.plot_composite_signal(
        engine.composite_signals, save_path=output_dir / "composite_signals.png"
    )
    visualizer.plot_composite_signal(
        engine.composite_signals, slot=0, save_path=output_dir / "composite_slot0.png"
    )
    visualizer.plot_correlation_matrix(
        engine.code_matrix, save_path=output_dir / "correlation_matrix.png"
    )

    for path in sorted(output_dir.glob("*.png")):
        print(f"✓ Saved {path.name}")


def main():
    """Main demonstration function."""
    print("=" * 60)
    print("CDMA RUN EXPORT AND VISUALIZATION DEMO")
    print("=" * 60)

    engine = create_sample_run()

    with tempfile.TemporaryDirectory() as temp_dir:
        output_dir = Path(temp_dir)
        demonstrate_export(engine, output_dir)
        demonstrate_visualization(engine, output_dir)


if __name__ == "__main__":
    main()

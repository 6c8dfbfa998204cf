"""
Run export and visualization utilities for CDMA simulations.

This module writes completed runs to JSON or NumPy files, loads those exports
back, and plots code matrices, composite signals and code correlations.
"""

import json
import zipfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from .cdma_engine import CDMAEngine
from .correlation_analyzer import CorrelationAnalyzer
from .models import CodeMatrix


class TransmissionExporter:
    """Handles exporting completed CDMA runs to various file formats."""

    SUPPORTED_FORMATS = ("json", "numpy")

    def __init__(self, output_dir: Optional[Union[str, Path]] = None):
        """Initialize the exporter.

        Args:
            output_dir: Directory for exported files. If None, uses current directory.
        """
        self.output_dir = Path(output_dir) if output_dir else Path.cwd()
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_run(self, engine: CDMAEngine, filename: str, format: str = "json") -> Path:
        """Export a transmitted run to file.

        Args:
            engine: Engine that has completed transmit_data()
            filename: Base filename (without extension)
            format: Export format ("json" or "numpy")

        Returns:
            Path to exported file

        Raises:
            ValueError: If format is not supported
            OutOfSequenceError: If the engine has not transmitted yet
        """
        if format not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {format}. Supported: {list(self.SUPPORTED_FORMATS)}"
            )

        summary = engine.get_summary()
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base_filename = f"{filename}_{timestamp}"

        if format == "json":
            return self._export_json(engine, summary, base_filename)
        return self._export_numpy(engine, summary, base_filename)

    def _export_json(self, engine: CDMAEngine, summary, filename: str) -> Path:
        """Export the run as a single JSON document."""
        filepath = self.output_dir / f"{filename}.json"

        stations = []
        for decoded in summary.decoded_words:
            station = engine.get_station(decoded.name)
            stations.append(
                {
                    "name": station.name,
                    "word": station.word,
                    "bits": station.bits.tolist(),
                    "walsh_code": station.walsh_code.tolist(),
                    "decoded_bits": engine.get_decoded_bits(station.name).tolist(),
                    "decoded_text": decoded.text,
                    "recovered": decoded.matches_original,
                }
            )

        export_data = {
            "order": summary.order,
            "code_length": summary.code_length,
            "num_slots": summary.num_slots,
            "completed_at": summary.completed_at.isoformat(),
            "all_recovered": summary.all_recovered,
            "stations": stations,
            "composite_signals": engine.composite_signals.tolist(),
            "metadata": summary.metadata,
        }

        with open(filepath, "w") as f:
            json.dump(export_data, f, indent=2)

        return filepath

    def _export_numpy(self, engine: CDMAEngine, summary, filename: str) -> Path:
        """Export the run as compressed NumPy arrays."""
        filepath = self.output_dir / f"{filename}.npz"

        decoded_bits = np.zeros((summary.num_stations, summary.num_slots), dtype=np.uint8)
        for i, name in enumerate(summary.station_names):
            decoded_bits[i] = engine.get_decoded_bits(name)

        np.savez_compressed(
            filepath,
            code_matrix=engine.code_matrix.codes,
            composite_signals=engine.composite_signals,
            decoded_bits=decoded_bits,
            station_names=np.array(summary.station_names),
            decoded_text=np.array([decoded.text for decoded in summary.decoded_words]),
            completed_at=summary.completed_at.isoformat(),
        )
        return filepath


class TransmissionLoader:
    """Loads exported runs."""

    def load_run(self, filepath: Union[str, Path]) -> Dict[str, Any]:
        """Load a run export written by TransmissionExporter.

        Args:
            filepath: Path to a ``.json`` or ``.npz`` export

        Returns:
            Export contents, with codes and composite signals as NumPy arrays

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is not a valid run export
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Run export not found: {filepath}")

        if filepath.suffix == ".npz":
            return self._load_numpy(filepath)

        try:
            with open(filepath, "r") as f:
                data = json.load(f)

            data["composite_signals"] = np.array(data["composite_signals"], dtype=np.int64)
            for station in data["stations"]:
                station["walsh_code"] = np.array(station["walsh_code"], dtype=np.int8)
            return data

        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise ValueError(f"Invalid run export format: {e}")

    def _load_numpy(self, filepath: Path) -> Dict[str, Any]:
        try:
            with np.load(filepath) as archive:
                return {
                    "code_matrix": archive["code_matrix"],
                    "composite_signals": archive["composite_signals"],
                    "decoded_bits": archive["decoded_bits"],
                    "station_names": archive["station_names"].tolist(),
                    "decoded_text": archive["decoded_text"].tolist(),
                    "completed_at": str(archive["completed_at"]),
                }
        except (KeyError, ValueError, OSError, zipfile.BadZipFile) as e:
            raise ValueError(f"Invalid run export format: {e}")


class TransmissionVisualizer:
    """Provides visualization tools for CDMA runs."""

    def plot_code_matrix(
        self,
        code_matrix: CodeMatrix,
        title: str = "Walsh Code Matrix",
        save_path: Optional[Union[str, Path]] = None,
    ) -> Figure:
        """Plot a code matrix as a +1/-1 heatmap.

        Args:
            code_matrix: Matrix to plot
            title: Plot title
            save_path: Optional path to save the plot

        Returns:
            Matplotlib figure
        """
        fig, ax = plt.subplots(figsize=(6, 6))
        image = ax.imshow(code_matrix.codes, cmap="RdBu", vmin=-1, vmax=1)
        ax.set_xlabel("Chip")
        ax.set_ylabel("Code index")
        ax.set_title(f"{title} (order {code_matrix.order})")
        fig.colorbar(image, ax=ax, ticks=[-1, 1])

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches="tight")

        return fig

    def plot_composite_signal(
        self,
        composite_signals: np.ndarray,
        slot: Optional[int] = None,
        title: str = "Composite Signal",
        save_path: Optional[Union[str, Path]] = None,
    ) -> Figure:
        """Plot composite signals as chip sequences.

        Args:
            composite_signals: Array with one composite signal per slot
            slot: Slot to plot; plots all slots end to end if None
            title: Plot title
            save_path: Optional path to save the plot

        Returns:
            Matplotlib figure
        """
        composite_signals = np.asarray(composite_signals)
        if slot is not None:
            samples = composite_signals[slot]
            title = f"{title} - slot {slot}"
        else:
            samples = composite_signals.ravel()

        fig, ax = plt.subplots(figsize=(10, 4))
        ax.step(np.arange(len(samples)), samples, where="post")
        if slot is None and composite_signals.ndim == 2 and composite_signals.shape[1] > 0:
            for boundary in range(0, samples.size + 1, composite_signals.shape[1]):
                ax.axvline(boundary, color="gray", alpha=0.3, linewidth=0.8)
        ax.set_xlabel("Chip")
        ax.set_ylabel("Amplitude")
        ax.set_title(title)
        ax.grid(True, alpha=0.3)

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches="tight")

        return fig

    def plot_correlation_matrix(
        self,
        codes: Union[CodeMatrix, np.ndarray],
        title: str = "Code Correlation Matrix",
        save_path: Optional[Union[str, Path]] = None,
    ) -> Figure:
        """Plot the Gram matrix of a code set.

        Args:
            codes: CodeMatrix or 2-D array of codes
            title: Plot title
            save_path: Optional path to save the plot

        Returns:
            Matplotlib figure
        """
        code_array = codes.codes if isinstance(codes, CodeMatrix) else np.asarray(codes)
        gram = CorrelationAnalyzer().compute_correlation_matrix(code_array)

        fig, ax = plt.subplots(figsize=(6, 6))
        image = ax.imshow(gram, cmap="viridis")
        ax.set_xlabel("Code index")
        ax.set_ylabel("Code index")
        ax.set_title(title)
        fig.colorbar(image, ax=ax, label="Dot product")

        if gram.shape[0] <= 16:
            for i in range(gram.shape[0]):
                for j in range(gram.shape[1]):
                    ax.text(j, i, str(gram[i, j]), ha="center", va="center", color="white")

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches="tight")

        return fig

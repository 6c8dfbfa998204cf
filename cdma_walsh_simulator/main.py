"""
Main interface and high-level API for the CDMA Walsh simulator.

This module provides the interactive application loop that collects stations
from a line-oriented input stream, convenience functions for running a whole
simulation in one call, and the ``cdma-sim`` console entry point.
"""

import argparse
import logging
import sys
from typing import Iterable, List, Optional, TextIO, Tuple

from .cdma_engine import CDMAEngine, DataProcessor
from .config_manager import ConfigurationError, get_config
from .error_handling import (
    CDMAError,
    ErrorHandler,
    attempt,
    create_error_context,
    handle_error,
)
from .signal_export import TransmissionExporter
from .validation import InputValidator

logger = logging.getLogger(__name__)


class CDMACommunicationApp:
    """Interactive driver for a DataProcessor.

    Reads one ``<name> <word>`` pair per line until a blank line, end of
    input, or the exit token, then runs code assignment, transmission and
    decoding once each and writes one ``<name> says: <text>`` line per station.
    """

    def __init__(
        self,
        data_processor: DataProcessor,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        config_file: Optional[str] = None,
    ):
        """Initialize the application.

        Args:
            data_processor: Simulation the collected stations are fed into
            input_stream: Line source (defaults to stdin)
            output_stream: Destination for prompts and results (defaults to stdout)
            config_file: Path to configuration file (uses default if None)
        """
        self.data_processor = data_processor
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.output_stream = output_stream if output_stream is not None else sys.stdout
        self._error_handler = ErrorHandler()

        try:
            cli_config = get_config(config_file).get_cli_config()
        except (ConfigurationError, Exception) as e:
            cli_config = {
                "exit_token": "exit",
                "prompt": "Enter a station name and a word separated by a space "
                "('exit' to finish):",
                "output_format": "{name} says: {text}",
            }
            logger.warning(f"Could not load CLI configuration: {e}. Using defaults")

        self.exit_token = cli_config["exit_token"].strip().lower()
        self.prompt = cli_config["prompt"]
        self.output_format = cli_config["output_format"]

    def _write(self, message: str) -> None:
        self.output_stream.write(message + "\n")

    def _is_end_of_input(self, line: str) -> bool:
        stripped = line.strip()
        return not stripped or stripped.lower() == self.exit_token

    def _register_line(self, line: str) -> None:
        name, word = InputValidator.parse_station_line(line)
        self.data_processor.add_station(name, word)

    def collect_stations(self) -> int:
        """Read station lines and register them.

        Invalid lines are reported to the output stream and skipped.

        Returns:
            Number of lines registered successfully

        Raises:
            CDMAError: If registration fails for a reason other than bad input
        """
        self._write(self.prompt)

        registered = 0
        for line in self.input_stream:
            if self._is_end_of_input(line):
                break

            result = attempt(self._register_line, line)
            if result.is_ok:
                registered += 1
                continue

            context = create_error_context(
                "collect_stations", "CDMACommunicationApp", line=line.rstrip("\n")
            )
            report = self._error_handler.handle_error(result.error, context)
            if not report.recoverable:
                result.unwrap()
            logger.warning(f"Skipping input line {line.rstrip()!r}: {result.error.message}")
            self._write(f"Error: {result.error.message}")

        return registered

    def run(self) -> List[Tuple[str, str]]:
        """Collect stations, then assign codes, transmit and show decoded words.

        Returns:
            (station name, decoded text) pairs

        Raises:
            DomainError: If no station was registered
            CDMAError: For any other non-input failure
        """
        registered = self.collect_stations()
        logger.info(f"Collected {registered} station entries")

        self.data_processor.generate_walsh_codes()
        self.data_processor.transmit_data()
        decoded_words = self.data_processor.display_decoded_words()

        for line in format_decoded_words(decoded_words, self.output_format):
            self._write(line)

        return decoded_words


def format_decoded_words(
    decoded_words: Iterable[Tuple[str, str]], output_format: str = "{name} says: {text}"
) -> List[str]:
    """Render (name, text) pairs as output lines."""
    return [output_format.format(name=name, text=text) for name, text in decoded_words]


# Convenience functions for quick access
def create_engine(config_file: Optional[str] = None, **kwargs) -> CDMAEngine:
    """Create a CDMAEngine with default settings.

    Args:
        config_file: Path to configuration file
        **kwargs: Additional arguments passed to CDMAEngine

    Returns:
        Engine in the registration phase
    """
    return CDMAEngine(config_file=config_file, **kwargs)


def simulate_transmission(
    stations: Iterable[Tuple[str, str]], config_file: Optional[str] = None, **kwargs
) -> List[Tuple[str, str]]:
    """Run a complete simulation for the given stations.

    Args:
        stations: (name, word) pairs, registered in order
        config_file: Path to configuration file
        **kwargs: Additional arguments passed to CDMAEngine

    Returns:
        (station name, decoded text) pairs
    """
    engine = create_engine(config_file, **kwargs)
    for name, word in stations:
        engine.add_station(name, word)
    engine.generate_walsh_codes()
    engine.transmit_data()
    return engine.display_decoded_words()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cdma-sim",
        description="Simulate a CDMA channel with Walsh-Hadamard spreading codes",
    )
    parser.add_argument("--config", help="Path to configuration file (default: config.toml)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    parser.add_argument(
        "--report", action="store_true", help="Print the orthogonality report of the code matrix"
    )
    parser.add_argument("--export", action="store_true", help="Export the finished run to disk")
    parser.add_argument(
        "--export-format", choices=["json", "numpy"], help="Override the configured export format"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point."""
    args = build_parser().parse_args(argv)

    try:
        config_manager = get_config(args.config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logging_config = config_manager.get_logging_config()
    logging.basicConfig(
        level=args.log_level or logging_config["level"].upper(),
        format=logging_config["format"],
    )

    engine = CDMAEngine(config_file=args.config)
    app = CDMACommunicationApp(engine, config_file=args.config)

    try:
        app.run()
    except CDMAError as e:
        handle_error(e, create_error_context("run", "main"))
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if args.report:
        print(engine.orthogonality_tester.generate_orthogonality_report(engine.code_matrix))

    if args.export:
        export_config = config_manager.get_export_config()
        exporter = TransmissionExporter(export_config["output_dir"])
        filepath = exporter.export_run(
            engine, "cdma_run", args.export_format or export_config["default_format"]
        )
        print(f"Run exported to {filepath}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
CDMA Walsh Simulator Package

Simulates a code-division multiple access channel: each station spreads its
bits with an orthogonal Walsh-Hadamard code, all spread signals are summed per
time slot, and every receiver recovers its own bits by correlation.
"""

from .bit_codec import bits_to_text, format_bits, text_to_bits
from .cdma_engine import CDMAEngine, DataProcessor
from .config_manager import ConfigurationError, ConfigurationManager, get_config
from .correlation_analyzer import CorrelationAnalyzer
from .error_handling import (
    CDMAError,
    DomainError,
    Err,
    ErrorHandler,
    ErrorKind,
    InvalidArgumentError,
    Ok,
    OutOfSequenceError,
    attempt,
)
from .main import (
    CDMACommunicationApp,
    create_engine,
    format_decoded_words,
    simulate_transmission,
)
from .models import CodeMatrix, DecodedWord, EnginePhase, Station, TransmissionSummary
from .orthogonality_tester import OrthogonalityTester
from .signal_export import TransmissionExporter, TransmissionLoader, TransmissionVisualizer
from .validation import InputValidator
from .walsh_code_generator import WalshCodeGenerator, generate_walsh_matrix

__version__ = "0.1.0"
__all__ = [
    # Core data models
    "CodeMatrix",
    "Station",
    "DecodedWord",
    "EnginePhase",
    "TransmissionSummary",
    # Codec
    "text_to_bits",
    "bits_to_text",
    "format_bits",
    # Code generation and verification
    "WalshCodeGenerator",
    "generate_walsh_matrix",
    "CorrelationAnalyzer",
    "OrthogonalityTester",
    # Engine
    "DataProcessor",
    "CDMAEngine",
    # Errors and validation
    "CDMAError",
    "ErrorKind",
    "InvalidArgumentError",
    "DomainError",
    "OutOfSequenceError",
    "ErrorHandler",
    "Ok",
    "Err",
    "attempt",
    "InputValidator",
    # Configuration
    "ConfigurationManager",
    "ConfigurationError",
    "get_config",
    # Export and visualization
    "TransmissionExporter",
    "TransmissionLoader",
    "TransmissionVisualizer",
    # Main interface (primary API)
    "CDMACommunicationApp",
    "create_engine",
    "format_decoded_words",
    "simulate_transmission",
]

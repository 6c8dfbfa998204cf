"""
Error handling system for the CDMA Walsh simulator.

This module defines the closed set of failure kinds raised by the simulator,
the exception hierarchy that carries them, result values for callers that
prefer tagged results over exceptions, and a centralized error handler that
classifies, logs and records failures for diagnostic reporting.
"""

import logging
import sys
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar, Union

import numpy as np

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorKind(Enum):
    """Failure kinds raised by simulator operations."""

    INVALID_ARGUMENT = "invalid_argument"
    DOMAIN_ERROR = "domain_error"
    OUT_OF_SEQUENCE = "out_of_sequence"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Context information for error handling."""

    operation: str
    component: str
    parameters: Dict[str, Any]
    timestamp: datetime
    system_info: Dict[str, Any]


@dataclass
class ErrorReport:
    """Record of a handled error."""

    error_id: str
    kind: Optional[ErrorKind]
    severity: ErrorSeverity
    message: str
    context: ErrorContext
    traceback_info: str
    recoverable: bool
    diagnostic_data: Dict[str, Any] = field(default_factory=dict)


class CDMAError(Exception):
    """Base exception class for simulator errors."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.severity = severity
        self.context = context
        self.timestamp = datetime.now()


class InvalidArgumentError(CDMAError, ValueError):
    """Invalid input to a codec, generator or engine operation."""

    def __init__(self, message: str, argument: str = "", value: Any = None):
        super().__init__(message, ErrorKind.INVALID_ARGUMENT, ErrorSeverity.LOW)
        self.argument = argument
        self.value = value


class DomainError(CDMAError, ArithmeticError):
    """Operation is undefined for the current engine contents."""

    def __init__(self, message: str, station_count: int = 0):
        super().__init__(message, ErrorKind.DOMAIN_ERROR, ErrorSeverity.HIGH)
        self.station_count = station_count


class OutOfSequenceError(CDMAError, RuntimeError):
    """Engine operation called outside its phase."""

    def __init__(self, message: str, operation: str = "", current_phase: str = ""):
        super().__init__(message, ErrorKind.OUT_OF_SEQUENCE, ErrorSeverity.HIGH)
        self.operation = operation
        self.current_phase = current_phase


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful operation result."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed operation result carrying the raised simulator error."""

    error: CDMAError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def unwrap(self):
        raise self.error


Result = Union[Ok, Err]


def attempt(func: Callable[..., T], *args, **kwargs) -> Result:
    """Call ``func`` and wrap the outcome in ``Ok`` or ``Err``.

    Only simulator errors are captured; anything else propagates.

    Args:
        func: Callable to invoke
        *args: Positional arguments for ``func``
        **kwargs: Keyword arguments for ``func``

    Returns:
        Ok(value) on success, Err(error) on a CDMAError
    """
    try:
        return Ok(func(*args, **kwargs))
    except CDMAError as e:
        return Err(e)


class ErrorHandler:
    """Centralized error classification, logging and bookkeeping.

    Invalid-argument failures are treated as recoverable input problems; domain
    and sequencing failures indicate a caller bug and are reported as fatal.
    """

    MAX_HISTORY = 1000

    def __init__(self, log_level: int = logging.WARNING):
        """Initialize error handler.

        Args:
            log_level: Minimum log level for error reporting
        """
        self.log_level = log_level
        self.error_history: List[ErrorReport] = []
        self.statistics = {
            "total_errors": 0,
            "recoverable_errors": 0,
            "fatal_errors": 0,
        }

        logger.debug("ErrorHandler initialized")

    def handle_error(
        self, error: Exception, context: Optional[ErrorContext] = None
    ) -> ErrorReport:
        """Classify, log and record an error.

        Args:
            error: Exception that occurred
            context: Context information about the error

        Returns:
            ErrorReport describing the error
        """
        sequence = self.statistics["total_errors"]
        error_id = f"ERR_{datetime.now().strftime('%Y%m%d_%H%M%S')}_{sequence:04d}"

        kind, severity = self._classify_error(error)
        recoverable = self.is_recoverable(error)

        report = ErrorReport(
            error_id=error_id,
            kind=kind,
            severity=severity,
            message=str(error),
            context=context or self._create_default_context(),
            traceback_info="".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            ),
            recoverable=recoverable,
        )

        if isinstance(error, DomainError):
            report.diagnostic_data["station_count"] = error.station_count
        elif isinstance(error, OutOfSequenceError):
            report.diagnostic_data.update(
                {"operation": error.operation, "current_phase": error.current_phase}
            )
        elif isinstance(error, InvalidArgumentError):
            report.diagnostic_data["argument"] = error.argument

        self.statistics["total_errors"] += 1
        if recoverable:
            self.statistics["recoverable_errors"] += 1
        else:
            self.statistics["fatal_errors"] += 1

        self._log_error(report)

        self.error_history.append(report)
        if len(self.error_history) > self.MAX_HISTORY:
            self.error_history = self.error_history[-self.MAX_HISTORY // 2 :]

        return report

    @staticmethod
    def is_recoverable(error: Exception) -> bool:
        """Whether a caller may report the error and keep going."""
        return isinstance(error, CDMAError) and error.kind == ErrorKind.INVALID_ARGUMENT

    def _classify_error(self, error: Exception) -> tuple[Optional[ErrorKind], ErrorSeverity]:
        """Classify error by kind and severity.

        Args:
            error: Exception to classify

        Returns:
            Tuple of (kind, severity); kind is None for foreign exceptions
        """
        if isinstance(error, CDMAError):
            return error.kind, error.severity

        if isinstance(error, (KeyboardInterrupt, SystemExit)):
            return None, ErrorSeverity.CRITICAL

        return None, ErrorSeverity.HIGH

    def _create_default_context(self) -> ErrorContext:
        """Create default error context."""
        return ErrorContext(
            operation="unknown",
            component="unknown",
            parameters={},
            timestamp=datetime.now(),
            system_info=self._get_system_info(),
        )

    def _get_system_info(self) -> Dict[str, Any]:
        """Get system information for error context."""
        return {
            "python_version": sys.version,
            "platform": sys.platform,
            "numpy_version": np.__version__,
        }

    def _log_error(self, report: ErrorReport) -> None:
        """Log error report at a level matching its severity."""
        kind_label = report.kind.value.upper() if report.kind else "UNCLASSIFIED"
        log_message = f"[{report.error_id}] {kind_label}: {report.message}"

        if report.severity == ErrorSeverity.CRITICAL:
            logger.critical(log_message)
        elif report.severity == ErrorSeverity.HIGH:
            logger.error(log_message)
        elif report.severity == ErrorSeverity.MEDIUM:
            logger.warning(log_message)
        else:
            logger.info(log_message)

    def get_error_statistics(self) -> Dict[str, Any]:
        """Get error handling statistics."""
        stats = self.statistics.copy()

        if stats["total_errors"] > 0:
            stats["recoverable_rate"] = stats["recoverable_errors"] / stats["total_errors"]
        else:
            stats["recoverable_rate"] = 0.0

        kind_counts: Dict[str, int] = {}
        severity_counts: Dict[str, int] = {}
        for report in self.error_history:
            kind_label = report.kind.value if report.kind else "unclassified"
            kind_counts[kind_label] = kind_counts.get(kind_label, 0) + 1
            severity_counts[report.severity.value] = (
                severity_counts.get(report.severity.value, 0) + 1
            )

        stats["kind_breakdown"] = kind_counts
        stats["severity_breakdown"] = severity_counts

        return stats

    def generate_diagnostic_report(self, include_traceback: bool = False) -> str:
        """Generate a diagnostic report of handled errors.

        Args:
            include_traceback: Include full traceback information

        Returns:
            Formatted diagnostic report
        """
        report = []
        report.append("=" * 80)
        report.append("CDMA WALSH SIMULATOR - ERROR DIAGNOSTIC REPORT")
        report.append("=" * 80)
        report.append(f"Generated: {datetime.now().isoformat()}")
        report.append("")

        stats = self.get_error_statistics()
        report.append("ERROR STATISTICS:")
        report.append(f"  Total Errors: {stats['total_errors']}")
        report.append(f"  Recoverable Errors: {stats['recoverable_errors']}")
        report.append(f"  Fatal Errors: {stats['fatal_errors']}")
        report.append(f"  Recoverable Rate: {stats['recoverable_rate']:.2%}")
        report.append("")

        if stats["kind_breakdown"]:
            report.append("ERROR KINDS:")
            for kind, count in stats["kind_breakdown"].items():
                report.append(f"  {kind}: {count}")
            report.append("")

        recent_errors = self.error_history[-10:]
        if recent_errors:
            report.append("RECENT ERRORS (last 10):")
            for error_report in recent_errors:
                kind_label = error_report.kind.value if error_report.kind else "unclassified"
                report.append(f"  [{error_report.error_id}] {kind_label}: {error_report.message}")
                if include_traceback and error_report.traceback_info:
                    report.append(f"    Traceback: {error_report.traceback_info}")
            report.append("")

        system_info = self._get_system_info()
        report.append("SYSTEM INFORMATION:")
        report.append(f"  Python Version: {system_info['python_version']}")
        report.append(f"  Platform: {system_info['platform']}")
        report.append(f"  NumPy Version: {system_info['numpy_version']}")
        report.append("=" * 80)

        return "\n".join(report)

    def clear_error_history(self) -> None:
        """Clear error history and reset statistics."""
        self.error_history.clear()
        self.statistics = {
            "total_errors": 0,
            "recoverable_errors": 0,
            "fatal_errors": 0,
        }
        logger.info("Error history and statistics cleared")


# Global error handler instance
_global_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _global_error_handler
    if _global_error_handler is None:
        _global_error_handler = ErrorHandler()
    return _global_error_handler


def handle_error(error: Exception, context: Optional[ErrorContext] = None) -> ErrorReport:
    """Handle an error using the global error handler."""
    return get_error_handler().handle_error(error, context)


def create_error_context(operation: str, component: str, **parameters) -> ErrorContext:
    """Create error context for error handling.

    Args:
        operation: Name of the operation being performed
        component: Name of the component where error occurred
        **parameters: Additional parameters to include in context

    Returns:
        ErrorContext object
    """
    return ErrorContext(
        operation=operation,
        component=component,
        parameters=parameters,
        timestamp=datetime.now(),
        system_info=get_error_handler()._get_system_info(),
    )

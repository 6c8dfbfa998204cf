"""
Tests for the error handling system.

This module tests the error kind hierarchy, result values, error
classification and the diagnostic bookkeeping of ErrorHandler.
"""

from datetime import datetime

import pytest

from cdma_walsh_simulator.error_handling import (
    CDMAError,
    DomainError,
    Err,
    ErrorContext,
    ErrorHandler,
    ErrorKind,
    ErrorReport,
    ErrorSeverity,
    InvalidArgumentError,
    Ok,
    OutOfSequenceError,
    attempt,
    create_error_context,
    get_error_handler,
    handle_error,
)


class TestErrorClasses:
    """Test custom error classes."""

    def test_invalid_argument_error(self):
        error = InvalidArgumentError("bad order", "order", -1)

        assert str(error) == "bad order"
        assert error.kind == ErrorKind.INVALID_ARGUMENT
        assert error.severity == ErrorSeverity.LOW
        assert error.argument == "order"
        assert error.value == -1
        assert isinstance(error, ValueError)
        assert isinstance(error, CDMAError)
        assert isinstance(error.timestamp, datetime)

    def test_domain_error(self):
        error = DomainError("no stations", station_count=0)

        assert error.kind == ErrorKind.DOMAIN_ERROR
        assert error.severity == ErrorSeverity.HIGH
        assert error.station_count == 0
        assert isinstance(error, ArithmeticError)

    def test_out_of_sequence_error(self):
        error = OutOfSequenceError("too early", "transmit_data", "registration")

        assert error.kind == ErrorKind.OUT_OF_SEQUENCE
        assert error.operation == "transmit_data"
        assert error.current_phase == "registration"
        assert isinstance(error, RuntimeError)

    def test_error_kinds_are_closed(self):
        assert {kind.value for kind in ErrorKind} == {
            "invalid_argument",
            "domain_error",
            "out_of_sequence",
        }


class TestResults:
    """Test Ok/Err result values and attempt()."""

    def test_attempt_ok(self):
        result = attempt(lambda x, y: x + y, 2, y=3)

        assert isinstance(result, Ok)
        assert result.is_ok
        assert result.unwrap() == 5

    def test_attempt_err(self):
        def fail():
            raise DomainError("empty", station_count=0)

        result = attempt(fail)

        assert isinstance(result, Err)
        assert not result.is_ok
        assert result.kind == ErrorKind.DOMAIN_ERROR
        with pytest.raises(DomainError, match="empty"):
            result.unwrap()

    def test_attempt_propagates_foreign_exceptions(self):
        def fail():
            raise KeyError("not a simulator error")

        with pytest.raises(KeyError):
            attempt(fail)


class TestErrorContext:
    """Test error context creation."""

    def test_create_error_context(self):
        context = create_error_context("add_station", "CDMAEngine", name="A")

        assert context.operation == "add_station"
        assert context.component == "CDMAEngine"
        assert context.parameters["name"] == "A"
        assert isinstance(context.timestamp, datetime)
        assert "numpy_version" in context.system_info


class TestErrorHandler:
    """Test ErrorHandler functionality."""

    def setup_method(self):
        """Set up test fixtures."""
        self.error_handler = ErrorHandler()

    def test_initialization(self):
        assert len(self.error_handler.error_history) == 0
        assert self.error_handler.statistics["total_errors"] == 0

    def test_invalid_argument_is_recoverable(self):
        report = self.error_handler.handle_error(InvalidArgumentError("bad", "text"))

        assert isinstance(report, ErrorReport)
        assert report.kind == ErrorKind.INVALID_ARGUMENT
        assert report.recoverable is True
        assert report.diagnostic_data["argument"] == "text"

    def test_domain_error_is_fatal(self):
        report = self.error_handler.handle_error(DomainError("no stations", station_count=0))

        assert report.recoverable is False
        assert report.diagnostic_data["station_count"] == 0

    def test_out_of_sequence_is_fatal(self):
        context = create_error_context("transmit_data", "CDMAEngine")
        report = self.error_handler.handle_error(
            OutOfSequenceError("early", "transmit_data", "registration"), context
        )

        assert report.recoverable is False
        assert report.context is context
        assert report.diagnostic_data == {
            "operation": "transmit_data",
            "current_phase": "registration",
        }

    def test_foreign_exception_classification(self):
        report = self.error_handler.handle_error(ValueError("plain"))

        assert report.kind is None
        assert report.severity == ErrorSeverity.HIGH
        assert report.recoverable is False
        assert isinstance(report.context, ErrorContext)

    def test_logging_by_severity(self, caplog):
        with caplog.at_level("INFO", logger="cdma_walsh_simulator.error_handling"):
            self.error_handler.handle_error(InvalidArgumentError("low severity"))
            self.error_handler.handle_error(DomainError("high severity"))

        levels = {record.getMessage().split(": ", 1)[1]: record.levelname for record in caplog.records}
        assert levels["low severity"] == "INFO"
        assert levels["high severity"] == "ERROR"

    def test_statistics(self):
        self.error_handler.handle_error(InvalidArgumentError("a"))
        self.error_handler.handle_error(InvalidArgumentError("b"))
        self.error_handler.handle_error(OutOfSequenceError("c"))

        stats = self.error_handler.get_error_statistics()

        assert stats["total_errors"] == 3
        assert stats["recoverable_errors"] == 2
        assert stats["fatal_errors"] == 1
        assert stats["recoverable_rate"] == pytest.approx(2 / 3)
        assert stats["kind_breakdown"] == {"invalid_argument": 2, "out_of_sequence": 1}

    def test_empty_statistics(self):
        stats = self.error_handler.get_error_statistics()

        assert stats["recoverable_rate"] == 0.0
        assert stats["kind_breakdown"] == {}

    def test_error_ids_are_unique(self):
        first = self.error_handler.handle_error(InvalidArgumentError("a"))
        second = self.error_handler.handle_error(InvalidArgumentError("b"))

        assert first.error_id != second.error_id
        assert first.error_id.startswith("ERR_")

    def test_error_ids_stay_unique_after_history_trim(self):
        error_ids = [
            self.error_handler.handle_error(InvalidArgumentError(f"error {i}")).error_id
            for i in range(ErrorHandler.MAX_HISTORY + 100)
        ]

        assert len(set(error_ids)) == len(error_ids)

    def test_traceback_recorded_outside_except_block(self):
        try:
            raise DomainError("no stations", station_count=0)
        except DomainError as e:
            caught = e

        report = self.error_handler.handle_error(caught)

        assert "NoneType: None" not in report.traceback_info
        assert "DomainError: no stations" in report.traceback_info
        assert "Traceback (most recent call last)" in report.traceback_info

    def test_traceback_for_unraised_error(self):
        report = self.error_handler.handle_error(InvalidArgumentError("never raised"))

        assert report.traceback_info.strip().endswith("InvalidArgumentError: never raised")
        assert "Traceback" not in report.traceback_info

    def test_history_is_bounded(self):
        for i in range(ErrorHandler.MAX_HISTORY + 1):
            self.error_handler.handle_error(InvalidArgumentError(f"error {i}"))

        assert len(self.error_handler.error_history) <= ErrorHandler.MAX_HISTORY
        assert self.error_handler.statistics["total_errors"] == ErrorHandler.MAX_HISTORY + 1

    def test_diagnostic_report(self):
        self.error_handler.handle_error(DomainError("no stations"))

        report = self.error_handler.generate_diagnostic_report()

        assert "ERROR DIAGNOSTIC REPORT" in report
        assert "Total Errors: 1" in report
        assert "domain_error: 1" in report
        assert "no stations" in report

    def test_clear_error_history(self):
        self.error_handler.handle_error(InvalidArgumentError("a"))

        self.error_handler.clear_error_history()

        assert self.error_handler.error_history == []
        assert self.error_handler.statistics["total_errors"] == 0


class TestGlobalErrorHandler:
    """Test module-level helpers."""

    def test_global_handler_is_shared(self):
        assert get_error_handler() is get_error_handler()

    def test_handle_error_uses_global_handler(self):
        handle_error(InvalidArgumentError("global"))

        assert get_error_handler().error_history[-1].message == "global"

"""
Unit tests for core data models.

Tests the CodeMatrix, Station, DecodedWord and TransmissionSummary classes
including their validation logic and methods.
"""

from datetime import datetime

import numpy as np
import pytest

from cdma_walsh_simulator.models import (
    CodeMatrix,
    DecodedWord,
    EnginePhase,
    Station,
    TransmissionSummary,
)


class TestCodeMatrix:
    """Test cases for CodeMatrix class."""

    def test_valid_code_matrix(self):
        """Test creation of a valid order-1 matrix."""
        codes = np.array([[1, 1], [1, -1]], dtype=np.int8)

        matrix = CodeMatrix(order=1, codes=codes)

        assert matrix.order == 1
        assert matrix.num_codes == 2
        assert matrix.code_length == 2
        assert len(matrix) == 2

    def test_shape_must_match_order(self):
        """Test validation of the matrix shape against its order."""
        with pytest.raises(ValueError, match="must have shape"):
            CodeMatrix(order=2, codes=np.ones((2, 2), dtype=np.int8))

    def test_codes_are_read_only(self):
        matrix = CodeMatrix(order=0, codes=np.array([[1]], dtype=np.int8))

        with pytest.raises(ValueError):
            matrix.codes[0, 0] = -1

    def test_get_code(self):
        matrix = CodeMatrix(order=1, codes=np.array([[1, 1], [1, -1]], dtype=np.int8))

        np.testing.assert_array_equal(matrix.get_code(1), [1, -1])
        np.testing.assert_array_equal(matrix[0], [1, 1])

    @pytest.mark.parametrize("index", [-1, 2])
    def test_get_code_out_of_range(self, index):
        matrix = CodeMatrix(order=1, codes=np.array([[1, 1], [1, -1]], dtype=np.int8))

        with pytest.raises(IndexError, match="out of range"):
            matrix.get_code(index)

    def test_iteration_yields_rows(self):
        matrix = CodeMatrix(order=1, codes=np.array([[1, 1], [1, -1]], dtype=np.int8))

        rows = [row.tolist() for row in matrix]

        assert rows == [[1, 1], [1, -1]]

    def test_equality_compares_order_and_codes(self):
        first = CodeMatrix(order=1, codes=np.array([[1, 1], [1, -1]], dtype=np.int8))
        second = CodeMatrix(order=1, codes=np.array([[1, 1], [1, -1]], dtype=np.int8))
        flipped = CodeMatrix(order=1, codes=np.array([[1, -1], [1, 1]], dtype=np.int8))

        assert first == second
        assert first != flipped
        assert first != CodeMatrix(order=0, codes=np.array([[1]], dtype=np.int8))
        assert first != "not a matrix"

    def test_hashable(self):
        first = CodeMatrix(order=2, codes=np.ones((4, 4), dtype=np.int8))
        second = CodeMatrix(order=2, codes=np.ones((4, 4), dtype=np.int8))

        assert hash(first) == hash(second)
        assert len({first, second}) == 1


class TestStation:
    """Test cases for Station class."""

    @pytest.fixture
    def station(self):
        return Station(name="A", word="A", bits=np.array([0, 1, 0, 0, 0, 0, 0, 1], dtype=np.uint8))

    def test_station_without_code(self, station):
        assert station.bit_length == 8
        assert station.has_code is False

    def test_station_with_code(self, station):
        station.walsh_code = np.array([1, -1], dtype=np.int8)

        assert station.has_code is True

    def test_signal_levels(self, station):
        """Bit 1 maps to +1, bit 0 to -1."""
        assert station.signal_at(0) == -1
        assert station.signal_at(1) == 1
        assert station.signal_at(7) == 1

    def test_silent_after_last_bit(self, station):
        assert station.signal_at(8) == 0
        assert station.signal_at(100) == 0

    def test_empty_word_is_always_silent(self):
        station = Station(name="E", word="", bits=np.zeros(0, dtype=np.uint8))

        assert station.bit_length == 0
        assert station.signal_at(0) == 0


class TestDecodedWord:
    """Test cases for DecodedWord class."""

    def test_matches_original(self):
        word = DecodedWord(name="A", bits=np.zeros(8), text="Hi", original_word="Hi")

        assert word.matches_original is True
        assert word.as_pair() == ("A", "Hi")

    def test_mismatch(self):
        word = DecodedWord(name="A", bits=np.zeros(8), text="Hi\x00", original_word="Hi")

        assert word.matches_original is False


class TestTransmissionSummary:
    """Test cases for TransmissionSummary class."""

    def _summary(self, decoded_words):
        return TransmissionSummary(
            station_names=[word.name for word in decoded_words],
            order=1,
            code_length=2,
            num_slots=16,
            decoded_words=decoded_words,
        )

    def test_summary_fields(self):
        summary = self._summary(
            [
                DecodedWord("A", np.zeros(8), "x", "x"),
                DecodedWord("B", np.zeros(16), "yz", "yz"),
            ]
        )

        assert summary.num_stations == 2
        assert summary.all_recovered is True
        assert isinstance(summary.completed_at, datetime)
        assert summary.metadata == {}

    def test_not_all_recovered(self):
        summary = self._summary(
            [
                DecodedWord("A", np.zeros(8), "x", "x"),
                DecodedWord("B", np.zeros(8), "q", "y"),
            ]
        )

        assert summary.all_recovered is False


class TestEnginePhase:
    def test_phase_values(self):
        assert [phase.value for phase in EnginePhase] == [
            "registration",
            "codes_assigned",
            "transmitted",
        ]

"""Tests for coordinate parsing - Pure functions."""

import pytest

from src.core.coordinates import is_valid_coordinate, parse_coordinate


class TestParseCoordinate:
    """Tests for parse_coordinate()."""

    def test_north_prefix_is_positive(self):
        assert parse_coordinate("N38.3") == 38.3

    def test_south_prefix_is_negative(self):
        assert parse_coordinate("S38.3") == -38.3

    def test_east_prefix_is_positive(self):
        assert parse_coordinate("E141.7") == 141.7

    def test_west_prefix_is_negative(self):
        assert parse_coordinate("W141.7") == -141.7

    def test_lowercase_prefix(self):
        """Compass letters are matched case-insensitively."""
        assert parse_coordinate("s38.3") == -38.3
        assert parse_coordinate("e141.7") == 141.7

    def test_suffix_letter(self):
        assert parse_coordinate("38.3N") == 38.3
        assert parse_coordinate("141.7W") == -141.7

    def test_exponent_is_not_a_compass_letter(self):
        """Only a letter at either end is a hemisphere."""
        assert parse_coordinate("3.75e1") == 37.5
        assert parse_coordinate("N3.75e1") == 37.5
        assert parse_coordinate("S1.5E1") == -15.0

    def test_plain_numeric_string(self):
        assert parse_coordinate("37.5") == 37.5

    def test_number_passes_through(self):
        assert parse_coordinate(38.3) == 38.3
        assert parse_coordinate(137) == 137.0

    def test_zero_number_is_returned(self):
        """The parser normalizes format only; zero is judged elsewhere."""
        assert parse_coordinate(0) == 0.0

    @pytest.mark.parametrize("value", [None, "", "N", "abc", "N38.3.1", "N38.3S1", "line\nbreak", [], {}, True])
    def test_invalid_values(self, value):
        assert parse_coordinate(value) is None

    def test_non_finite_values(self):
        assert parse_coordinate(float("nan")) is None
        assert parse_coordinate(float("inf")) is None
        assert parse_coordinate("inf") is None


class TestIsValidCoordinate:
    """Tests for is_valid_coordinate()."""

    def test_nonzero_is_valid(self):
        assert is_valid_coordinate(37.5) is True
        assert is_valid_coordinate(-141.7) is True

    def test_zero_is_invalid(self):
        assert is_valid_coordinate(0.0) is False

    def test_none_is_invalid(self):
        assert is_valid_coordinate(None) is False

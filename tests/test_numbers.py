"""Tests for display buffer parsing and result formatting."""

import pytest

from backend.engine import format_number, parse_number


class TestParseNumber:
    """Tests for parse_number."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("5", 5.0),
            ("5.", 5.0),
            (".5", 0.5),
            ("-2.25", -2.25),
            ("+7", 7.0),
            ("1e3", 1000.0),
            ("2.5E-2", 0.025),
        ],
    )
    def test_valid(self, text, expected):
        """Plain decimal numbers should parse."""
        assert parse_number(text) == expected

    def test_infinity(self):
        """inf and infinity are accepted in any case."""
        assert parse_number("inf") == float("inf")
        assert parse_number("-Infinity") == float("-inf")

    def test_nan(self):
        """NaN parses to a NaN float."""
        value = parse_number("NaN")
        assert value != value

    @pytest.mark.parametrize("text", ["", ".", "-", "Error", "1_0", " 5", "5 ", "1.2.3", "e5", "0x10"])
    def test_invalid(self, text):
        """Anything else should not parse."""
        assert parse_number(text) is None


class TestFormatNumber:
    """Tests for format_number."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (15.0, "15"),
            (100.0, "100"),
            (-3.0, "-3"),
            (3.5, "3.5"),
            (0.1 + 0.2, "0.30000000000000004"),
            (1e21, "1000000000000000000000"),
            (1e-7, "0.0000001"),
            (-0.0, "-0"),
            (0.0, "0"),
        ],
    )
    def test_finite(self, value, expected):
        """Finite values render without exponent or trailing .0."""
        assert format_number(value) == expected

    def test_non_finite(self):
        """Non-finite values have fixed spellings."""
        assert format_number(float("inf")) == "inf"
        assert format_number(float("-inf")) == "-inf"
        assert format_number(float("nan")) == "NaN"

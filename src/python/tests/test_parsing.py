"""
===============================================================================
QUATCALC - Text Format Test Suite
===============================================================================
Tests for format_quaternion / str() and parse_quaternion in both lenient
(default) and strict mode, including the format -> parse round trip.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest
from numpy.testing import assert_allclose

from quatcalc.quaternion import (
    Quaternion,
    QuaternionFormatError,
    format_quaternion,
    parse_quaternion,
)


# =============================================================================
# Test: Formatting
# =============================================================================

class TestFormat:
    """Tests for the canonical text form."""

    @pytest.mark.parametrize("components,expected", [
        ((1, 2, -3, 4), "1.00+2.00i-3.00j+4.00k"),
        ((-1, -2, 0, 0.5), "-1.00-2.00i+0.00j+0.50k"),
        ((0, 0, 0, 0), "0.00+0.00i+0.00j+0.00k"),
        ((12.5, -0.25, 100, -7), "12.50-0.25i+100.00j-7.00k"),
    ])
    def test_format(self, components, expected):
        assert format_quaternion(Quaternion(*components)) == expected

    def test_str_is_canonical_form(self):
        q = Quaternion(1, 2, 3, 4)
        assert str(q) == format_quaternion(q) == "1.00+2.00i+3.00j+4.00k"

    def test_two_decimal_rounding(self):
        assert str(Quaternion(1.234, 0.126, -0.004, 9.999)) == "1.23+0.13i-0.00j+10.00k"

    def test_no_whitespace_or_brackets(self):
        text = str(Quaternion(-3.5, 1e3, -2, 0.01))
        assert not any(ch in text for ch in " ()[],")


# =============================================================================
# Test: Lenient parsing
# =============================================================================

class TestParseLenient:
    """Default parsing: total, last-token-wins, zero-filled."""

    def test_canonical(self):
        q = parse_quaternion("1.00+2.00i-3.00j+4.00k")
        assert list(q) == [1.0, 2.0, -3.0, 4.0]

    def test_negative_real(self):
        q = parse_quaternion("-1.50-0.25i+0.00j-7.00k")
        assert list(q) == [-1.5, -0.25, 0.0, -7.0]

    @pytest.mark.parametrize("text,expected", [
        ("5", [5.0, 0.0, 0.0, 0.0]),
        ("3j", [0.0, 0.0, 3.0, 0.0]),
        ("2i+4k", [0.0, 2.0, 0.0, 4.0]),
        ("4k+1", [1.0, 0.0, 0.0, 4.0]),
    ])
    def test_missing_components_default_to_zero(self, text, expected):
        assert list(parse_quaternion(text)) == expected

    def test_last_occurrence_wins(self):
        q = parse_quaternion("1i+2i+7+8")
        assert list(q) == [8.0, 2.0, 0.0, 0.0]

    def test_ignores_characters_between_tokens(self):
        q = parse_quaternion("(1.5 + 2i, junk 3j) * 4k")
        assert list(q) == [1.5, 2.0, 3.0, 4.0]

    @pytest.mark.parametrize("text", ["", "abc", "i+j+k", "   "])
    def test_no_token_gives_zero(self, text):
        assert list(parse_quaternion(text)) == [0.0, 0.0, 0.0, 0.0]

    @pytest.mark.parametrize("text,expected", [
        ("١٢i", [0.0, 0.0, 0.0, 0.0]),          # Arabic-Indic 12i
        ("1+٢i+３j", [1.0, 0.0, 0.0, 0.0]),      # Arabic-Indic 2, fullwidth 3
    ])
    def test_only_ascii_digits_are_numbers(self, text, expected):
        assert list(parse_quaternion(text)) == expected

    def test_from_string(self):
        assert list(Quaternion.from_string("1+2i+3j+4k")) == [1.0, 2.0, 3.0, 4.0]


# =============================================================================
# Test: Strict parsing
# =============================================================================

class TestParseStrict:
    """Hardened parsing raises QuaternionFormatError on malformed text."""

    @pytest.mark.parametrize("text,expected", [
        ("1.00+2.00i-3.00j+4.00k", [1.0, 2.0, -3.0, 4.0]),
        ("  -1.00-2.00i+0.00j+0.50k\n", [-1.0, -2.0, 0.0, 0.5]),
        ("+1", [1.0, 0.0, 0.0, 0.0]),
        ("2j+1i", [0.0, 1.0, 2.0, 0.0]),
    ])
    def test_accepts_well_formed(self, text, expected):
        assert list(parse_quaternion(text, strict=True)) == expected

    @pytest.mark.parametrize("text", [
        "",
        "abc",
        "1.00 + 2.00i",
        "1.00+2.00i;",
        "x1.00",
        "1.00+-2.00i",
        "1.002.00i",
        "1--2i",
    ])
    def test_rejects_malformed(self, text):
        with pytest.raises(QuaternionFormatError):
            parse_quaternion(text, strict=True)

    @pytest.mark.parametrize("text", ["1i+2i", "1+2", "3k-4k"])
    def test_rejects_duplicate_components(self, text):
        with pytest.raises(QuaternionFormatError, match="more than once"):
            parse_quaternion(text, strict=True)

    @pytest.mark.parametrize("text", ["١٢i", "1.00+٢.00i"])
    def test_rejects_non_ascii_digits(self, text):
        with pytest.raises(QuaternionFormatError):
            parse_quaternion(text, strict=True)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            Quaternion.from_string("nothing here", strict=True)


# =============================================================================
# Test: Round trip
# =============================================================================

class TestRoundTrip:
    """parse(format(q)) recovers q for 2-decimal components."""

    @pytest.mark.parametrize("components", [
        (1, 2, 3, 4),
        (-1, -2, -3, -4),
        (0, 0, 0, 0),
        (0.5, -0.25, 12.75, -100.01),
        (3.14, 0, -2.72, 0.01),
    ])
    def test_round_trip(self, components):
        q = Quaternion(*components)
        text = format_quaternion(q)
        assert parse_quaternion(text).equals(q)
        assert parse_quaternion(text, strict=True).equals(q)

    def test_round_trip_rounds_to_two_decimals(self):
        q = Quaternion(1.23456, 0, 0, 0)
        assert_allclose(parse_quaternion(str(q)).r, 1.23, atol=1e-15)

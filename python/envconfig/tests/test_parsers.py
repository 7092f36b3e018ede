"""Tests for built-in scalar parsers and the parser adapter."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

import pytest
from pydantic import AnyUrl, HttpUrl

from envconfig.core.converter import TypeConverter, convert
from envconfig.core.numeric import Float32, Int8, Int16, Int32, Int64
from envconfig.core.parsers import from_function, parse_bool
from envconfig.exceptions import (
    BooleanFormatError,
    ConversionError,
    IllegalValueError,
    MissingValueError,
    NumberFormatError,
)


class TimeUnit(Enum):
    DAYS = "d"
    HOURS = "h"
    MINUTES = "m"


class TestBoolean:
    """Test strict boolean parsing."""

    @pytest.mark.parametrize("text", ["true", "TRUE", "True", "tRuE"])
    def test_true(self, text):
        assert convert(bool, text) is True

    @pytest.mark.parametrize("text", ["false", "FALSE", "False"])
    def test_false(self, text):
        assert convert(bool, text) is False

    @pytest.mark.parametrize("text", ["yes", "1", "0", "on", " true", "true ", "truee"])
    def test_invalid_is_an_error_not_false(self, text):
        """Test anything but true/false raises instead of reading as False."""
        with pytest.raises(BooleanFormatError, match="Invalid boolean"):
            convert(bool, text)

    @pytest.mark.parametrize("text", ["", None])
    def test_missing(self, text):
        """Test missing input is reported separately from invalid input."""
        with pytest.raises(BooleanFormatError, match="Missing boolean"):
            convert(bool, text)

    def test_parser_receives_none_for_missing(self):
        """Test the parser itself distinguishes None from text."""
        with pytest.raises(BooleanFormatError) as exc_info:
            parse_bool(None, TypeConverter())
        assert exc_info.value.value is None
        assert exc_info.value.target is bool


class TestIntegers:
    """Test unbounded and sized integers."""

    @pytest.mark.parametrize("text", ["0", "-17", "123456789012345678901"])
    def test_int(self, text):
        """Test plain int is unbounded."""
        assert convert(int, text) == int(text)

    @pytest.mark.parametrize("text", ["127", "-128", "0"])
    def test_int8_in_range(self, text):
        assert convert(Int8, text) == int(text)

    @pytest.mark.parametrize("text", ["128", "-129"])
    def test_int8_out_of_range(self, text):
        with pytest.raises(NumberFormatError, match="out of range"):
            convert(Int8, text)

    @pytest.mark.parametrize(
        "hint,high",
        [(Int16, 2**15 - 1), (Int32, 2**31 - 1), (Int64, 2**63 - 1)],
    )
    def test_sized_boundaries(self, hint, high):
        """Test each width accepts its limits and rejects one past them."""
        assert convert(hint, str(high)) == high
        assert convert(hint, str(-high - 1)) == -high - 1
        with pytest.raises(NumberFormatError):
            convert(hint, str(high + 1))
        with pytest.raises(NumberFormatError):
            convert(hint, str(-high - 2))

    @pytest.mark.parametrize("text", ["", "abc", "1.5", "0x10", " 12 ", "12 ", "1_0", "+-1"])
    @pytest.mark.parametrize("hint", [int, Int32])
    def test_malformed(self, hint, text):
        """Test only plain decimal literals are accepted."""
        with pytest.raises(NumberFormatError):
            convert(hint, text)

    def test_explicit_sign(self):
        assert convert(int, "+42") == 42
        assert convert(Int8, "-0") == 0

    def test_number_error_is_value_error(self):
        """Test conversion errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            convert(Int32, "nope")


class TestFloats:
    """Test float, single precision float and decimal parsing."""

    def test_float(self):
        assert convert(float, "1.25") == 1.25
        assert convert(float, "-3e2") == -300.0

    def test_float32_rounds_to_single_precision(self):
        """Test Float32 loses precision like a 32-bit float."""
        assert convert(Float32, "0.5") == 0.5
        assert convert(Float32, "0.1") != 0.1
        assert convert(Float32, "0.1") == pytest.approx(0.1, rel=1e-7)

    def test_float32_overflow(self):
        with pytest.raises(NumberFormatError):
            convert(Float32, "1e39")

    def test_decimal(self):
        assert convert(Decimal, "10.10") == Decimal("10.10")
        assert convert(Decimal, "-1.5e3") == Decimal("-1500")
        assert convert(Decimal, ".5") == Decimal("0.5")

    @pytest.mark.parametrize("hint", [float, Float32, Decimal])
    def test_malformed(self, hint):
        with pytest.raises(NumberFormatError):
            convert(hint, "ten")

    @pytest.mark.parametrize("text", ["NaN", "-NaN", "sNaN", "Infinity", "-Infinity", "1_000", " 1.5"])
    def test_decimal_plain_finite_literal_only(self, text):
        with pytest.raises(NumberFormatError):
            convert(Decimal, text)

    @pytest.mark.parametrize("hint", [float, Float32, Decimal])
    def test_empty(self, hint):
        with pytest.raises(NumberFormatError):
            convert(hint, "")


class TestStrings:
    """Test string parsing."""

    def test_value_returned_verbatim(self):
        assert convert(str, " padded ") == " padded "

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_is_missing(self, text):
        with pytest.raises(MissingValueError, match="^Missing value$"):
            convert(str, text)


class TestEnums:
    """Test enum lookup by member name."""

    @pytest.mark.parametrize("member", list(TimeUnit))
    def test_by_name(self, member):
        assert convert(TimeUnit, member.name) is member

    @pytest.mark.parametrize("text", ["bogus", "days", "d", ""])
    def test_unknown(self, text):
        """Test lookup is by exact name, never by value or case-folded name."""
        with pytest.raises(IllegalValueError, match="No enum constant TimeUnit"):
            convert(TimeUnit, text)

    def test_error_lists_members(self):
        with pytest.raises(IllegalValueError, match="DAYS, HOURS, MINUTES"):
            convert(TimeUnit, "WEEKS")


class TestUrls:
    """Test URL parsing through pydantic."""

    def test_http_url(self):
        url = convert(HttpUrl, "https://example.com/api")
        assert isinstance(url, HttpUrl)
        assert url.host == "example.com"
        assert str(url) == "https://example.com/api"

    def test_any_url(self):
        url = convert(AnyUrl, "postgres://user@db:5432/app")
        assert url.scheme == "postgres"
        assert url.port == 5432

    @pytest.mark.parametrize("text", ["not a url", "", "ftp://example.com"])
    def test_invalid_http_url(self, text):
        with pytest.raises(IllegalValueError):
            convert(HttpUrl, text)


class TestFromFunction:
    """Test adapting plain str -> T functions into parsers."""

    def test_success(self):
        parser = from_function(str.upper)
        assert parser("abc", TypeConverter()) == "ABC"

    def test_none_becomes_empty_string(self):
        parser = from_function(len)
        assert parser(None, TypeConverter()) == 0

    def test_errors_are_wrapped(self):
        """Test ValueError from the function becomes the given error type."""
        parser = from_function(int, NumberFormatError, target=int)
        with pytest.raises(NumberFormatError, match="Cannot convert 'x' to int") as exc_info:
            parser("x", TypeConverter())
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert exc_info.value.value == "x"

    def test_default_error_type(self):
        parser = from_function(int)
        with pytest.raises(ConversionError):
            parser("x", TypeConverter())

    def test_other_errors_propagate(self):
        """Test only parse-like errors are converted."""

        def broken(text: str) -> int:
            raise RuntimeError("boom")

        parser = from_function(broken)
        with pytest.raises(RuntimeError, match="boom"):
            parser("1", TypeConverter())

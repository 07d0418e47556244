"""Tests for value classification and coercion."""

from __future__ import annotations

import pytest

from querystring_parser.config import ParserConfig
from querystring_parser.types import ValueType
from querystring_parser.values import classify_value, classify_values, coerce_values


class TestClassifyValue:
    """Tests for classify_value."""

    @pytest.mark.parametrize("value", ["10", "-3", "+7", "2.5", ".5", "5.", "1e3", "-1.5E-2"])
    def test_numbers(self, value: str) -> None:
        """Numeric literals classify as NUMBER."""
        assert classify_value(value) is ValueType.NUMBER

    @pytest.mark.parametrize("value", ["null", "NULL", "Null", " null "])
    def test_null_sentinel_is_case_insensitive(self, value: str) -> None:
        """The null sentinel is matched case-insensitively."""
        assert classify_value(value) is ValueType.NULL

    @pytest.mark.parametrize(
        "value",
        ["2024-01-15", "2024-01-15T10:30:00", "2024-01-15T10:30:00Z", "2024-01-15 10:30"],
    )
    def test_dates(self, value: str) -> None:
        """ISO-8601 dates and date-times classify as DATE."""
        assert classify_value(value) is ValueType.DATE

    def test_impossible_date_is_a_string(self) -> None:
        """Date-shaped text that is not a real date falls back to STRING."""
        assert classify_value("2024-02-30") is ValueType.STRING

    @pytest.mark.parametrize(
        "value", ["abc", "", "10abc", "1,000", "nan", "inf", "nullable", "1e400", "-1e400"]
    )
    def test_strings(self, value: str) -> None:
        """Anything else is a STRING."""
        assert classify_value(value) is ValueType.STRING

    def test_integer_digit_limit(self) -> None:
        """Integers too long to convert to int are strings, not numbers."""
        assert classify_value("9" * 4300) is ValueType.NUMBER
        assert classify_value("9" * 4301) is ValueType.STRING
        assert classify_value("-" + "9" * 4301) is ValueType.STRING

    def test_custom_null_sentinel(self) -> None:
        """The null sentinel is configurable."""
        config = ParserConfig(null_sentinel="nil")
        assert classify_value("NIL", config=config) is ValueType.NULL
        assert classify_value("null", config=config) is ValueType.STRING


class TestClassifyValues:
    """Tests for classify_values."""

    def test_homogeneous_numbers(self) -> None:
        assert classify_values(["10", "20", "3.5"]) is ValueType.NUMBER

    def test_single_value(self) -> None:
        assert classify_values(["mike"]) is ValueType.STRING

    def test_mixed_number_and_string(self) -> None:
        """Mixing types is reported as None, never a partial result."""
        assert classify_values(["10", "abc"]) is None

    def test_mixed_number_and_null(self) -> None:
        assert classify_values(["10", "null"]) is None

    def test_mixed_date_and_string(self) -> None:
        assert classify_values(["2024-01-01", "tomorrow"]) is None

    def test_empty_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            classify_values([])


class TestCoerceValues:
    """Tests for coerce_values."""

    def test_numbers_become_int_or_float(self) -> None:
        values = coerce_values(ValueType.NUMBER, ["10", "2.5", "1e3", " 7 "])
        assert values == [10, 2.5, 1000.0, 7]
        assert isinstance(values[0], int)
        assert isinstance(values[1], float)
        assert isinstance(values[2], float)

    def test_null_becomes_none(self) -> None:
        assert coerce_values(ValueType.NULL, ["null", "NULL"]) == [None, None]

    def test_dates_keep_their_text(self) -> None:
        """Dates are validated but passed through unchanged."""
        assert coerce_values(ValueType.DATE, ["2024-01-15T10:30:00Z"]) == ["2024-01-15T10:30:00Z"]

    def test_strings_pass_through(self) -> None:
        assert coerce_values(ValueType.STRING, ["mike", "bob"]) == ["mike", "bob"]

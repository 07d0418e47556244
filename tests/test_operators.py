"""Tests for operator resolution, compatibility checks, and mapping."""

from __future__ import annotations

import pytest

from querystring_parser.exceptions import QuerystringParsingError
from querystring_parser.operators import check_compatibility, resolve_operator, to_sql_operator
from querystring_parser.types import MongoOperator, ParsingErrorType, SqlOperator, ValueType


class TestResolveOperator:
    """Tests for resolve_operator."""

    def test_explicit_operator_is_used(self) -> None:
        op = resolve_operator("gte", is_array=False, value_type=ValueType.NUMBER)
        assert op is MongoOperator.GREATER_OR_EQUAL

    def test_explicit_operator_is_case_insensitive(self) -> None:
        op = resolve_operator("NIN", is_array=True, value_type=ValueType.STRING)
        assert op is MongoOperator.NOT_IN

    def test_explicit_operator_wins_over_array_default(self) -> None:
        """An explicit operator is returned even when it won't validate."""
        op = resolve_operator("gt", is_array=True, value_type=ValueType.NUMBER)
        assert op is MongoOperator.GREATER_THAN

    def test_unknown_operator(self) -> None:
        with pytest.raises(QuerystringParsingError) as exc:
            resolve_operator("between", is_array=False, value_type=ValueType.NUMBER)
        assert exc.value.error_type is ParsingErrorType.UNKNOWN_OPERATOR
        assert '"between"' in exc.value.message

    def test_internal_null_operator_cannot_be_written(self) -> None:
        with pytest.raises(QuerystringParsingError):
            resolve_operator("$isnull", is_array=False, value_type=ValueType.NULL)

    @pytest.mark.parametrize("value_type", list(ValueType))
    def test_array_defaults_to_in_for_every_type(self, value_type: ValueType) -> None:
        """Arrays mean set membership regardless of element type."""
        assert resolve_operator(None, is_array=True, value_type=value_type) is MongoOperator.IN

    @pytest.mark.parametrize(
        ("value_type", "expected"),
        [
            (ValueType.NUMBER, MongoOperator.EQUALS),
            (ValueType.DATE, MongoOperator.EQUALS),
            (ValueType.NULL, MongoOperator.IS_NULL),
            (ValueType.STRING, MongoOperator.ILIKE),
        ],
    )
    def test_scalar_defaults_depend_on_type(
        self, value_type: ValueType, expected: MongoOperator
    ) -> None:
        assert resolve_operator(None, is_array=False, value_type=value_type) is expected


class TestCheckCompatibility:
    """Tests for check_compatibility."""

    @pytest.mark.parametrize("op", [MongoOperator.IN, MongoOperator.NOT_IN])
    def test_set_operators_accept_arrays(self, op: MongoOperator) -> None:
        check_compatibility(op, is_array=True, value_type=ValueType.NUMBER)

    def test_array_with_scalar_operator(self) -> None:
        with pytest.raises(QuerystringParsingError) as exc:
            check_compatibility(MongoOperator.EQUALS, is_array=True, value_type=ValueType.NUMBER)
        assert exc.value.message == '"eq" operator should not be used with array value'
        assert exc.value.error_type is ParsingErrorType.ARRAY_VALUE_WITH_SCALAR_OPERATOR

    @pytest.mark.parametrize(
        "op",
        [
            MongoOperator.GREATER_THAN,
            MongoOperator.GREATER_OR_EQUAL,
            MongoOperator.LESS_THAN,
            MongoOperator.LESS_OR_EQUAL,
            MongoOperator.ILIKE,
        ],
    )
    def test_null_with_ordering_or_substring(self, op: MongoOperator) -> None:
        with pytest.raises(QuerystringParsingError) as exc:
            check_compatibility(op, is_array=False, value_type=ValueType.NULL)
        assert exc.value.message == f'"{op.value}" operator should not be used with null value'
        assert exc.value.error_type is ParsingErrorType.NULL_VALUE_WITH_INCOMPATIBLE_OPERATOR

    @pytest.mark.parametrize(
        "op", [MongoOperator.EQUALS, MongoOperator.NOT_EQUALS, MongoOperator.IS_NULL]
    )
    def test_null_with_equality(self, op: MongoOperator) -> None:
        check_compatibility(op, is_array=False, value_type=ValueType.NULL)

    def test_number_with_substring(self) -> None:
        with pytest.raises(QuerystringParsingError) as exc:
            check_compatibility(MongoOperator.ILIKE, is_array=False, value_type=ValueType.NUMBER)
        assert exc.value.message == '"ilike" operator should not be used with number values'
        assert exc.value.error_type is ParsingErrorType.NUMBER_VALUE_WITH_SUBSTRING_OPERATOR

    def test_date_with_substring(self) -> None:
        with pytest.raises(QuerystringParsingError) as exc:
            check_compatibility(MongoOperator.ILIKE, is_array=False, value_type=ValueType.DATE)
        assert exc.value.message == '"ilike" operator should not be used with date values'
        assert exc.value.error_type is ParsingErrorType.DATE_VALUE_WITH_SUBSTRING_OPERATOR

    def test_array_rule_is_checked_first(self) -> None:
        """A null array with ilike fails the array rule, not the null rule."""
        with pytest.raises(QuerystringParsingError) as exc:
            check_compatibility(MongoOperator.ILIKE, is_array=True, value_type=ValueType.NULL)
        assert exc.value.error_type is ParsingErrorType.ARRAY_VALUE_WITH_SCALAR_OPERATOR

    def test_ordering_operators_allowed_on_strings(self) -> None:
        check_compatibility(MongoOperator.GREATER_THAN, is_array=False, value_type=ValueType.STRING)


class TestToSqlOperator:
    """Tests for to_sql_operator."""

    @pytest.mark.parametrize(
        ("op", "expected"),
        [
            (MongoOperator.EQUALS, SqlOperator.EQUALS),
            (MongoOperator.NOT_EQUALS, SqlOperator.NOT_EQUALS),
            (MongoOperator.GREATER_THAN, SqlOperator.GREATER_THAN),
            (MongoOperator.GREATER_OR_EQUAL, SqlOperator.GREATER_OR_EQUAL),
            (MongoOperator.LESS_THAN, SqlOperator.LESS_THAN),
            (MongoOperator.LESS_OR_EQUAL, SqlOperator.LESS_OR_EQUAL),
            (MongoOperator.ILIKE, SqlOperator.ILIKE),
            (MongoOperator.IN, SqlOperator.IN),
            (MongoOperator.NOT_IN, SqlOperator.NOT_IN),
        ],
    )
    def test_base_mapping(self, op: MongoOperator, expected: SqlOperator) -> None:
        assert to_sql_operator(op, ValueType.STRING) is expected

    def test_every_operator_is_mapped(self) -> None:
        for op in MongoOperator:
            assert isinstance(to_sql_operator(op, ValueType.NUMBER), SqlOperator)

    def test_null_equality_becomes_is_null(self) -> None:
        assert to_sql_operator(MongoOperator.EQUALS, ValueType.NULL) is SqlOperator.IS_NULL
        assert to_sql_operator(MongoOperator.IS_NULL, ValueType.NULL) is SqlOperator.IS_NULL

    def test_null_inequality_becomes_is_not_null(self) -> None:
        assert to_sql_operator(MongoOperator.NOT_EQUALS, ValueType.NULL) is SqlOperator.IS_NOT_NULL

    def test_null_set_membership_is_not_adjusted(self) -> None:
        assert to_sql_operator(MongoOperator.IN, ValueType.NULL) is SqlOperator.IN

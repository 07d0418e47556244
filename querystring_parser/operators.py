"""Operator resolution, validation, and mapping.

Operators arrive in MongoDB style (`eq`, `gt`, `ilike`, `in`, ...) and leave as
SQL-style operators (`=`, `>`, `ilike`, `in`, `is null`, ...). The validators
raise `QuerystringParsingError` without parameter context; the filter
orchestrator attaches the offending key and value before reporting it.
"""

from __future__ import annotations

from .exceptions import QuerystringParsingError
from .types import MongoOperator, ParsingErrorType, SqlOperator, ValueType

ORDERING_OPERATORS = frozenset(
    [
        MongoOperator.GREATER_THAN,
        MongoOperator.GREATER_OR_EQUAL,
        MongoOperator.LESS_THAN,
        MongoOperator.LESS_OR_EQUAL,
    ]
)
SET_OPERATORS = frozenset([MongoOperator.IN, MongoOperator.NOT_IN])


def resolve_operator(
    explicit: str | None, *, is_array: bool, value_type: ValueType
) -> MongoOperator:
    """Determine the effective operator for a filter field.

    Without an explicit operator, arrays always mean set membership; scalars
    default by type (numbers and dates compare for equality, null checks for
    null, strings match as substrings).

    Raises:
        QuerystringParsingError: If `explicit` is not a known operator token.
    """
    if explicit is not None:
        op = MongoOperator.from_token(explicit)
        if op is None:
            supported = ", ".join(o.value for o in MongoOperator if o is not MongoOperator.IS_NULL)
            raise QuerystringParsingError(
                f'"{explicit}" is not a supported operator (supported: {supported})',
                error_type=ParsingErrorType.UNKNOWN_OPERATOR,
            )
        return op

    if is_array:
        return MongoOperator.IN

    match value_type:
        case ValueType.NUMBER | ValueType.DATE:
            return MongoOperator.EQUALS
        case ValueType.NULL:
            return MongoOperator.IS_NULL
        case ValueType.STRING:
            return MongoOperator.ILIKE


def check_compatibility(operator: MongoOperator, *, is_array: bool, value_type: ValueType) -> None:
    """Reject operator/value combinations that have no sensible meaning.

    Rules are checked in order and the first failure is raised.
    """
    label = f'"{operator.value}" operator'

    if is_array and operator not in SET_OPERATORS:
        raise QuerystringParsingError(
            f"{label} should not be used with array value",
            error_type=ParsingErrorType.ARRAY_VALUE_WITH_SCALAR_OPERATOR,
        )

    if value_type is ValueType.NULL and (
        operator in ORDERING_OPERATORS or operator is MongoOperator.ILIKE
    ):
        raise QuerystringParsingError(
            f"{label} should not be used with null value",
            error_type=ParsingErrorType.NULL_VALUE_WITH_INCOMPATIBLE_OPERATOR,
        )

    if value_type is ValueType.NUMBER and operator is MongoOperator.ILIKE:
        raise QuerystringParsingError(
            f"{label} should not be used with number values",
            error_type=ParsingErrorType.NUMBER_VALUE_WITH_SUBSTRING_OPERATOR,
        )

    if value_type is ValueType.DATE and operator is MongoOperator.ILIKE:
        raise QuerystringParsingError(
            f"{label} should not be used with date values",
            error_type=ParsingErrorType.DATE_VALUE_WITH_SUBSTRING_OPERATOR,
        )


def to_sql_operator(operator: MongoOperator, value_type: ValueType) -> SqlOperator:
    """Map a validated Mongo-style operator to its SQL-style counterpart."""
    match operator:
        case MongoOperator.EQUALS | MongoOperator.IS_NULL:
            sql_operator = SqlOperator.EQUALS
        case MongoOperator.NOT_EQUALS:
            sql_operator = SqlOperator.NOT_EQUALS
        case MongoOperator.GREATER_THAN:
            sql_operator = SqlOperator.GREATER_THAN
        case MongoOperator.GREATER_OR_EQUAL:
            sql_operator = SqlOperator.GREATER_OR_EQUAL
        case MongoOperator.LESS_THAN:
            sql_operator = SqlOperator.LESS_THAN
        case MongoOperator.LESS_OR_EQUAL:
            sql_operator = SqlOperator.LESS_OR_EQUAL
        case MongoOperator.ILIKE:
            sql_operator = SqlOperator.ILIKE
        case MongoOperator.IN:
            sql_operator = SqlOperator.IN
        case MongoOperator.NOT_IN:
            sql_operator = SqlOperator.NOT_IN

    # Null equality has dedicated operators
    if value_type is ValueType.NULL:
        if sql_operator is SqlOperator.EQUALS:
            return SqlOperator.IS_NULL
        if sql_operator is SqlOperator.NOT_EQUALS:
            return SqlOperator.IS_NOT_NULL
    return sql_operator

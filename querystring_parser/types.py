"""
Enumerations shared by the filter parser.

Two operator vocabularies exist on purpose: `MongoOperator` is what callers
write in the querystring (`filter[age][gt]=10`), `SqlOperator` is what the
downstream query builder consumes. They differ because null-valued equality
collapses into dedicated `is null` / `is not null` operators.
"""

from __future__ import annotations

from enum import Enum


class ValueType(Enum):
    """Shared type of every value supplied for one filter field."""

    NUMBER = "number"
    DATE = "date"
    NULL = "null"
    STRING = "string"


class MongoOperator(Enum):
    """Comparison operators accepted in the querystring's bracket notation."""

    EQUALS = "eq"
    NOT_EQUALS = "ne"
    GREATER_THAN = "gt"
    GREATER_OR_EQUAL = "gte"
    LESS_THAN = "lt"
    LESS_OR_EQUAL = "lte"
    ILIKE = "ilike"
    IN = "in"
    NOT_IN = "nin"
    # Only ever chosen as a default for a bare null value; never parsed.
    IS_NULL = "$isnull"

    @classmethod
    def from_token(cls, token: str) -> MongoOperator | None:
        """Look up an explicit querystring token, or None if it is not recognized."""
        key = token.strip().lower()
        for op in cls:
            if op is not cls.IS_NULL and op.value == key:
                return op
        return None


class SqlOperator(Enum):
    """Operators of the predicate vocabulary produced by the parser."""

    EQUALS = "="
    NOT_EQUALS = "<>"
    GREATER_THAN = ">"
    GREATER_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_OR_EQUAL = "<="
    ILIKE = "ilike"
    IN = "in"
    NOT_IN = "not in"
    IS_NULL = "is null"
    IS_NOT_NULL = "is not null"

    @property
    def is_unary(self) -> bool:
        return self in (SqlOperator.IS_NULL, SqlOperator.IS_NOT_NULL)

    @property
    def is_set(self) -> bool:
        return self in (SqlOperator.IN, SqlOperator.NOT_IN)


class ParsingErrorType(Enum):
    """Kinds of error a querystring section parser can report."""

    MIXED_VALUE_TYPES = "mixed_value_types"
    ARRAY_VALUE_WITH_SCALAR_OPERATOR = "array_value_with_scalar_operator"
    NULL_VALUE_WITH_INCOMPATIBLE_OPERATOR = "null_value_with_incompatible_operator"
    NUMBER_VALUE_WITH_SUBSTRING_OPERATOR = "number_value_with_substring_operator"
    DATE_VALUE_WITH_SUBSTRING_OPERATOR = "date_value_with_substring_operator"
    UNKNOWN_OPERATOR = "unknown_operator"
    NOT_AN_ARRAY = "not_an_array"

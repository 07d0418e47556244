"""
Predicate tree produced by the filter parser.

Predicates serialize to a json-logic-like shape where field references are
marked with `#` so consumers can tell columns from literals:

    {"is null": "#deletedAt"}
    {">": ["#age", 10]}
    {"in": ["#age", [10, 20]]}
    {"AND": [{">": ["#age", 10]}, {"ilike": ["#name", "%mike%"]}]}

Multiple predicates are always combined as a left-leaning chain of binary
`AND` nodes, never as an n-ary list.

Example:
    from querystring_parser.filters import build_predicate, combine
    from querystring_parser.types import SqlOperator

    age = build_predicate("age", SqlOperator.GREATER_THAN, [10])
    name = build_predicate("name", SqlOperator.ILIKE, ["mike"])
    tree = combine([age, name])  # same as age & name
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from .config import DEFAULT_CONFIG, ParserConfig
from .querystring import build_bracket_key
from .types import MongoOperator, SqlOperator

# Explicit querystring token for each predicate operator, used when
# serializing a tree back to querystring form.
_QUERYSTRING_TOKENS: dict[SqlOperator, str] = {
    SqlOperator.EQUALS: MongoOperator.EQUALS.value,
    SqlOperator.NOT_EQUALS: MongoOperator.NOT_EQUALS.value,
    SqlOperator.GREATER_THAN: MongoOperator.GREATER_THAN.value,
    SqlOperator.GREATER_OR_EQUAL: MongoOperator.GREATER_OR_EQUAL.value,
    SqlOperator.LESS_THAN: MongoOperator.LESS_THAN.value,
    SqlOperator.LESS_OR_EQUAL: MongoOperator.LESS_OR_EQUAL.value,
    SqlOperator.ILIKE: MongoOperator.ILIKE.value,
    SqlOperator.IN: MongoOperator.IN.value,
    SqlOperator.NOT_IN: MongoOperator.NOT_IN.value,
    SqlOperator.IS_NOT_NULL: MongoOperator.NOT_EQUALS.value,
}


def _format_value(value: Any, config: ParserConfig) -> str:
    """Format a typed value for use in a querystring."""
    if value is None:
        return config.null_sentinel
    if isinstance(value, (int, float)):
        return repr(value)
    return str(value)


def _strip_wildcards(value: str, config: ParserConfig) -> str:
    marker = config.wildcard
    if (
        marker
        and value.startswith(marker)
        and value.endswith(marker)
        and len(value) >= 2 * len(marker)
    ):
        return value[len(marker) : len(value) - len(marker)]
    return value


def _quote(text: str) -> str:
    return quote(text, safe="[],")


class Predicate(ABC):
    """Base class for predicate tree nodes."""

    @abstractmethod
    def to_dict(self, *, config: ParserConfig | None = None) -> dict[str, Any]:
        """Convert the predicate to its json-logic-like wire shape."""
        ...

    @abstractmethod
    def querystring_params(self, *, config: ParserConfig | None = None) -> list[str]:
        """Render the predicate as `key=value` querystring parameters."""
        ...

    def to_querystring(self, *, config: ParserConfig | None = None) -> str:
        """Serialize back to `filter[...]` querystring form.

        Parsing the returned string yields a tree equal to this one, provided no
        string value contains the array separator.
        """
        return "&".join(self.querystring_params(config=config))

    def __and__(self, other: Predicate) -> Predicate:
        """Combine two predicates with `&`."""
        return AndPredicate(self, other)

    def __str__(self) -> str:
        return json.dumps(self.to_dict())

    @property
    def depth(self) -> int:
        """Number of nested AND levels (0 for a leaf)."""
        return 0


@dataclass(frozen=True)
class UnaryPredicate(Predicate):
    """A null check on a field (`is null` / `is not null`)."""

    operator: SqlOperator
    field: str

    def __post_init__(self) -> None:
        if not self.operator.is_unary:
            raise ValueError(f"{self.operator.value!r} is not a unary operator")

    def to_dict(self, *, config: ParserConfig | None = None) -> dict[str, Any]:
        cfg = config or DEFAULT_CONFIG
        return {self.operator.value: f"{cfg.field_ref_marker}{self.field}"}

    def querystring_params(self, *, config: ParserConfig | None = None) -> list[str]:
        cfg = config or DEFAULT_CONFIG
        if self.operator is SqlOperator.IS_NULL:
            key = build_bracket_key(cfg.filter_prefix, self.field)
        else:
            key = build_bracket_key(
                cfg.filter_prefix, self.field, _QUERYSTRING_TOKENS[self.operator]
            )
        return [f"{_quote(key)}={_quote(cfg.null_sentinel)}"]


@dataclass(frozen=True)
class FieldPredicate(Predicate):
    """A comparison of a field against one or more literal values."""

    operator: SqlOperator
    field: str
    values: tuple[Any, ...]

    def __post_init__(self) -> None:
        if self.operator.is_unary:
            raise ValueError(f"{self.operator.value!r} takes no values; use UnaryPredicate")
        if not self.values:
            raise ValueError("FieldPredicate requires at least one value")

    def to_dict(self, *, config: ParserConfig | None = None) -> dict[str, Any]:
        cfg = config or DEFAULT_CONFIG
        ref = f"{cfg.field_ref_marker}{self.field}"
        if self.operator.is_set:
            return {self.operator.value: [ref, list(self.values)]}
        return {self.operator.value: [ref, *self.values]}

    def querystring_params(self, *, config: ParserConfig | None = None) -> list[str]:
        cfg = config or DEFAULT_CONFIG
        key = build_bracket_key(cfg.filter_prefix, self.field, _QUERYSTRING_TOKENS[self.operator])
        values = [_format_value(value, cfg) for value in self.values]
        if self.operator is SqlOperator.ILIKE:
            values = [_strip_wildcards(value, cfg) for value in values]
        return [f"{_quote(key)}={_quote(cfg.array_separator.join(values))}"]


@dataclass(frozen=True)
class AndPredicate(Predicate):
    """`AND` combination of two predicates."""

    left: Predicate
    right: Predicate

    def to_dict(self, *, config: ParserConfig | None = None) -> dict[str, Any]:
        return {"AND": [self.left.to_dict(config=config), self.right.to_dict(config=config)]}

    def querystring_params(self, *, config: ParserConfig | None = None) -> list[str]:
        return [
            *self.left.querystring_params(config=config),
            *self.right.querystring_params(config=config),
        ]

    @property
    def depth(self) -> int:
        return 1 + max(self.left.depth, self.right.depth)


def build_predicate(
    field: str,
    operator: SqlOperator,
    values: Sequence[Any],
    *,
    config: ParserConfig | None = None,
) -> Predicate:
    """Build a leaf predicate, wrapping `ilike` values in wildcards."""
    cfg = config or DEFAULT_CONFIG
    if operator.is_unary:
        return UnaryPredicate(operator, field)
    if operator is SqlOperator.ILIKE:
        values = [f"{cfg.wildcard}{value}{cfg.wildcard}" for value in values]
    return FieldPredicate(operator, field, tuple(values))


def combine(predicates: Sequence[Predicate]) -> Predicate:
    """Fold predicates into a left-leaning chain of `AND` nodes.

    `combine([a, b, c])` is `AND(AND(a, b), c)`; a single predicate is
    returned unchanged.
    """
    if not predicates:
        raise ValueError("combine() requires at least one predicate")
    result = predicates[0]
    for predicate in predicates[1:]:
        result = result & predicate
    return result

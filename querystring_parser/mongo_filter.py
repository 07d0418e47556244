"""Parse "MongoDB-style" filters out of a querystring.

    filter[age][gt]=10&filter[name]=mike

becomes

    {"AND": [{">": ["#age", 10]}, {"ilike": ["#name", "%mike%"]}]}

Each `filter[...]` parameter is handled in four steps: identify field, operator
and raw values; classify and coerce the values and pick a default operator;
reject incompatible operator/value combinations; map to the SQL-style
vocabulary and build a leaf predicate. Leaves are then AND-ed together.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .config import DEFAULT_CONFIG, ParserConfig
from .exceptions import QuerystringParsingError
from .filters import Predicate, build_predicate, combine
from .operators import check_compatibility, resolve_operator, to_sql_operator
from .querystring import ParamValue, build_bracket_key, parse_params, split_bracket_key
from .types import ParsingErrorType
from .values import classify_values, coerce_values

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterField:
    """One `filter[field][operator]=value(s)` parameter."""

    field: str
    operator: str | None
    values: tuple[str, ...]
    is_array: bool
    param_value: ParamValue
    prefix: str = "filter"

    @property
    def param_key(self) -> str:
        """The bracket-notation key as the user wrote it, for error messages."""
        if self.operator is None:
            return build_bracket_key(self.prefix, self.field)
        return build_bracket_key(self.prefix, self.field, self.operator)


@dataclass(frozen=True)
class ParseResult:
    """Result of parsing one querystring section."""

    results: Predicate | None = None
    errors: list[QuerystringParsingError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self, *, config: ParserConfig | None = None) -> dict[str, Any]:
        return {
            "results": self.results.to_dict(config=config) if self.results is not None else None,
            "errors": [error.to_dict() for error in self.errors],
        }


def extract_filter_fields(
    params: Mapping[str, ParamValue], *, config: ParserConfig | None = None
) -> list[FilterField]:
    """Pick the filter parameters out of a tokenized querystring, in order.

    Keys that don't start with the filter prefix, or that have no field
    segment (`filter=x`, `filter[]=x`), are ignored.
    """
    cfg = config or DEFAULT_CONFIG
    fields: list[FilterField] = []

    for key, value in params.items():
        if not key.startswith(cfg.filter_prefix):
            continue
        segments = split_bracket_key(key)
        if not segments or segments[0] != cfg.filter_prefix:
            continue
        if len(segments) < 2:
            logger.debug("Ignoring filter parameter without a field: %s", key)
            continue
        field_name = segments[1]
        operator = segments[2] if len(segments) > 2 else None
        is_array = isinstance(value, list)
        values = tuple(value) if is_array else (value,)
        if not values:
            continue
        fields.append(
            FilterField(
                field=field_name,
                operator=operator,
                values=values,
                is_array=is_array,
                param_value=value,
                prefix=cfg.filter_prefix,
            )
        )

    return fields


def parse_filter_field(
    filter_field: FilterField, *, config: ParserConfig | None = None
) -> Predicate:
    """Turn one filter parameter into a leaf predicate.

    Raises:
        QuerystringParsingError: Without querystring context; the caller adds it.
    """
    value_type = classify_values(filter_field.values, config=config)
    if value_type is None:
        raise QuerystringParsingError(
            "arrays should not mix multiple value types",
            error_type=ParsingErrorType.MIXED_VALUE_TYPES,
        )

    values = coerce_values(value_type, filter_field.values)
    operator = resolve_operator(
        filter_field.operator, is_array=filter_field.is_array, value_type=value_type
    )
    check_compatibility(operator, is_array=filter_field.is_array, value_type=value_type)
    sql_operator = to_sql_operator(operator, value_type)

    logger.debug(
        "Filter %s: type=%s operator=%s -> %s",
        filter_field.param_key,
        value_type.value,
        operator.value,
        sql_operator.value,
    )
    return build_predicate(filter_field.field, sql_operator, values, config=config)


def parse_mongo_filter(
    querystring: str,
    *,
    params: Mapping[str, ParamValue] | None = None,
    upstream_errors: Sequence[QuerystringParsingError] | None = None,
    config: ParserConfig | None = None,
) -> ParseResult:
    """Parse the `filter[...]` parameters of a querystring into a predicate tree.

    Args:
        querystring: The decoded querystring (with or without leading `?`).
        params: Already-tokenized parameters; tokenized from `querystring` if omitted.
        upstream_errors: Errors from an earlier parsing stage. When non-empty,
            nothing is parsed and they are returned unchanged.
        config: Parser configuration.

    Returns:
        ParseResult. Parsing stops at the first invalid filter parameter, so
        `errors` holds at most one error and `results` is None in that case.
        A querystring without filters yields no results and no errors.
    """
    if upstream_errors:
        return ParseResult(results=None, errors=list(upstream_errors))

    cfg = config or DEFAULT_CONFIG
    if params is None:
        params = parse_params(querystring, config=cfg)

    predicates: list[Predicate] = []
    for filter_field in extract_filter_fields(params, config=cfg):
        try:
            predicates.append(parse_filter_field(filter_field, config=cfg))
        except QuerystringParsingError as e:
            error = QuerystringParsingError(
                e.message,
                querystring=querystring,
                param_key=filter_field.param_key,
                param_value=filter_field.param_value,
                error_type=e.error_type,
            )
            logger.debug("Stopping filter parsing at %s: %s", filter_field.param_key, e.message)
            return ParseResult(results=None, errors=[error])  # short circuit

    if not predicates:
        return ParseResult()
    return ParseResult(results=combine(predicates))

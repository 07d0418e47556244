"""Value classification and coercion for filter values.

A filter field's values are classified as a whole: `10,20` is a NUMBER field,
`10,abc` is an error rather than a partial result.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from .config import DEFAULT_CONFIG, ParserConfig
from .types import ValueType

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")
# CPython refuses int<->str conversions beyond this many digits
_MAX_INTEGER_DIGITS = 4300
_DATE_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)


def _is_date(value: str) -> bool:
    if not _DATE_RE.match(value):
        return False
    raw = value
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        datetime.fromisoformat(raw)
    except ValueError:
        # Right shape, impossible calendar value (e.g. 2024-02-30)
        return False
    return True


def _is_number(text: str) -> bool:
    """Finite decimal literal that converts without loss of range."""
    if not _NUMBER_RE.match(text):
        return False
    if _INTEGER_RE.match(text):
        return len(text.lstrip("+-")) <= _MAX_INTEGER_DIGITS
    return math.isfinite(float(text))


def is_null_string(value: str, *, config: ParserConfig | None = None) -> bool:
    cfg = config or DEFAULT_CONFIG
    return value.strip().lower() == cfg.null_sentinel.lower()


def classify_value(value: str, *, config: ParserConfig | None = None) -> ValueType:
    """Classify a single raw querystring value."""
    if is_null_string(value, config=config):
        return ValueType.NULL
    text = value.strip()
    if _is_number(text):
        return ValueType.NUMBER
    if _is_date(text):
        return ValueType.DATE
    return ValueType.STRING


def classify_values(
    values: Sequence[str], *, config: ParserConfig | None = None
) -> ValueType | None:
    """Return the type shared by every value, or None if the values mix types."""
    if not values:
        raise ValueError("classify_values() requires at least one value")
    types = {classify_value(value, config=config) for value in values}
    if len(types) != 1:
        return None
    return types.pop()


def _to_number(value: str) -> int | float:
    text = value.strip()
    if _INTEGER_RE.match(text):
        return int(text)
    return float(text)


def coerce_values(value_type: ValueType, values: Sequence[str]) -> list[Any]:
    """Convert raw strings to typed values according to their shared type.

    Dates are validated by classification but deliberately kept as the
    original text so downstream consumers see exactly what was sent.
    """
    if value_type is ValueType.NULL:
        return [None for _ in values]
    if value_type is ValueType.NUMBER:
        return [_to_number(value) for value in values]
    return list(values)

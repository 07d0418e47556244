"""Low-level querystring tokenizing shared by the section parsers."""

from __future__ import annotations

from urllib.parse import parse_qsl

from .config import DEFAULT_CONFIG, ParserConfig

ParamValue = str | list[str]


def parse_params(
    querystring: str, *, config: ParserConfig | None = None
) -> dict[str, ParamValue]:
    """Split a decoded querystring into a key -> value(s) mapping.

    Keys are kept verbatim, brackets included (`filter[age][gt]`), so callers can
    re-split them. A value containing the array separator becomes a list, and
    repeating a key accumulates its values into a list.

    Examples:
        "filter[age]=10,20" -> {"filter[age]": ["10", "20"]}
        "filter[name]=mike&filter[name]=bob" -> {"filter[name]": ["mike", "bob"]}
    """
    cfg = config or DEFAULT_CONFIG
    text = querystring.lstrip("?")
    params: dict[str, ParamValue] = {}

    for key, raw in parse_qsl(text, keep_blank_values=True):
        value: ParamValue = raw.split(cfg.array_separator) if cfg.array_separator in raw else raw
        if key not in params:
            params[key] = value
            continue
        # Repeated key: merge into a list
        existing = params[key]
        merged = existing if isinstance(existing, list) else [existing]
        merged.extend(value if isinstance(value, list) else [value])
        params[key] = merged

    return params


def split_bracket_key(key: str) -> list[str]:
    """Split `a[b][c]` into `["a", "b", "c"]`, dropping empty segments."""
    return [part for part in key.replace("[", "]").split("]") if part]


def build_bracket_key(*segments: str) -> str:
    """Inverse of `split_bracket_key`: `("filter", "age", "gt")` -> `filter[age][gt]`."""
    head, *rest = segments
    return head + "".join(f"[{segment}]" for segment in rest)

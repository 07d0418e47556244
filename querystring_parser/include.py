"""Validation of the already-parsed `include` querystring section."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .exceptions import QuerystringParsingError
from .types import ParsingErrorType


@dataclass(frozen=True)
class IncludeResult:
    results: list[dict[str, Any]] = field(default_factory=list)
    errors: list[QuerystringParsingError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def parse_include(
    include: Any, include_errors: Sequence[QuerystringParsingError] | None = None
) -> IncludeResult:
    """Turn a list of relation names into a single `select` operation.

    Errors from the stage that produced `include` are passed through untouched.
    """
    if include_errors:
        return IncludeResult(errors=list(include_errors))
    if not isinstance(include, list):
        return IncludeResult(
            errors=[
                QuerystringParsingError(
                    "Include field should be an array",
                    param_key="include",
                    param_value=include,
                    error_type=ParsingErrorType.NOT_AN_ARRAY,
                )
            ]
        )
    if not include:
        return IncludeResult()
    return IncludeResult(results=[{"fx": "select", "parameters": list(include)}])

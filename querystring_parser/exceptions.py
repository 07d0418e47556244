"""
Error types for querystring parsing.

Parsers never raise `QuerystringParsingError`; they return instances of it in
their result's `errors` list so that several querystring sections can be
aggregated into one report by the caller. It is still an `Exception`
subclass so callers that prefer raising can do so.
"""

from __future__ import annotations

from typing import Any

from .types import ParsingErrorType


class QuerystringParsingError(Exception):
    """A user-facing problem with one querystring parameter."""

    def __init__(
        self,
        message: str,
        *,
        querystring: str | None = None,
        param_key: str | None = None,
        param_value: str | list[str] | Any = None,
        error_type: ParsingErrorType | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.querystring = querystring
        self.param_key = param_key
        self.param_value = param_value
        self.error_type = error_type

    def __str__(self) -> str:
        if self.param_key:
            return f"{self.param_key}: {self.message}"
        return self.message

    def __repr__(self) -> str:
        return (
            f"QuerystringParsingError({self.message!r}, param_key={self.param_key!r}, "
            f"param_value={self.param_value!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuerystringParsingError):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self.message, self.querystring, self.param_key))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase shape used in API error payloads."""
        return {
            "type": self.error_type.value if self.error_type is not None else None,
            "message": self.message,
            "querystring": self.querystring,
            "paramKey": self.param_key,
            "paramValue": self.param_value,
        }

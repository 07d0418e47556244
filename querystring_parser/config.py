"""
Parser configuration.

The defaults reproduce the conventional `filter[field][op]=a,b` syntax.
Configuration is immutable so a single instance can be shared freely.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ParserConfig(BaseModel):
    """Knobs for the querystring filter parser."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    filter_prefix: str = Field("filter", min_length=1)
    null_sentinel: str = Field("null", min_length=1)
    wildcard: str = "%"
    field_ref_marker: str = "#"
    array_separator: str = Field(",", min_length=1, max_length=1)

    @field_validator("filter_prefix")
    @classmethod
    def _prefix_has_no_brackets(cls, value: str) -> str:
        if "[" in value or "]" in value:
            raise ValueError("filter_prefix must not contain brackets")
        return value


DEFAULT_CONFIG = ParserConfig()

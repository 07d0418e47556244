"""Command line interface for querystring-parser (requires the `cli` extra)."""

from __future__ import annotations

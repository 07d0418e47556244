"""Logging setup for the command line tool."""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

_PACKAGE_LOGGER = "querystring_parser"


def _level_for_verbosity(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(*, verbosity: int) -> tuple[int, list[logging.Handler]]:
    """Route package logs to stderr; returns the previous state for `restore_logging`."""
    logger = logging.getLogger(_PACKAGE_LOGGER)
    previous = (logger.level, list(logger.handlers))

    handler = RichHandler(
        console=Console(file=sys.stderr, force_terminal=False),
        show_time=False,
        show_path=verbosity >= 2,
    )
    logger.handlers = [handler]
    logger.setLevel(_level_for_verbosity(verbosity))
    return previous


def restore_logging(previous: tuple[int, list[logging.Handler]]) -> None:
    level, handlers = previous
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.handlers = handlers
    logger.setLevel(level)

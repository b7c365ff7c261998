"""Logging setup for the CLI and the MCP server."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from cloudmcp.ui.console import err_console

LOGGER_NAME = "cloudmcp"


def configure_logging(level: str | int = logging.WARNING, *, console: Console | None = None) -> None:
    """Route ``cloudmcp`` loggers through a RichHandler on stderr.

    Safe to call more than once; the handler is replaced rather than stacked.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or err_console,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False

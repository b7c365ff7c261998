"""Shared Rich Console and style definitions.

Diagnostics go to stderr via ``err_console``; stdout is reserved for the
JSON response and the stdio MCP transport.
"""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

CLOUDMCP_THEME = Theme(
    {
        "info": "cyan",
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "muted": "dim",
        "logging.level.debug": "dim",
        "logging.level.info": "cyan",
        "logging.level.warning": "bold yellow",
        "logging.level.error": "bold red",
    }
)

err_console = Console(stderr=True, theme=CLOUDMCP_THEME)

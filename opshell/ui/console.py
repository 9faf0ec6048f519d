"""
Console construction with colour auto-detection.

All command output goes through a rich Console so tables, styled error
lines and plain text share one stream. Colour honours NO_COLOR and
FORCE_COLOR the same way across the shell.
"""

from __future__ import annotations

import os
import sys
from typing import Any

from rich.console import Console
from rich.theme import Theme

# Default theme for the shell
SHELL_THEME = {
    "info": "cyan",
    "warning": "yellow",
    "error": "red bold",
    "success": "green",
    "muted": "dim",
    "key": "bold blue",
    "prompt": "yellow",
}


def _is_interactive() -> bool:
    """Check if we're in an interactive terminal."""
    return sys.stdout.isatty()


def _should_use_color() -> bool:
    """Determine if color output should be used."""
    # https://no-color.org/
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    return _is_interactive()


def get_console(
    *,
    file: Any = None,
    no_color: bool | None = None,
    width: int | None = None,
) -> Console:
    """
    Create a themed console.

    Args:
        file: Output file (default: sys.stdout)
        no_color: Disable colour (None = auto-detect)
        width: Fixed width (None = terminal width)

    Returns:
        rich Console instance
    """
    if no_color is None:
        no_color = not _should_use_color()

    return Console(
        file=file,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
        width=width,
        theme=Theme(SHELL_THEME),
    )

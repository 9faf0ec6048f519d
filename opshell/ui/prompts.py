"""
Interactive prompts.

Single-line text and masked password prompts used to resolve command
options. Prompts block the calling thread with no timeout; the shell runs
one command at a time, so nothing else waits on them.

In non-TTY environments (or with OPSHELL_NON_INTERACTIVE set) prompts do
not read input at all and return their default, letting the caller's
fallback chain decide what happens next.
"""

from __future__ import annotations

import os
import sys

from rich.console import Console
from rich.prompt import Prompt

from ..exceptions import InputCancelledError


def is_interactive() -> bool:
    """Check if prompts can read from a terminal."""
    if os.environ.get("OPSHELL_NON_INTERACTIVE", "").lower() in ("1", "true", "yes"):
        return False
    return sys.stdin.isatty() and sys.stdout.isatty()


def ask(
    message: str,
    *,
    default: str | None = None,
    password: bool = False,
    console: Console | None = None,
) -> str | None:
    """
    Prompt for a single line of input.

    Args:
        message: The prompt message
        default: Value returned on empty input or when not interactive
        password: Mask typed characters
        console: Console to prompt on (default: a new stdout console)

    Returns:
        The entered text, or default

    Raises:
        InputCancelledError: If the user presses Ctrl-C or Ctrl-D. SIGTERM
            (TerminationRequest) is not a cancellation and passes through.
    """
    if not is_interactive():
        return default

    try:
        if default is None:
            return Prompt.ask(message, console=console, password=password)
        return Prompt.ask(
            message,
            console=console,
            password=password,
            default=default,
            show_default=not password,
        )
    except (EOFError, KeyboardInterrupt) as e:
        raise InputCancelledError() from e


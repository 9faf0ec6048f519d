"""
Command dispatch.

One input line goes through four steps:

1. match the longest registered command name against the leading words
2. check the command's availability gate
3. parse the rest of the line (shell quoting rules, or verbatim for raw
   commands) and invoke the handler

The gate is checked before arguments are parsed, so an unavailable
command is refused even when its arguments are wrong.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from ..exceptions import ShellError
from ..log import Logger, LoggerFactory
from .command import Command, ParserExit
from .errors import CommandError, ExitRequest
from .registry import CommandRegistry


def refusal_message(command: Command, reason: str | None) -> str:
    return (
        f"Command '{command.name}' exists but is not currently available "
        f"because {reason}."
    )


def unknown_message(line: str) -> str:
    return f"Unknown command: '{line}'. Type 'help' for the list of commands."


class Dispatcher:
    """
    Routes input lines to registered commands.

    Errors raised on purpose (ShellError) are printed as error lines.
    Anything else is logged with its traceback and printed as
    "<Type>: <message>". The shell keeps running either way; only
    ExitRequest and KeyboardInterrupt escape.
    """

    def __init__(self, registry: CommandRegistry, console: Console, lg: Logger) -> None:
        self.registry = registry
        self.console = console
        self._lg = LoggerFactory.derive(lg, ["shell", "dispatch"])

    def dispatch(self, line: str) -> bool:
        """
        Run one input line.

        Args:
            line: Raw input line

        Returns:
            True if a command ran to completion, False if the line was blank,
            unknown, refused or failed

        Raises:
            ExitRequest: If the command asked the shell to end
        """
        line = line.strip()
        if not line:
            return False

        words = line.split()
        matched = self.registry.match(words)
        if matched is None:
            self._error(unknown_message(line))
            return False
        command, rest = matched
        name_words = len(words) - len(rest)
        parts = line.split(None, name_words)
        tail = parts[name_words] if len(parts) > name_words else ""

        availability = command.availability()
        if not availability.available:
            self._lg.debug(
                "command refused", extra={"command": command.name, "reason": availability.reason}
            )
            self._error(refusal_message(command, availability.reason))
            return False

        return self._invoke(command, tail)

    def _invoke(self, command: Command, tail: str) -> bool:
        try:
            args = command.parse_line(tail, self.console)
        except ParserExit:
            return False
        except CommandError as e:
            self._error(str(e))
            return False

        self._lg.trace("invoking", extra={"command": command.name})
        try:
            command.handler(args)
        except ExitRequest:
            raise
        except ShellError as e:
            self._lg.debug("command failed", extra={"command": command.name, "exception": e})
            self._error(str(e))
            return False
        except Exception as e:
            self._lg.error(
                "command raised", extra={"command": command.name, "exception": e}, exc_info=True
            )
            self._error(f"{type(e).__name__}: {e}")
            return False
        return True

    def _error(self, message: str) -> None:
        self.console.print(f"[error]{escape(message)}[/error]")

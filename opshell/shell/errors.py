"""
Error classes for the shell framework.
"""

from typing import Any

from ..exceptions import ShellError


class CommandError(ShellError):
    """Raised when command input cannot be parsed or matched."""

    pass


class CommandRegistrationError(Exception):
    """Raised when a command cannot be registered."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to register command '{name}': {reason}")


class DupCommandError(CommandRegistrationError):
    """Raised when attempting to register a duplicate command."""

    def __init__(self, command: Any) -> None:
        self.command = command
        super().__init__(command.name, "command is already registered")


class ExitRequest(Exception):
    """Raised by the quit command to end the REPL."""

    def __init__(self, code: int = 0) -> None:
        self.code = code
        super().__init__(f"exit requested with code {code}")

"""
Command registration and lookup.

Commands are stored in a plain lookup table keyed by their full name.
Input is matched by the longest registered name that prefixes its
tokens, so "db query select 1" resolves to "db query" with arguments
["select", "1"].
"""

from __future__ import annotations

import re

from .command import Command
from .errors import CommandRegistrationError, DupCommandError

MAX_COMMAND_NAME_LENGTH = 64

_WORD = r"[a-z][a-z0-9_-]*"
_NAME_RE = re.compile(rf"^{_WORD}( {_WORD})*$")


def _validate_name(command_name: str, name: str) -> None:
    if not name:
        raise CommandRegistrationError("", "Command must have a name")

    if len(name) > MAX_COMMAND_NAME_LENGTH:
        raise CommandRegistrationError(
            command_name,
            f"Command name exceeds maximum length of {MAX_COMMAND_NAME_LENGTH} characters",
        )

    if not _NAME_RE.match(name):
        raise CommandRegistrationError(
            command_name,
            f"'{name}' must be lowercase words separated by single spaces, each "
            "starting with a letter and containing only letters, numbers, "
            "underscores, and hyphens (e.g., 'db connect')",
        )


class CommandRegistry:
    """Centralized command registration and lookup."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._aliases: dict[str, str] = {}
        self._max_words = 0

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name: str) -> bool:
        return self.is_registered(name)

    def register(self, command: Command) -> Command:
        """
        Register a command and its aliases.

        Raises:
            CommandRegistrationError: If a name or alias is invalid or taken
            DupCommandError: If the command name is already registered
        """
        _validate_name(command.name, command.name)
        if self.is_registered(command.name):
            raise DupCommandError(command)

        for alias in command.aliases:
            _validate_name(command.name, alias)
            if self.is_registered(alias):
                raise CommandRegistrationError(
                    command.name, f"Alias '{alias}' is already registered"
                )

        self._commands[command.name] = command
        for alias in command.aliases:
            self._aliases[alias] = command.name
        for name in [command.name, *command.aliases]:
            self._max_words = max(self._max_words, len(name.split(" ")))
        return command

    def get(self, name: str) -> Command | None:
        """Get a command by name or alias."""
        if name in self._commands:
            return self._commands[name]
        if name in self._aliases:
            return self._commands[self._aliases[name]]
        return None

    def match(self, tokens: list[str]) -> tuple[Command, list[str]] | None:
        """
        Find the command named by the leading tokens.

        Returns:
            The command and the remaining tokens, or None if nothing matches
        """
        for n in range(min(len(tokens), self._max_words), 0, -1):
            command = self.get(" ".join(tokens[:n]))
            if command is not None:
                return command, tokens[n:]
        return None

    def list_commands(self) -> list[Command]:
        """All commands in registration order."""
        return list(self._commands.values())

    def is_registered(self, name: str) -> bool:
        return name in self._commands or name in self._aliases

"""
Built-in commands: help, quit and exit.
"""

from __future__ import annotations

import argparse
from itertools import groupby

from rich.console import Console
from rich.markup import escape

from .command import Command
from .dispatcher import refusal_message
from .errors import CommandError, ExitRequest
from .exit_hooks import ExitHookRegistry
from .registry import CommandRegistry

BUILTIN_GROUP = "Built-In Commands"


def _group_of(command: Command) -> str:
    words = command.name.split(" ")
    return words[0] if len(words) > 1 else BUILTIN_GROUP


class HelpCommand:
    """Lists commands, or shows the usage of one command."""

    def __init__(self, registry: CommandRegistry, console: Console) -> None:
        self._registry = registry
        self._console = console

    def setup(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("command", nargs="*", help="command to describe")

    def __call__(self, args: argparse.Namespace) -> None:
        if args.command:
            self.describe(" ".join(args.command))
        else:
            self.list_all()

    def describe(self, name: str) -> None:
        command = self._registry.get(name)
        if command is None:
            raise CommandError(f"Unknown command: '{name}'.")
        self._console.print(command.build_parser().format_help().rstrip(), markup=False)
        if command.aliases:
            self._console.print(f"aliases: {', '.join(command.aliases)}", markup=False)
        availability = command.availability()
        if not availability.available:
            self._console.print(
                f"[warning]{escape(refusal_message(command, availability.reason))}[/warning]"
            )

    def list_all(self) -> None:
        commands = sorted(self._registry.list_commands(), key=_group_of)
        self._console.print("AVAILABLE COMMANDS")
        marked = False
        for group, members in groupby(commands, key=_group_of):
            self._console.print()
            self._console.print(f"[key]{escape(group)}[/key]")
            for command in members:
                names = ", ".join([command.name, *command.aliases])
                availability = command.availability()
                if availability.available:
                    line = f"      {names}: {command.help}"
                else:
                    marked = True
                    line = f"    * {names}: {command.help} ({availability.reason})"
                self._console.print(line, markup=False)

        if marked:
            self._console.print()
            self._console.print("Commands marked with (*) are currently unavailable.")
        self._console.print("Type 'help <command>' to learn more.")


def quit_command(hooks: ExitHookRegistry) -> Command:
    """
    The quit command: drain the exit hooks, then end the REPL.

    Hooks run here, before ExitRequest unwinds the loop, so cleanup such as
    closing an open connection finishes while the shell is still intact.
    """

    def handler(args: argparse.Namespace) -> None:
        hooks.run_all()
        raise ExitRequest(0)

    return Command("quit", handler, help="Exit the shell.", aliases=["exit"])


def register_builtins(
    registry: CommandRegistry, console: Console, hooks: ExitHookRegistry
) -> None:
    help_cmd = HelpCommand(registry, console)
    registry.register(
        Command("help", help_cmd, help="Display help about available commands.", setup=help_cmd.setup)
    )
    registry.register(quit_command(hooks))


__all__ = ["BUILTIN_GROUP", "HelpCommand", "quit_command", "register_builtins"]

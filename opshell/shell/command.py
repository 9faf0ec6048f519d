"""
Command definition and per-command argument parsing.
"""

from __future__ import annotations

import argparse
import re
import shlex
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import IO, NoReturn

from rich.console import Console

from .availability import ALWAYS, Availability, Gate
from .errors import CommandError

Handler = Callable[[argparse.Namespace], None]
ParserSetup = Callable[[argparse.ArgumentParser], None]


class ParserExit(Exception):
    """Raised instead of sys.exit when a parser finishes early (--help)."""

    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__(status)


class CommandParser(argparse.ArgumentParser):
    """
    ArgumentParser that reports errors as CommandError and prints to a console.

    The standard parser exits the process on bad input, which would end the
    whole shell.
    """

    def __init__(self, *args, console: Console | None = None, **kwargs) -> None:
        self._console = console
        super().__init__(*args, **kwargs)

    def error(self, message: str) -> NoReturn:
        raise CommandError(f"{self.prog}: {message}")

    def exit(self, status: int = 0, message: str | None = None) -> NoReturn:
        if message:
            raise CommandError(message.strip())
        raise ParserExit(status)

    def _print_message(self, message: str, file: IO[str] | None = None) -> None:
        if not message:
            return
        if self._console is not None:
            self._console.print(message.rstrip("\n"), markup=False)
        else:
            super()._print_message(message, file)


@dataclass
class Command:
    """
    A shell command: a multi-word name bound to a handler and a gate.

    Attributes:
        name: Command name, one or more lowercase words ("db connect")
        handler: Called with the parsed arguments
        help: One-line description
        gate: Availability gate checked before dispatch (None = always)
        setup: Adds the command's arguments to its parser
        aliases: Alternative names
        raw: Hand the text between leading and trailing options to the single
            positional verbatim instead of shell-tokenizing it (SQL statements)
    """

    name: str
    handler: Handler
    help: str = ""
    gate: Gate | None = None
    setup: ParserSetup | None = None
    aliases: list[str] = field(default_factory=list)
    raw: bool = False

    def availability(self) -> Availability:
        return self.gate.check() if self.gate is not None else ALWAYS

    def build_parser(self, console: Console | None = None) -> CommandParser:
        parser = CommandParser(
            prog=self.name,
            description=self.help,
            console=console,
            allow_abbrev=False,
        )
        if self.setup is not None:
            self.setup(parser)
        return parser

    def parse(self, argv: list[str], console: Console | None = None) -> argparse.Namespace:
        """
        Parse the arguments following the command name.

        Raises:
            CommandError: If the arguments are invalid
            ParserExit: If parsing finished early, e.g. after --help
        """
        return self.build_parser(console).parse_args(argv)

    def parse_line(self, tail: str, console: Console | None = None) -> argparse.Namespace:
        """
        Parse the raw text following the command name.

        Ordinary commands tokenize it with shell quoting rules. Raw commands
        take their options from the start and end of the text and pass the
        text in between through unchanged, so quotes inside it survive.

        Raises:
            CommandError: If the text cannot be tokenized or the arguments are invalid
            ParserExit: If parsing finished early, e.g. after --help
        """
        if not self.raw:
            try:
                argv = shlex.split(tail)
            except ValueError as e:
                raise CommandError(f"Invalid input: {e}") from e
            return self.parse(argv, console)

        parser = self.build_parser(console)
        options, text = split_raw(tail, _option_arity(parser))
        argv = [*options, "--", text] if text else options
        return parser.parse_args(argv)


def _option_arity(parser: argparse.ArgumentParser) -> dict[str, bool]:
    """Map each option string to whether it takes a value."""
    return {
        option: action.nargs != 0
        for action in parser._actions
        for option in action.option_strings
    }


def _is_whole_option(word: str, arity: dict[str, bool]) -> bool:
    # A flag, or an option written as --name=value
    name, eq, _ = word.partition("=")
    return name in arity and (bool(eq) or not arity[name])


def split_raw(tail: str, arity: dict[str, bool]) -> tuple[list[str], str]:
    """
    Split leading and trailing options off a raw argument text.

    Words in between keep their original spacing and quotes. A text wrapped
    whole in one pair of quotes is unwrapped.

    Example:
        split_raw("select 'a  b' --format json", {"--format": True})
        # (["--format", "json"], "select 'a  b'")
    """
    words = [(m.group(), m.start(), m.end()) for m in re.finditer(r"\S+", tail)]

    leading: list[str] = []
    first = 0
    while first < len(words):
        word = words[first][0]
        if _is_whole_option(word, arity):
            leading.append(word)
            first += 1
        elif arity.get(word):
            leading.extend(w for w, _, _ in words[first : first + 2])
            first += 2
        else:
            break

    trailing: list[str] = []
    last = len(words)
    while last > first:
        word = words[last - 1][0]
        if _is_whole_option(word, arity):
            trailing.insert(0, word)
            last -= 1
        elif last - first >= 2 and arity.get(words[last - 2][0]):
            trailing[:0] = [words[last - 2][0], word]
            last -= 2
        else:
            break

    text = tail[words[first][1] : words[last - 1][2]] if first < last else ""
    return [*leading, *trailing], _unwrap(text)


def _unwrap(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        try:
            tokens = shlex.split(text)
        except ValueError:
            return text
        if len(tokens) == 1:
            return tokens[0]
    return text

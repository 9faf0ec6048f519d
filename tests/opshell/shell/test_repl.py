"""
Tests for shell/repl.py.

Tests the REPL loop including:
- quit / exit and end of input
- Ctrl-C handling
- SIGTERM while reading, prompting or running a command
- Exit hook draining on every way out
"""

import os
import signal
import time
from unittest.mock import patch

import pytest

from opshell.commands.database import DatabaseCommands
from opshell.db.session import DatabaseSession
from opshell.shell.command import Command
from opshell.shell.repl import Shell
from opshell.ui import prompts


class ScriptedReader:
    """Reader returning queued lines, then raising EOFError."""

    def __init__(self, *lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError()
        line = self.lines.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line


def _shell(console, lg, *lines, **kwargs):
    return Shell(console, lg, reader=ScriptedReader(*lines), handle_signals=False, **kwargs)


@pytest.mark.unit
class TestShellLoop:
    """Test Shell.run()."""

    @pytest.mark.parametrize("word", ["quit", "exit"])
    def test_quit_ends_loop(self, console, lg, word):
        """Test quit and exit end the loop with code 0."""
        shell = _shell(console, lg, word, "help")

        assert shell.run() == 0
        assert shell._reader.lines == ["help"]
        assert "(Program exited.)" in console.file.getvalue()

    def test_quit_drains_hooks_before_exit(self, console, lg):
        """Test quit runs the exit hooks exactly once."""
        shell = _shell(console, lg, "quit")
        calls = []
        shell.hooks.on_exit(lambda: calls.append("closed"))

        shell.run()

        assert calls == ["closed"]
        assert shell.hooks.drained

    def test_eof_ends_loop_and_drains_hooks(self, console, lg):
        """Test end of input behaves like quit."""
        shell = _shell(console, lg)
        calls = []
        shell.hooks.on_exit(lambda: calls.append("closed"))

        assert shell.run() == 0
        assert calls == ["closed"]

    def test_ctrl_c_cancels_line_only(self, console, lg):
        """Test KeyboardInterrupt while reading abandons the line and continues."""
        ran = []
        shell = _shell(console, lg, KeyboardInterrupt(), "ping", "quit")
        shell.registry.register(Command("ping", lambda args: ran.append(True)))

        assert shell.run() == 0
        assert ran == [True]

    def test_ctrl_c_during_command_continues(self, console, lg):
        """Test KeyboardInterrupt inside a command returns to the prompt."""

        def slow(args):
            raise KeyboardInterrupt()

        shell = _shell(console, lg, "slow", "quit")
        shell.registry.register(Command("slow", slow))

        assert shell.run() == 0

    def test_sigterm_during_command_ends_loop_with_143(self, console, lg):
        """Test SIGTERM inside a command ends the loop after the exit hooks."""
        shell = _shell(console, lg, "term", "quit")
        calls = []
        shell.hooks.on_exit(lambda: calls.append("closed"))

        def term(args):
            shell._termination._handle(signal.SIGTERM, None)

        shell.registry.register(Command("term", term))

        assert shell.run() == 143
        assert calls == ["closed"]
        assert shell._reader.lines == ["quit"]

    def test_sigterm_during_prompt_ends_loop(self, console, lg, fake_provider):
        """Test SIGTERM while a password prompt waits is not taken as a cancelled input."""
        shell = _shell(console, lg, "db connect --url u --username n", "quit")
        session = DatabaseSession(fake_provider, lg)
        for command in DatabaseCommands(session, console, shell.hooks).commands():
            shell.registry.register(command)

        def interrupted_prompt(*args, **kwargs):
            shell._termination._handle(signal.SIGTERM, None)

        with patch.object(prompts, "is_interactive", return_value=True), patch.object(
            prompts.Prompt, "ask", side_effect=interrupted_prompt
        ):
            assert shell.run() == 143

        assert shell._reader.lines == ["quit"]
        assert fake_provider.opened == []
        assert "cancelled" not in console.file.getvalue()

    def test_real_sigterm_while_reading(self, console, lg):
        """Test a delivered SIGTERM ends the shell and the old handler comes back."""
        before = signal.getsignal(signal.SIGTERM)

        def reader(prompt):
            os.kill(os.getpid(), signal.SIGTERM)
            time.sleep(5)
            return "quit"

        shell = Shell(console, lg, reader=reader)

        assert shell.run() == 143
        assert signal.getsignal(signal.SIGTERM) == before

    def test_failed_command_keeps_loop_running(self, console, lg):
        """Test errors inside commands do not end the shell."""

        def broken(args):
            raise ValueError("nope")

        shell = _shell(console, lg, "broken", "quit")
        shell.registry.register(Command("broken", broken))

        assert shell.run() == 0
        assert "ValueError: nope" in console.file.getvalue()

    def test_custom_prompt(self, console, lg):
        """Test the configured prompt is passed to the reader."""
        shell = _shell(console, lg, "quit", prompt="ops>")

        shell.run()

        assert shell._reader.prompts == ["ops>"]

    def test_builtins_registered(self, console, lg):
        """Test help, quit and exit are available in a new shell."""
        shell = _shell(console, lg)

        for name in ("help", "quit", "exit"):
            assert shell.registry.is_registered(name)

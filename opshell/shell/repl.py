"""
The interactive read-eval-print loop.
"""

from __future__ import annotations

from collections.abc import Callable

from rich.console import Console

from ..log import Logger, LoggerFactory
from .builtin import register_builtins
from .dispatcher import Dispatcher
from .errors import ExitRequest
from .exit_hooks import ExitHookRegistry
from .registry import CommandRegistry
from .shutdown import TerminationHandler, TerminationRequest

DEFAULT_PROMPT = "opshell:>"

Reader = Callable[[str], str]


class Shell:
    """
    Reads lines, dispatches them, and runs the exit hooks once at the end.

    The loop ends on quit/exit, end of input (Ctrl-D) or SIGTERM. Ctrl-C
    while typing or while a command runs abandons that line only.

    Example:
        shell = Shell(console, lg)
        register_all(shell, config)
        code = shell.run()
    """

    def __init__(
        self,
        console: Console,
        lg: Logger,
        prompt: str = DEFAULT_PROMPT,
        reader: Reader | None = None,
        handle_signals: bool = True,
    ) -> None:
        """
        Initialize the shell with the built-in commands registered.

        Args:
            console: Output console
            lg: Root logger
            prompt: Prompt shown before each line
            reader: Line reader (default: console.input)
            handle_signals: Install the SIGTERM handler while running
        """
        self.console = console
        self.lg = lg
        self.prompt = prompt
        self.registry = CommandRegistry()
        self.hooks = ExitHookRegistry(lg)
        self.dispatcher = Dispatcher(self.registry, console, lg)
        self._reader = reader if reader is not None else self._read_console
        self._handle_signals = handle_signals
        self._termination = TerminationHandler()
        self._lg = LoggerFactory.derive(lg, "shell")

        register_builtins(self.registry, console, self.hooks)

    def _read_console(self, prompt: str) -> str:
        return self.console.input(f"[prompt]{prompt}[/prompt] ")

    def run(self) -> int:
        """
        Run until the shell is asked to end.

        Returns:
            Exit code: 0 on quit or end of input, 143 on SIGTERM
        """
        if self._handle_signals:
            self._termination.install()

        self._lg.debug("shell started", extra={"commands": len(self.registry)})
        try:
            return self._loop()
        except TerminationRequest as e:
            self._lg.info("terminated by signal")
            return e.code
        finally:
            self.hooks.run_all()
            if self._handle_signals:
                self._termination.restore()
            self.console.print("(Program exited.)", style="muted")

    def _loop(self) -> int:
        while True:
            try:
                line = self._reader(self.prompt)
                self.dispatcher.dispatch(line)
            except ExitRequest as e:
                return e.code
            except EOFError:
                self.console.print()
                return 0
            except KeyboardInterrupt:
                self.console.print()

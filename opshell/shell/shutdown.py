"""
SIGTERM handling for the REPL.

While the shell runs, SIGTERM raises TerminationRequest wherever the main
thread is: reading a line, answering a prompt or inside a command. It is a
BaseException, so neither prompt cancellation nor the dispatcher's error
rendering stops it, and the loop ends with exit code 143 once the exit
hooks have run. Ctrl-C stays Python's KeyboardInterrupt.
"""

import signal
from types import FrameType
from typing import Any

SIGINT_EXIT_CODE = 130
SIGTERM_EXIT_CODE = 143


class TerminationRequest(BaseException):
    """Raised by the SIGTERM handler to unwind the REPL."""

    def __init__(self, code: int = SIGTERM_EXIT_CODE) -> None:
        self.code = code
        super().__init__(code)


class TerminationHandler:
    """
    Owns the SIGTERM disposition while the shell runs.

    Only the first signal raises; later ones arrive while the shell is
    already unwinding (for example during the exit hooks) and are dropped.

    Usage:
        handler = TerminationHandler()
        handler.install()
        try:
            ...
        except TerminationRequest as e:
            return e.code
        finally:
            handler.restore()
    """

    def __init__(self) -> None:
        self._received = False
        self._previous: Any = None
        self._installed = False

    @property
    def received(self) -> bool:
        return self._received

    def install(self) -> None:
        self._previous = signal.signal(signal.SIGTERM, self._handle)
        self._installed = True

    def restore(self) -> None:
        if self._installed:
            signal.signal(signal.SIGTERM, self._previous)
            self._installed = False

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        if self._received:
            return
        self._received = True
        raise TerminationRequest()

"""
Cleanup callbacks run once when the shell terminates.
"""

from __future__ import annotations

from collections.abc import Callable

from ..exceptions import CleanupError
from ..log import Logger, LoggerFactory

ExitHook = Callable[[], object]


class ExitHookRegistry:
    """
    Ordered, append-only list of exit hooks, drained exactly once.

    A failing hook is logged as a CleanupError and never stops the hooks
    after it.

    Example:
        hooks = ExitHookRegistry(lg)
        hooks.on_exit(session.close_if_connected)
        ...
        hooks.run_all()
    """

    def __init__(self, lg: Logger) -> None:
        self._lg = LoggerFactory.derive(lg, ["shell", "hooks"])
        self._hooks: list[ExitHook] = []
        self._drained = False

    def __len__(self) -> int:
        return len(self._hooks)

    @property
    def drained(self) -> bool:
        return self._drained

    def on_exit(self, hook: ExitHook) -> None:
        """
        Register a hook.

        Raises:
            RuntimeError: If the hooks have already been drained
        """
        if self._drained:
            raise RuntimeError("exit hooks have already run")
        self._hooks.append(hook)

    def run_all(self) -> bool:
        """
        Invoke every hook in registration order.

        Returns:
            True if the hooks ran, False if they had already been drained
        """
        if self._drained:
            return False
        self._drained = True

        for hook in self._hooks:
            try:
                hook()
            except Exception as e:
                err = CleanupError(hook, e)
                self._lg.error(err.message, extra={"hook": err.context["hook"], "exception": e})

        self._lg.debug("exit hooks done", extra={"count": len(self._hooks)})
        return True

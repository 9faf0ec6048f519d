"""
Unified exception hierarchy for the shell.

Every error a command can raise on purpose derives from ShellError, so the
dispatcher can render them uniformly without catching unrelated bugs.
"""

from typing import Any


class ShellError(Exception):
    """
    Base exception for all shell errors.

    Example:
        try:
            session.connect()
        except ShellError as e:
            console.print(f"[error]{e}[/error]")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigurationError(ShellError):
    """
    A value could not be obtained from any configured source.

    Raised by an option chain that ends in ``must()`` and by invalid
    configuration files. Always user-facing, never retried.
    """

    pass


class ResourceError(ShellError):
    """
    An external resource failed.

    Examples:
        - Database connection could not be opened
        - Statement execution failed
        - Connection close failed
        - Remote credential service unreachable
    """

    pass


class CleanupError(ShellError):
    """Raised (and logged, never propagated) when an exit hook fails."""

    def __init__(self, hook: Any, cause: BaseException) -> None:
        name = getattr(hook, "__qualname__", None) or repr(hook)
        super().__init__(f"exit hook failed: {cause}", hook=name)
        self.hook = hook
        self.cause = cause


class InputCancelledError(ShellError):
    """Raised when the user cancels an interactive prompt."""

    def __init__(self) -> None:
        super().__init__("input has been cancelled")

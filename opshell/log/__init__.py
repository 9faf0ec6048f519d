"""
Logging for the shell.

Extends Python's standard logging with:
- Topic-named loggers ("/", "/db", "/shell/hooks") sharing one handler
- Structured extra fields rendered as [key:value]
- A custom TRACE level
- Optional ANSI colours and microsecond timestamps
- Secret masking of every emitted line

Log lines go to stderr so they never interleave with command output.
"""

import logging

from .config import LogConfig, resolve_level
from .constants import LogConstants
from .exceptions import InvalidLogLevelError
from .factory import LoggerFactory
from .formatters import LogFormatter
from .logger import Logger

logging.TRACE = LogConstants.CUSTOM_LEVELS["TRACE"]  # type: ignore[attr-defined]
logging.addLevelName(LogConstants.CUSTOM_LEVELS["TRACE"], "TRACE")


def create_root_lg(level: str | int | bool = "warning", colors: bool = True) -> Logger:
    """
    Create a root logger with the given level.

    Args:
        level: Log level (string name, numeric value, or False to disable logging)
        colors: Whether to enable colored output

    Returns:
        Configured root logger
    """
    return LoggerFactory.create_root(LogConfig.from_params(level, colors=colors))


__all__ = [
    "InvalidLogLevelError",
    "LogConfig",
    "LogConstants",
    "LogFormatter",
    "Logger",
    "LoggerFactory",
    "create_root_lg",
    "resolve_level",
]

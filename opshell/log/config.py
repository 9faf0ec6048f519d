"""
Configuration for the logging system.

LogConfig is immutable so a logger's settings cannot drift after the
shell has been set up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .constants import LogConstants
from .exceptions import InvalidLogLevelError


def resolve_level(level: str | int | bool) -> int | bool:
    """
    Resolve log level from string, numeric value, or boolean.

    Args:
        level: Log level as string name, numeric value, or False to disable logging

    Returns:
        Numeric log level or False to disable logging

    Raises:
        InvalidLogLevelError: If the log level is invalid
    """
    if isinstance(level, bool):
        return logging.INFO if level else False
    if isinstance(level, int):
        return level
    if level.isnumeric():
        return int(level)
    if level.lower() in LogConstants.LEVEL_NAMES:
        return LogConstants.LEVEL_NAMES[level.lower()]
    raise InvalidLogLevelError(level)


@dataclass(frozen=True)
class LogConfig:
    """
    Immutable configuration for the shell's loggers.

    Attributes:
        level: Numeric level, or False to disable logging
        location: Whether to append the caller's file:line to each line
        micros: Whether timestamps carry microsecond precision
        colors: Whether to emit ANSI colours
    """

    level: int | bool = logging.WARNING
    location: bool = False
    micros: bool = False
    colors: bool = True

    @classmethod
    def from_params(
        cls,
        level: str | int | bool,
        location: bool = False,
        micros: bool = False,
        colors: bool = True,
    ) -> LogConfig:
        """
        Create LogConfig from individual parameters.

        Args:
            level: Log level (string name, numeric value, or False to disable logging)
            location: Whether to show the code location
            micros: Whether to show microsecond precision
            colors: Whether to enable colored output

        Returns:
            LogConfig instance
        """
        return cls(
            level=resolve_level(level),
            location=bool(location),
            micros=micros,
            colors=colors,
        )

    @classmethod
    def from_config(cls, config_dict: dict[str, Any], section: str = "logging") -> LogConfig:
        """
        Create LogConfig from a configuration dictionary.

        Args:
            config_dict: Configuration dictionary holding the section
            section: Dotted path of the logging section

        Returns:
            LogConfig instance
        """
        current: Any = config_dict
        for part in section.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                current = {}
                break

        level = current.get("level", "warning")
        if level is None:
            level = "warning"
        return cls.from_params(
            level=level,
            location=current.get("location", False),
            micros=current.get("micros", False),
            colors=current.get("colors", True),
        )

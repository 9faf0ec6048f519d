"""
Logging errors.
"""

from typing import Any

from ..exceptions import ConfigurationError
from .constants import LogConstants


class InvalidLogLevelError(ConfigurationError):
    """A log level that is neither a known name, a number nor False."""

    def __init__(self, level: Any) -> None:
        super().__init__(
            f"Invalid log level: {level}", choices=", ".join(LogConstants.LEVEL_NAMES)
        )
        self.level = level

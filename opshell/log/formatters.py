"""
Log formatter for the logging system.

Renders records as

    [12:34:56,789] [I] connected            [url:sqlite://] [/db]

with structured fields in brackets after the message, optional ANSI
colours per level, and secrets masked before the line leaves the process.
"""

import logging
import os
from typing import Any

from ..security import SecretMasker, get_masker
from .config import LogConfig
from .constants import LogConstants

# Level colours (ANSI SGR prefixes, completed with "m")
_COLORS: dict[int, str] = {
    LogConstants.CUSTOM_LEVELS["TRACE"]: "\x1b[38;5;241",
    logging.DEBUG: "\x1b[38;5;32",
    logging.INFO: "\x1b[36",
    logging.WARNING: "\x1b[33",
    logging.ERROR: "\x1b[31",
    logging.CRITICAL: "\x1b[35",
}
_DEFAULT_COLOR = "\x1b[38"
_GRAY = "\x1b[38;5;241m"


def _format_value(value: Any) -> str:
    """Format a single structured field value."""
    if isinstance(value, BaseException):
        return f"{value.__class__.__name__}: {value}"
    if isinstance(value, (list, tuple, set)):
        return ",".join(str(v) for v in value)
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


def _format_fields(fields: dict[str, Any]) -> list[str]:
    return [f"[{key}:{_format_value(fields[key])}]" for key in sorted(fields)]


class PreFormatter(logging.Formatter):
    """Formatter producing the "[time] [L] message" head of a line."""

    def __init__(self, micros: bool) -> None:
        self._micros = micros
        super().__init__(LogConstants.DEFAULT_FORMAT, datefmt="%H:%M:%S")

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        s = super().formatTime(record, datefmt)
        s += f",{int(record.msecs):03d}"
        if self._micros:
            micros = int((record.created % 1) * 1000000) % 1000
            s += f".{micros:03d}"
        return s


class LogFormatter(logging.Formatter):
    """
    Formatter with structured fields, level colours and secret masking.

    Exceptions passed via ``exc_info`` are rendered below the line as the
    standard traceback.
    """

    def __init__(self, config: LogConfig, masker: SecretMasker | None = None):
        """
        Initialize the log formatter.

        Args:
            config: Logger configuration
            masker: Secret masker applied to the whole line (default: global masker)
        """
        super().__init__()
        self._config = config
        self._masker = masker
        self._pre_formatter = PreFormatter(config.micros)

    @property
    def masker(self) -> SecretMasker:
        return self._masker if self._masker is not None else get_masker()

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record.

        Args:
            record: Log record to format

        Returns:
            Formatted, masked log line
        """
        head = self._pre_formatter.format(record)
        # PreFormatter appends the traceback; keep it for the tail
        head, _, trace = head.partition("\n")

        rule = (
            LogConstants.MICRO_RULE_WIDTH
            if self._config.micros
            else LogConstants.DEFAULT_RULE_WIDTH
        )
        parts = [head + " " * max(1, rule - len(head))]
        parts.extend(_format_fields(getattr(record, LogConstants.EXTRA_ATTR, {})))
        parts.append(f"[{record.name}]")
        if self._config.location:
            parts.append(f"[{self._render_location(record)}]")

        line = self._colorize(record, parts) if self._config.colors else " ".join(parts)
        if trace:
            line += "\n" + trace
        return self.masker.mask(line)

    def _colorize(self, record: logging.LogRecord, parts: list[str]) -> str:
        col = _COLORS.get(record.levelno, _DEFAULT_COLOR) + "m"
        head, tail = parts[0], parts[1:]
        return col + head + _GRAY + " ".join(tail) + LogConstants.RESET

    @staticmethod
    def _render_location(record: logging.LogRecord) -> str:
        path = os.path.relpath(record.pathname, os.getcwd())
        return f"./{path}:{record.lineno}"

"""
Logger class for the logging system.

Extends the standard logger with structured extra fields, a TRACE level
and handler sharing for derived "view" loggers.
"""

import logging
from typing import Any

from .config import LogConfig
from .constants import LogConstants


class Logger(logging.Logger):
    """
    Enhanced logger with structured field handling.

    Extends the standard Python logger with:
    - Structured ``extra`` fields carried on the record for the formatter
    - Pre-populated extra fields merged into every record
    - A custom ``trace`` method
    - Handler delegation to the root logger for derived loggers
    """

    def __init__(
        self,
        name: str,
        config: LogConfig | None = None,
        extra: dict[str, Any] | None = None,
    ):
        """
        Initialize the logger.

        Args:
            name: Logger name (topic path such as "/db")
            config: Logger configuration, default LogConfig() if None
            extra: Pre-populated extra fields to include in all log records
        """
        if config is None:
            config = LogConfig()

        if config.level is False:
            super().__init__(name, logging.CRITICAL + 1)
            self._logging_disabled = True
        else:
            super().__init__(name, config.level)
            self._logging_disabled = False

        self._config = config
        self._extra = extra or {}
        self._root_logger: Logger | None = None

    @property
    def config(self) -> LogConfig:
        return self._config

    @property
    def root_logger(self) -> "Logger":
        """The logger whose handlers this logger writes through."""
        return self._root_logger if self._root_logger is not None else self

    def makeRecord(  # type: ignore[override]
        self,
        name: str,
        level: int,
        fn: str,
        lno: int,
        msg: object,
        args: Any,
        exc_info: Any,
        func: str | None = None,
        extra: dict[str, Any] | None = None,
        sinfo: str | None = None,
    ) -> logging.LogRecord:
        """Create a log record carrying merged structured fields."""
        merged = {**self._extra, **(extra or {})}
        record = super().makeRecord(
            name, level, fn, lno, msg, args, exc_info, func=func, sinfo=sinfo
        )
        setattr(record, LogConstants.EXTRA_ATTR, merged)
        return record

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """
        Log a TRACE level message.

        Args:
            msg: Log message
            *args: Message format arguments
            **kwargs: Additional keyword arguments including 'extra'
        """
        level = LogConstants.CUSTOM_LEVELS["TRACE"]
        if not self._logging_disabled and self.isEnabledFor(level):
            self._log(level, msg, args, **kwargs)

    def isEnabledFor(self, level: int) -> bool:
        if self._logging_disabled:
            return False
        return super().isEnabledFor(level)

    def callHandlers(self, record: logging.LogRecord) -> None:
        """
        Pass a record to the relevant handlers.

        Derived loggers own no handlers; they write through the root's so
        that a handler added to the root reaches every topic.
        """
        if self._root_logger is None:
            super().callHandlers(record)
            return

        for handler in self._root_logger.handlers:
            if record.levelno >= handler.level:
                handler.handle(record)

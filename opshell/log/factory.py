"""
Factory for creating and configuring loggers.

Loggers are named by topic path: the root is "/", derived loggers are
"/db", "/shell/hooks" and so on. Only the root owns a handler; derived
loggers are lightweight views writing through it.
"""

import logging
import sys
from typing import Any, TextIO, cast

from .config import LogConfig
from .formatters import LogFormatter
from .logger import Logger


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def create_root(
        config: LogConfig,
        stream: TextIO | None = None,
        logger_class: type[Logger] = Logger,
    ) -> Logger:
        """
        Create the root logger.

        Args:
            config: Logger configuration
            stream: Output stream (default: sys.stderr, keeping command output clean)
            logger_class: Logger class to use

        Returns:
            Configured root logger

        Example:
            >>> config = LogConfig.from_params(level="info", colors=False)
            >>> lg = LoggerFactory.create_root(config)
            >>> lg.info("shell started")
            [12:34:56,789] [I] shell started [/]
        """
        return LoggerFactory.create("/", config, stream=stream, logger_class=logger_class)

    @staticmethod
    def create(
        name: str,
        config: LogConfig,
        stream: TextIO | None = None,
        logger_class: type[Logger] = Logger,
        extra: dict[str, Any] | None = None,
    ) -> Logger:
        """
        Create a logger owning a console handler.

        An existing logger of the same name is reconfigured in place, so
        building the shell twice in one process does not stack handlers.

        Args:
            name: Logger name
            config: Logger configuration
            stream: Output stream (default: sys.stderr)
            logger_class: Logger class to use
            extra: Pre-populated extra fields to include in all log records

        Returns:
            Configured logger instance
        """
        lg = logger_class(name, config, extra)
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setLevel(logging.NOTSET)
        handler.setFormatter(LogFormatter(config))
        lg.addHandler(handler)
        lg.propagate = False
        lg.parent = logging.root

        previous = logging.root.manager.loggerDict.get(name)
        if isinstance(previous, logging.Logger):
            for old in list(previous.handlers):
                previous.removeHandler(old)
        logging.root.manager.loggerDict[name] = lg

        lg.trace(
            "created logger",
            extra={"level": logging.getLevelName(lg.level), "location": config.location},
        )
        return lg

    @staticmethod
    def derive(parent: Logger, tags: str | list[str]) -> Logger:
        """
        Derive a "view" logger that delegates to the root's handlers.

        Examples:
            >>> derived = LoggerFactory.derive(root, "db")
            >>> derived.name
            '/db'

            >>> derived = LoggerFactory.derive(root, ["shell", "hooks"])
            >>> derived.name
            '/shell/hooks'

        Args:
            parent: Parent logger instance
            tags: Single tag string OR list of tag strings to form hierarchy

        Returns:
            Derived logger sharing the parent's level and the root's handlers
        """
        if isinstance(tags, str):
            tags = [tags]

        prefix = parent.name if parent.name == "/" else parent.name + "/"
        name = prefix + "/".join(tags)

        existing = logging.root.manager.loggerDict.get(name)
        if isinstance(existing, Logger) and existing.root_logger is parent.root_logger:
            return existing

        lg = cast(Logger, parent.__class__(name, parent.config))
        lg.setLevel(parent.level)
        lg._root_logger = parent.root_logger
        lg.parent = parent
        lg.propagate = False
        logging.root.manager.loggerDict[name] = lg

        lg.trace("derived logger", extra={"root": lg.root_logger.name})
        return lg

"""
Shell framework: command registry, availability gates, dispatch, exit
hooks and the REPL.
"""

from .availability import (
    ALWAYS,
    NOT_CONNECTED_REASON,
    STILL_CONNECTED_REASON,
    Availability,
    Gate,
    connected,
    disconnected,
)
from .command import Command, CommandParser, ParserExit
from .dispatcher import Dispatcher, refusal_message, unknown_message
from .errors import CommandError, CommandRegistrationError, DupCommandError, ExitRequest
from .exit_hooks import ExitHookRegistry
from .registry import CommandRegistry
from .repl import Shell
from .shutdown import TerminationHandler, TerminationRequest

__all__ = [
    "ALWAYS",
    "Availability",
    "Command",
    "CommandError",
    "CommandParser",
    "CommandRegistrationError",
    "CommandRegistry",
    "Dispatcher",
    "DupCommandError",
    "ExitHookRegistry",
    "ExitRequest",
    "Gate",
    "NOT_CONNECTED_REASON",
    "ParserExit",
    "STILL_CONNECTED_REASON",
    "Shell",
    "TerminationHandler",
    "TerminationRequest",
    "connected",
    "disconnected",
    "refusal_message",
    "unknown_message",
]

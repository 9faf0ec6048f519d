"""
Availability gates.

A gate is a named predicate evaluated before a command is dispatched. When
it does not hold, the command is refused and the user is told why:

    Command 'db query' exists but is not currently available because the
    connection is not established.

Refusal is a normal negative result, not an exception.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..db.session import DatabaseSession

NOT_CONNECTED_REASON = "the connection is not established"
STILL_CONNECTED_REASON = "your connection is still alive"


@dataclass(frozen=True)
class Availability:
    """Outcome of a gate check."""

    available: bool
    reason: str | None = None

    @classmethod
    def yes(cls) -> Availability:
        return cls(True)

    @classmethod
    def no(cls, reason: str) -> Availability:
        return cls(False, reason)


ALWAYS = Availability.yes()


@dataclass(frozen=True)
class Gate:
    """
    Named availability predicate.

    Attributes:
        name: Gate name shown in help output
        predicate: Zero-argument check, True when commands may run
        reason: Why commands are refused when the predicate is False
    """

    name: str
    predicate: Callable[[], bool]
    reason: str

    def check(self) -> Availability:
        if self.predicate():
            return ALWAYS
        return Availability.no(self.reason)


def connected(session: DatabaseSession) -> Gate:
    """Gate open while the session holds a connection."""
    return Gate("connected", lambda: session.connected, NOT_CONNECTED_REASON)


def disconnected(session: DatabaseSession) -> Gate:
    """Gate open while the session holds no connection."""
    return Gate("disconnected", lambda: not session.connected, STILL_CONNECTED_REASON)

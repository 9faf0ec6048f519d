"""
Database collaborator interfaces.

The session layer only talks to a ConnectionProvider and the Handle it
opens. Any transactional data-store client that can open, execute and
close satisfies these protocols; tests use in-memory fakes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class QueryResult:
    """
    Result of executing one statement.

    Attributes:
        columns: Column names, empty for statements that return no rows
        rows: Row tuples in column order
        rowcount: Rows returned, or rows affected for DML
        returns_rows: Whether the statement produced a result set
    """

    columns: list[str] = field(default_factory=list)
    rows: list[tuple[Any, ...]] = field(default_factory=list)
    rowcount: int = 0
    returns_rows: bool = True

    def as_dicts(self) -> list[dict[str, Any]]:
        """Rows as column-name keyed dicts, preserving column order."""
        return [dict(zip(self.columns, row)) for row in self.rows]


class Handle(Protocol):
    """An open connection, exclusively owned by the session."""

    def execute(self, statement: str) -> QueryResult:
        """
        Execute a statement.

        Raises:
            ResourceError: If execution fails
        """
        ...

    def close(self) -> None:
        """
        Release the connection.

        Raises:
            ResourceError: If closing fails
        """
        ...


class ConnectionProvider(Protocol):
    """Opens handles from connection coordinates."""

    def open(self, url: str, username: str, password: str) -> Handle:
        """
        Open a connection.

        Raises:
            ResourceError: If the connection cannot be established
        """
        ...

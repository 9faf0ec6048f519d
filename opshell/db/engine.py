"""
SQLAlchemy connection provider.

Opens one connection per session from a SQLAlchemy URL
("postgresql://host/db", "mysql+pymysql://host/db", "sqlite:///file.db").
Credentials are injected into the URL for server backends; file-based
SQLite takes none and rejects URLs carrying them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import sqlalchemy
import sqlalchemy.exc
from sqlalchemy.engine import make_url

from ..exceptions import ResourceError
from ..log import Logger, LoggerFactory
from .interface import QueryResult

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine, URL


def _build_url(url: str, username: str, password: str) -> URL:
    """Parse url and attach credentials where the backend accepts them."""
    try:
        parsed = make_url(url)
    except sqlalchemy.exc.ArgumentError as e:
        raise ResourceError(f"invalid database url: {e}") from e

    if parsed.get_backend_name() == "sqlite":
        return parsed
    return parsed.set(username=username, password=password)


def _get_engine_kwargs(url: URL) -> dict[str, Any]:
    """Get engine creation kwargs for the backend."""
    kwargs: dict[str, Any] = {}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
    return kwargs


class SQLAlchemyHandle:
    """
    A live SQLAlchemy connection and the engine that owns its pool.

    Every statement runs in its own transaction: committed on success,
    rolled back on failure.
    """

    def __init__(self, engine: Engine, conn: Connection, lg: Logger) -> None:
        self._engine = engine
        self._conn = conn
        self._lg = lg

    @property
    def url(self) -> str:
        """The engine URL with the password hidden."""
        return self._engine.url.render_as_string(hide_password=True)

    def execute(self, statement: str) -> QueryResult:
        """
        Execute one SQL statement.

        Args:
            statement: Raw SQL text

        Returns:
            QueryResult with the fetched rows, or the affected row count

        Raises:
            ResourceError: If the driver rejects the statement
        """
        try:
            result = self._conn.execute(sqlalchemy.text(statement))
            if result.returns_rows:
                columns = list(result.keys())
                rows = [tuple(row) for row in result]
                query_result = QueryResult(columns, rows, len(rows), True)
            else:
                query_result = QueryResult(rowcount=result.rowcount, returns_rows=False)
            self._conn.commit()
        except sqlalchemy.exc.SQLAlchemyError as e:
            self._rollback()
            raise ResourceError(str(e.orig) if getattr(e, "orig", None) else str(e)) from e

        self._lg.debug(
            "executed",
            extra={"rows": query_result.rowcount, "returns_rows": query_result.returns_rows},
        )
        return query_result

    def _rollback(self) -> None:
        try:
            self._conn.rollback()
        except sqlalchemy.exc.SQLAlchemyError as e:
            self._lg.warning("rollback failed", extra={"exception": e})

    def close(self) -> None:
        """
        Close the connection and dispose of the engine.

        The engine is disposed even when closing the connection fails.

        Raises:
            ResourceError: If the connection could not be closed
        """
        try:
            self._conn.close()
        except sqlalchemy.exc.SQLAlchemyError as e:
            raise ResourceError(f"failed to close connection: {e}") from e
        finally:
            self._engine.dispose()
            self._lg.debug("disposed engine")


class SQLAlchemyProvider:
    """
    ConnectionProvider backed by SQLAlchemy.

    Example:
        >>> provider = SQLAlchemyProvider(lg)
        >>> handle = provider.open("sqlite:///:memory:", "", "")
        >>> handle.execute("select 1 as one").rows
        [(1,)]
        >>> handle.close()
    """

    def __init__(self, lg: Logger) -> None:
        """
        Initialize the provider.

        Args:
            lg: Logger instance for database operations
        """
        if lg is None:
            raise ValueError("Logger cannot be None")
        self._lg = LoggerFactory.derive(lg, "db")

    def open(self, url: str, username: str, password: str) -> SQLAlchemyHandle:
        """
        Create an engine and open a connection.

        Args:
            url: SQLAlchemy database URL
            username: Login name (ignored for SQLite)
            password: Login password (ignored for SQLite)

        Returns:
            Handle wrapping the open connection

        Raises:
            ResourceError: If the URL is invalid, the driver is missing or the
                server refuses the connection
        """
        full_url = _build_url(url, username, password)
        try:
            engine = sqlalchemy.create_engine(full_url, **_get_engine_kwargs(full_url))
        except (sqlalchemy.exc.SQLAlchemyError, ImportError) as e:
            raise ResourceError(f"cannot create engine: {e}") from e

        try:
            conn = engine.connect()
        except sqlalchemy.exc.SQLAlchemyError as e:
            engine.dispose()
            raise ResourceError(str(e.orig) if getattr(e, "orig", None) else str(e)) from e

        self._lg.debug(
            "connected", extra={"url": full_url.render_as_string(hide_password=True)}
        )
        return SQLAlchemyHandle(engine, conn, self._lg)

"""
Database session and the SQLAlchemy connection provider.
"""

from .engine import SQLAlchemyHandle, SQLAlchemyProvider
from .interface import ConnectionProvider, Handle, QueryResult
from .session import Credentials, DatabaseSession, SessionState

__all__ = [
    "ConnectionProvider",
    "Credentials",
    "DatabaseSession",
    "Handle",
    "QueryResult",
    "SQLAlchemyHandle",
    "SQLAlchemyProvider",
    "SessionState",
]

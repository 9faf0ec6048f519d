"""
The shell's single database session.

DatabaseSession owns at most one open Handle together with the
credentials that opened it. The two move together: either all four of
url, username, password and handle are set (connected) or none are
(disconnected).

State machine::

    Disconnected --connect--> Connected --close--> Disconnected
                                  |
                                  +--reconnect--> Connected | Disconnected

Gates in the dispatcher make connect available only while disconnected
and execute/close/reconnect only while connected; the session methods
check again and raise ResourceError when called out of order.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import ResourceError
from ..log import Logger, LoggerFactory
from ..options import Option, Prompter
from ..security import get_masker
from .interface import ConnectionProvider, Handle, QueryResult

DEFAULT_ENV_NAMES = {
    "url": "OPSHELL_DB_URL",
    "username": "OPSHELL_DB_USERNAME",
    "password": "OPSHELL_DB_PASSWORD",
}


@dataclass(frozen=True)
class Credentials:
    """Connection coordinates that successfully opened a handle."""

    url: str
    username: str
    password: str


@dataclass
class SessionState:
    """
    Mutable session record.

    Only DatabaseSession mutates it, through store() and clear(), which
    set or reset every field at once.
    """

    url: str | None = None
    username: str | None = None
    password: str | None = None
    handle: Handle | None = None

    @property
    def connected(self) -> bool:
        return self.handle is not None

    def store(self, credentials: Credentials, handle: Handle) -> None:
        self.url = credentials.url
        self.username = credentials.username
        self.password = credentials.password
        self.handle = handle

    def clear(self) -> None:
        self.url = None
        self.username = None
        self.password = None
        self.handle = None

    def credentials(self) -> Credentials | None:
        """
        Snapshot of the stored credentials, None while disconnected.

        Raises:
            ResourceError: If a handle is stored without its credentials
        """
        if not self.connected:
            return None
        if self.url is None or self.username is None or self.password is None:
            raise ResourceError("the session holds a handle without its credentials")
        return Credentials(self.url, self.username, self.password)


class DatabaseSession:
    """
    Connect, operate, close and reconnect one shared connection.

    Example:
        session = DatabaseSession(SQLAlchemyProvider(lg), lg)
        session.connect(url="sqlite:///app.db", username="-", password="-")
        session.execute("select count(*) from users")
        session.close()
    """

    def __init__(
        self,
        provider: ConnectionProvider,
        lg: Logger,
        env_names: dict[str, str] | None = None,
        prompter: Prompter | None = None,
    ) -> None:
        """
        Initialize a disconnected session.

        Args:
            provider: Opens handles from connection coordinates
            lg: Logger instance
            env_names: Environment variable names for url, username and password
            prompter: Interactive input function used for the password prompt
        """
        self._provider = provider
        self._lg = LoggerFactory.derive(lg, ["db", "session"])
        self._env_names = {**DEFAULT_ENV_NAMES, **(env_names or {})}
        self._prompter = prompter
        self.state = SessionState()

    @property
    def connected(self) -> bool:
        return self.state.connected

    @property
    def env_names(self) -> dict[str, str]:
        return dict(self._env_names)

    def resolve_credentials(
        self,
        url: str | None = None,
        username: str | None = None,
        password: str | None = None,
    ) -> Credentials:
        """
        Resolve connection coordinates from their sources.

        url and username come from the argument, then the environment. The
        password may additionally be typed at a masked prompt.

        Raises:
            ConfigurationError: If a coordinate cannot be inferred
        """
        env = self._env_names
        resolved_url = Option.of(url).or_env(env["url"]).must("`url` cannot be inferred")
        resolved_username = (
            Option.of(username)
            .or_env(env["username"])
            .must("`username` cannot be inferred")
        )
        resolved_password = (
            Option.of(password, self._prompter)
            .or_env(env["password"])
            .or_input("Enter password:")
            .must("`password` cannot be inferred")
        )
        return Credentials(resolved_url, resolved_username, resolved_password)

    def connect(
        self,
        url: str | None = None,
        username: str | None = None,
        password: str | None = None,
    ) -> Credentials:
        """
        Resolve credentials and open the connection.

        On failure the session stays disconnected and the error propagates
        unchanged.

        Raises:
            ResourceError: If already connected or the provider cannot connect
            ConfigurationError: If a coordinate cannot be inferred
        """
        if self.connected:
            raise ResourceError("your connection is still alive")

        credentials = self.resolve_credentials(url, username, password)
        masker = get_masker()
        masker.add_known_secret(credentials.password)
        try:
            handle = self._provider.open(credentials.url, credentials.username, credentials.password)
        except BaseException:
            masker.remove_known_secret(credentials.password)
            raise
        self.state.store(credentials, handle)

        self._lg.info("connection established", extra={"url": credentials.url})
        return credentials

    def execute(self, statement: str) -> QueryResult:
        """
        Run a statement on the open connection.

        Raises:
            ResourceError: If disconnected or the statement fails
        """
        handle = self.state.handle
        if handle is None:
            raise ResourceError("the connection is not established")
        self._lg.debug("executing", extra={"statement": statement})
        return handle.execute(statement)

    def close(self) -> None:
        """
        Close the connection and forget the credentials.

        The state is cleared even when closing the handle fails; the close
        error still propagates.

        Raises:
            ResourceError: If disconnected or the handle fails to close
        """
        handle = self.state.handle
        if handle is None:
            raise ResourceError("the connection is not established")

        password = self.state.password
        try:
            handle.close()
        finally:
            self.state.clear()
            get_masker().remove_known_secret(password)
            self._lg.info("connection closed")

    def reconnect(self) -> Credentials:
        """
        Close and reopen using the credentials of the current connection.

        If reopening fails the session ends up disconnected with no
        credentials kept.

        Raises:
            ResourceError: If disconnected, or closing or reopening fails
        """
        credentials = self.state.credentials()
        if credentials is None:
            raise ResourceError("the connection is not established")

        self.close()
        return self.connect(credentials.url, credentials.username, credentials.password)

    def close_if_connected(self) -> None:
        """Exit hook: close the connection if one is open."""
        if self.connected:
            self.close()

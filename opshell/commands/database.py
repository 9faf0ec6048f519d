"""
Database commands: db connect, query, command, close, reconnect and status.
"""

from __future__ import annotations

import argparse

from rich.console import Console

from ..db.session import DatabaseSession
from ..security import get_masker
from ..shell import Command, ExitHookRegistry, connected, disconnected
from ..ui.render import RENDERERS


class DatabaseCommands:
    """
    Shell commands operating the shared database session.

    The session is closed by an exit hook if it is still open when the
    shell ends.
    """

    def __init__(
        self,
        session: DatabaseSession,
        console: Console,
        hooks: ExitHookRegistry,
        default_format: str = "table",
    ) -> None:
        if default_format not in RENDERERS:
            raise ValueError(f"unknown output format: {default_format}")
        self.session = session
        self.console = console
        self.default_format = default_format
        hooks.on_exit(session.close_if_connected)

    def commands(self) -> list[Command]:
        env = self.session.env_names
        is_connected = connected(self.session)
        is_disconnected = disconnected(self.session)

        def connect_args(parser: argparse.ArgumentParser) -> None:
            parser.add_argument(
                "--url",
                help=f"database url, read from the environment variable `{env['url']}` if not specified",
            )
            parser.add_argument(
                "--username",
                help=f"username, read from the environment variable `{env['username']}` if not specified",
            )
            parser.add_argument(
                "--password",
                help=f"password, read from the environment variable `{env['password']}` "
                "or prompted for if not specified",
            )

        def query_args(parser: argparse.ArgumentParser) -> None:
            parser.add_argument("sql", help="select statement, passed to the database as typed")
            parser.add_argument(
                "--format",
                choices=sorted(RENDERERS),
                default=self.default_format,
                help=f"output format (default: {self.default_format})",
            )

        def command_args(parser: argparse.ArgumentParser) -> None:
            parser.add_argument("sql", help="DML or DDL statement, passed to the database as typed")

        return [
            Command("db connect", self.connect, "Establish a database connection.",
                    gate=is_disconnected, setup=connect_args),
            Command("db query", self.query, "Execute select statements using the current connection.",
                    gate=is_connected, setup=query_args, raw=True),
            Command("db command", self.command, "Execute DML statements using the current connection.",
                    gate=is_connected, setup=command_args, raw=True),
            Command("db close", self.close, "Close the current connection.", gate=is_connected),
            Command("db reconnect", self.reconnect,
                    "Re-establish the connection using the last successful properties.",
                    gate=is_connected),
            Command("db status", self.status, "Show the current connection.", gate=is_connected),
        ]

    def connect(self, args: argparse.Namespace) -> None:
        self.session.connect(args.url, args.username, args.password)
        self.console.print("Connection has been established.")

    def query(self, args: argparse.Namespace) -> None:
        result = self.session.execute(args.sql)
        RENDERERS[args.format](self.console, result)

    def command(self, args: argparse.Namespace) -> None:
        result = self.session.execute(args.sql)
        # drivers report -1 when the count is unknown
        self.console.print(f"{max(result.rowcount, 0)} row(s) affected")

    def close(self, args: argparse.Namespace) -> None:
        self.session.close()
        self.console.print("Connection has been closed.")

    def reconnect(self, args: argparse.Namespace) -> None:
        self.session.reconnect()
        self.console.print("Connection has been re-established.")

    def status(self, args: argparse.Namespace) -> None:
        state = self.session.state
        self.console.print(f"url: {get_masker().mask(state.url or '')}", markup=False)
        self.console.print(f"username: {state.username}", markup=False)

"""
Operator commands and their registration on a shell.
"""

from __future__ import annotations

from ..cloud import CredentialProvider, StsClient
from ..config import Config
from ..crypto import PBEWithMD5AndDES
from ..db import ConnectionProvider, DatabaseSession, SQLAlchemyProvider
from ..options import Prompter
from ..shell import Shell
from .database import DatabaseCommands
from .jasypt import JasyptCommands
from .sts import StsCommands


def register_all(
    shell: Shell,
    config: Config,
    db_provider: ConnectionProvider | None = None,
    sts_provider: CredentialProvider | None = None,
    prompter: Prompter | None = None,
) -> DatabaseSession:
    """
    Register every operator command on the shell.

    Args:
        shell: Shell to register on
        config: Shell configuration
        db_provider: Database connection provider (default: SQLAlchemy)
        sts_provider: Credential provider (default: Aliyun STS over HTTPS)
        prompter: Interactive input function (default: terminal prompts)

    Returns:
        The database session the db commands operate on
    """
    lg = shell.lg
    session = DatabaseSession(
        db_provider if db_provider is not None else SQLAlchemyProvider(lg),
        lg,
        env_names=config.get("db.env"),
        prompter=prompter,
    )
    groups = [
        DatabaseCommands(session, shell.console, shell.hooks, config.get("db.format", "table")),
        JasyptCommands(
            PBEWithMD5AndDES(config.get("jasypt.iterations", 1000)),
            shell.console,
            password_env=config.get("jasypt.env.password"),
            prompter=prompter,
        ),
        StsCommands(
            sts_provider
            if sts_provider is not None
            else StsClient(lg, config.get("sts.duration", 1000), config.get("sts.timeout", 10.0)),
            shell.console,
            env_names=config.get("sts.env"),
            prompter=prompter,
        ),
    ]
    for group in groups:
        for command in group.commands():
            shell.registry.register(command)
    return session


__all__ = ["DatabaseCommands", "JasyptCommands", "StsCommands", "register_all"]

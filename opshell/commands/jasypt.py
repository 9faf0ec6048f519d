"""
Jasypt commands: set-password, encrypt and decrypt.
"""

from __future__ import annotations

import argparse

from rich.console import Console

from ..crypto import CipherProvider
from ..exceptions import ConfigurationError
from ..options import Option, Prompter, is_blank
from ..security import get_masker
from ..shell import Command, Gate

PASSWORD_NOT_SET_REASON = "the jasypt encryptor password has not been set yet"
DEFAULT_PASSWORD_ENV = "OPSHELL_JASYPT_PASSWORD"


class JasyptCommands:
    """Encrypt and decrypt values the way jasypt-spring-boot does."""

    def __init__(
        self,
        cipher: CipherProvider,
        console: Console,
        password_env: str = DEFAULT_PASSWORD_ENV,
        prompter: Prompter | None = None,
    ) -> None:
        self.cipher = cipher
        self.console = console
        self.password_env = password_env
        self._prompter = prompter
        self._password: str | None = None

    @property
    def password_set(self) -> bool:
        return not is_blank(self._password)

    def gate(self) -> Gate:
        return Gate("password-set", lambda: self.password_set, PASSWORD_NOT_SET_REASON)

    def commands(self) -> list[Command]:
        password_set = self.gate()

        def set_password_args(parser: argparse.ArgumentParser) -> None:
            parser.add_argument(
                "value",
                nargs="?",
                help=f"encryptor password, read from the environment variable "
                f"`{self.password_env}` or prompted for if not specified",
            )

        def input_args(parser: argparse.ArgumentParser) -> None:
            parser.add_argument("input", help="input string")

        return [
            Command("jasypt set-password", self.set_password,
                    "Set the jasypt encryptor password.", setup=set_password_args),
            Command("jasypt encrypt", self.encrypt, "Encrypt the given input string.",
                    gate=password_set, setup=input_args),
            Command("jasypt decrypt", self.decrypt, "Decrypt the given (encrypted) input string.",
                    gate=password_set, setup=input_args),
        ]

    def set_password(self, args: argparse.Namespace) -> None:
        password = (
            Option.of(args.value, self._prompter)
            .or_env(self.password_env)
            .or_input("Enter jasypt password:")
            .must("`value` cannot be inferred")
        )
        get_masker().remove_known_secret(self._password)
        get_masker().add_known_secret(password)
        self._password = password
        self.console.print("Jasypt encryptor password has been set.")

    def _require_password(self) -> str:
        if self._password is None or not self.password_set:
            raise ConfigurationError(PASSWORD_NOT_SET_REASON)
        return self._password

    def encrypt(self, args: argparse.Namespace) -> None:
        password = self._require_password()
        self.console.print(self.cipher.encrypt(args.input, password), markup=False)

    def decrypt(self, args: argparse.Namespace) -> None:
        password = self._require_password()
        self.console.print(self.cipher.decrypt(args.input, password), markup=False)

"""
STS commands: verify a role configuration by assuming it.
"""

from __future__ import annotations

import argparse

from rich.console import Console

from ..cloud import AssumeRoleSuccess, CredentialProvider
from ..options import Option, Prompter
from ..security import get_masker
from ..shell import Command

DEFAULT_ENV_NAMES = {
    "region": "OPSHELL_STS_REGION",
    "keyid": "OPSHELL_STS_KEY_ID",
    "secret": "OPSHELL_STS_KEY_SECRET",
    "arn": "OPSHELL_STS_ROLE_ARN",
}


class StsCommands:
    """Assume a role with the given access key and print what came back."""

    def __init__(
        self,
        provider: CredentialProvider,
        console: Console,
        env_names: dict[str, str] | None = None,
        prompter: Prompter | None = None,
    ) -> None:
        self.provider = provider
        self.console = console
        self.env_names = {**DEFAULT_ENV_NAMES, **(env_names or {})}
        self._prompter = prompter

    def commands(self) -> list[Command]:
        env = self.env_names

        def verify_args(parser: argparse.ArgumentParser) -> None:
            parser.add_argument("--region", help=f"region id (env `{env['region']}`)")
            parser.add_argument("--access-key-id", help=f"access key id (env `{env['keyid']}`)")
            parser.add_argument(
                "--access-key-secret", help=f"access key secret (env `{env['secret']}`)"
            )
            parser.add_argument("--arn", help=f"role arn (env `{env['arn']}`)")

        return [
            Command("sts verify", self.verify,
                    "Verify the STS configuration by retrieving the AK.", setup=verify_args),
        ]

    def verify(self, args: argparse.Namespace) -> None:
        env = self.env_names
        region = Option.of(args.region).or_env(env["region"]).must("`region` cannot be inferred")
        key_id = (
            Option.of(args.access_key_id, self._prompter)
            .or_env(env["keyid"])
            .or_input("Enter access key id:", mask=False)
            .must("`access-key-id` cannot be inferred")
        )
        key_secret = (
            Option.of(args.access_key_secret, self._prompter)
            .or_env(env["secret"])
            .or_input("Enter access key secret:")
            .must("`access-key-secret` cannot be inferred")
        )
        arn = Option.of(args.arn).or_env(env["arn"]).must("`arn` cannot be inferred")
        get_masker().add_known_secret(key_secret)

        result = self.provider.assume_role(region, key_id, key_secret, arn)
        if isinstance(result, AssumeRoleSuccess):
            lines = [
                "SUCCESS",
                f"    Expiration: {result.expiration}",
                f"    Access Key Id: {result.access_key_id}",
                f"    Access Key Secret: {result.access_key_secret}",
                f"    Security Token: {result.security_token}",
                f"    RequestId: {result.request_id}",
            ]
        else:
            lines = [
                "FAILURE",
                f"    Error code: {result.error_code}",
                f"    Error message: {result.error_message}",
                f"    RequestId: {result.request_id}",
            ]
        self.console.print("\n".join(lines), markup=False)

"""
Cloud credential collaborator interface.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union


@dataclass(frozen=True)
class AssumeRoleSuccess:
    """Temporary credentials issued for a role."""

    expiration: str
    access_key_id: str
    access_key_secret: str
    security_token: str
    request_id: str


@dataclass(frozen=True)
class AssumeRoleFailure:
    """Error reported by the credential service."""

    error_code: str
    error_message: str
    request_id: str


AssumeRoleResult = Union[AssumeRoleSuccess, AssumeRoleFailure]


class CredentialProvider(Protocol):
    """Exchanges long-lived access keys for role credentials."""

    def assume_role(
        self, region: str, access_key_id: str, access_key_secret: str, arn: str
    ) -> AssumeRoleResult:
        """
        Assume a role.

        Raises:
            ResourceError: If the service cannot be reached or its reply
                cannot be understood
        """
        ...

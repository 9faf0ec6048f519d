"""
Cloud credential verification.
"""

from .interface import AssumeRoleFailure, AssumeRoleResult, AssumeRoleSuccess, CredentialProvider
from .sts import StsClient, canonical_query, endpoint_for, percent_encode, sign

__all__ = [
    "AssumeRoleFailure",
    "AssumeRoleResult",
    "AssumeRoleSuccess",
    "CredentialProvider",
    "StsClient",
    "canonical_query",
    "endpoint_for",
    "percent_encode",
    "sign",
]

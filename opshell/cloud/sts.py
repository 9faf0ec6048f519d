"""
Aliyun STS client.

Calls the AssumeRole action of the STS RPC API directly over HTTPS.
Requests are signed with signature version 1.0 (HMAC-SHA1 over the
percent-encoded, sorted query):

    StringToSign = "POST" + "&" + enc("/") + "&" + enc(canonical_query)
    Signature    = base64(hmac_sha1(access_key_secret + "&", StringToSign))
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import time
import uuid
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import requests

from ..exceptions import ResourceError
from ..log import Logger, LoggerFactory
from .interface import AssumeRoleFailure, AssumeRoleResult, AssumeRoleSuccess

API_VERSION = "2015-04-01"
DEFAULT_DURATION_SECONDS = 1000
DEFAULT_TIMEOUT = 10.0
SESSION_NAME_PREFIX = "opshell_verify_"


def endpoint_for(region: str) -> str:
    return f"https://sts.{region}.aliyuncs.com"


def percent_encode(value: str) -> str:
    """RFC 3986 encoding as the RPC signature requires."""
    return quote(value, safe="~")


def canonical_query(params: dict[str, str]) -> str:
    return "&".join(
        f"{percent_encode(k)}={percent_encode(params[k])}" for k in sorted(params)
    )


def sign(params: dict[str, str], access_key_secret: str, method: str = "POST") -> str:
    """
    Compute the signature for a set of request parameters.

    Args:
        params: All request parameters except Signature
        access_key_secret: Secret of the signing access key
        method: HTTP method

    Returns:
        base64 HMAC-SHA1 signature
    """
    string_to_sign = f"{method}&{percent_encode('/')}&{percent_encode(canonical_query(params))}"
    digest = hmac.new(
        (access_key_secret + "&").encode("utf-8"),
        string_to_sign.encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class StsClient:
    """
    CredentialProvider backed by the Aliyun STS RPC API.

    Example:
        client = StsClient(lg)
        result = client.assume_role("cn-hangzhou", key_id, key_secret, arn)
        if isinstance(result, AssumeRoleSuccess):
            print(result.security_token)
    """

    def __init__(
        self,
        lg: Logger,
        duration_seconds: int = DEFAULT_DURATION_SECONDS,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            lg: Logger instance
            duration_seconds: Lifetime requested for the issued credentials
            timeout: HTTP timeout in seconds
            session: HTTP session (default: a new requests.Session)
        """
        self._lg = LoggerFactory.derive(lg, "sts")
        self.duration_seconds = duration_seconds
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()

    def build_params(self, access_key_id: str, arn: str) -> dict[str, str]:
        """Unsigned AssumeRole parameters."""
        return {
            "Action": "AssumeRole",
            "Version": API_VERSION,
            "Format": "JSON",
            "AccessKeyId": access_key_id,
            "SignatureMethod": "HMAC-SHA1",
            "SignatureVersion": "1.0",
            "SignatureNonce": uuid.uuid4().hex,
            "Timestamp": _timestamp(),
            "RoleArn": arn,
            "RoleSessionName": f"{SESSION_NAME_PREFIX}{int(time.time() * 1000)}",
            "DurationSeconds": str(self.duration_seconds),
        }

    def assume_role(
        self, region: str, access_key_id: str, access_key_secret: str, arn: str
    ) -> AssumeRoleResult:
        """
        Request temporary credentials for a role.

        Returns:
            AssumeRoleSuccess, or AssumeRoleFailure when the service rejects
            the request

        Raises:
            ResourceError: If the endpoint cannot be reached or replies with
                something other than a JSON object
        """
        params = self.build_params(access_key_id, arn)
        params["Signature"] = sign(params, access_key_secret)
        url = endpoint_for(region)

        self._lg.debug("assuming role", extra={"region": region, "arn": arn})
        try:
            response = self._session.post(url, data=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise ResourceError(f"cannot reach {url}: {e}") from e

        try:
            body: Any = response.json()
        except ValueError as e:
            raise ResourceError(
                f"unexpected response from {url}", status=response.status_code
            ) from e
        if not isinstance(body, dict):
            raise ResourceError(f"unexpected response from {url}", status=response.status_code)

        if response.ok and "Credentials" in body:
            return self._success(body)
        return self._failure(body, response.status_code)

    def _success(self, body: dict[str, Any]) -> AssumeRoleSuccess:
        creds = body["Credentials"]
        self._lg.info("role assumed", extra={"request_id": body.get("RequestId", "")})
        return AssumeRoleSuccess(
            expiration=creds.get("Expiration", ""),
            access_key_id=creds.get("AccessKeyId", ""),
            access_key_secret=creds.get("AccessKeySecret", ""),
            security_token=creds.get("SecurityToken", ""),
            request_id=body.get("RequestId", ""),
        )

    def _failure(self, body: dict[str, Any], status: int) -> AssumeRoleFailure:
        self._lg.info(
            "assume role rejected",
            extra={"status": status, "code": body.get("Code", ""), "request_id": body.get("RequestId", "")},
        )
        return AssumeRoleFailure(
            error_code=body.get("Code", str(status)),
            error_message=body.get("Message", ""),
            request_id=body.get("RequestId", ""),
        )

"""Backend client implementations.

The boto3 clients translate botocore failures into the
:mod:`~resolve_aws_secrets.core.secrets.errors` taxonomy. The in-memory
clients serve fixed values for tests.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from resolve_aws_secrets.core.config.launcher import DEFAULT_FALLBACK_REGION
from resolve_aws_secrets.core.secrets.base import (
    ParameterStoreClient,
    RegionalClientPair,
    SecretStoreClient,
)
from resolve_aws_secrets.core.secrets.errors import (
    BackendAccessDeniedError,
    BackendNotFoundError,
    BackendOtherError,
    BackendThrottledError,
    ClientConstructionError,
    FetchError,
)

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({
    "ResourceNotFoundException",
    "ParameterNotFound",
    "ParameterVersionNotFound",
})
_ACCESS_DENIED_CODES = frozenset({
    "AccessDeniedException",
    "AccessDenied",
    "UnrecognizedClientException",
    "ExpiredTokenException",
    "KMS.AccessDeniedException",
})
_THROTTLED_CODES = frozenset({
    "ThrottlingException",
    "Throttling",
    "TooManyRequestsException",
    "RequestLimitExceeded",
    "ThrottledException",
})


def translate_error(exc: Exception, identifier: str) -> FetchError:
    """Map a botocore exception onto the fetch error taxonomy."""
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        code = error.get("Code", "")
        reason = f"{code}: {error.get('Message', '')}".rstrip(": ")
        if code in _NOT_FOUND_CODES:
            return BackendNotFoundError(identifier, reason)
        if code in _ACCESS_DENIED_CODES:
            return BackendAccessDeniedError(identifier, reason)
        if code in _THROTTLED_CODES:
            return BackendThrottledError(identifier, reason)
        return BackendOtherError(identifier, reason)
    return BackendOtherError(identifier, f"{type(exc).__name__}: {exc}")


class Boto3SecretStoreClient(SecretStoreClient):
    """Read secrets from AWS Secrets Manager.

    Args:
        client: A boto3 ``secretsmanager`` client.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    def fetch_secret_value(self, identifier: str) -> str:
        logger.debug("Retrieving secret from Secrets Manager: %s", identifier)
        try:
            response = self._client.get_secret_value(SecretId=identifier)
        except (ClientError, BotoCoreError) as exc:
            raise translate_error(exc, identifier) from exc

        secret_string = response.get("SecretString")
        if secret_string is not None:
            return str(secret_string)

        secret_binary = response.get("SecretBinary")
        if secret_binary is None:
            raise BackendOtherError(identifier, "response has neither SecretString nor SecretBinary")
        try:
            return bytes(secret_binary).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BackendOtherError(identifier, "SecretBinary is not valid UTF-8") from exc


class Boto3ParameterStoreClient(ParameterStoreClient):
    """Read parameters from AWS Systems Manager Parameter Store.

    Args:
        client: A boto3 ``ssm`` client.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    def fetch_parameter_value(self, identifier: str, decrypt: bool) -> str:
        logger.debug("Retrieving SSM parameter: %s", identifier)
        try:
            response = self._client.get_parameter(Name=identifier, WithDecryption=decrypt)
        except (ClientError, BotoCoreError) as exc:
            raise translate_error(exc, identifier) from exc

        value = response.get("Parameter", {}).get("Value")
        if value is None:
            raise BackendOtherError(identifier, "response has no parameter value")
        return str(value)


class Boto3ClientFactory:
    """Build boto3-backed client pairs for the regional client pool.

    A fresh boto3 session is used per pair since sessions are not
    thread-safe; the clients themselves are.

    With *call_timeout_seconds* set, each client connects and reads with
    that timeout and makes a single attempt per call, so an abandoned call
    ends within one timeout. Retries are left to
    :class:`~resolve_aws_secrets.core.resilience.retry.RetryExecutor`.

    Args:
        default_region: Region for the default pair. ``None`` defers to
            the boto3 provider chain (``AWS_REGION``, shared config, ...).
        fallback_region: Region used when the provider chain finds none.
        call_timeout_seconds: Upper bound for a single backend call.
            ``None`` keeps the botocore defaults.
    """

    def __init__(
        self,
        default_region: str | None = None,
        fallback_region: str = DEFAULT_FALLBACK_REGION,
        call_timeout_seconds: float | None = None,
    ) -> None:
        self._default_region = default_region
        self._fallback_region = fallback_region
        self._client_config = _client_config(call_timeout_seconds)

    def __call__(self, region: str | None) -> RegionalClientPair:
        session = boto3.session.Session()
        if region is None:
            region = self._default_region or session.region_name or self._fallback_region
        try:
            secrets = session.client("secretsmanager", region_name=region, config=self._client_config)
            parameters = session.client("ssm", region_name=region, config=self._client_config)
        except BotoCoreError as exc:
            raise ClientConstructionError(None, f"cannot create AWS clients for region {region!r}: {exc}") from exc
        return RegionalClientPair(
            region=region,
            secrets=Boto3SecretStoreClient(secrets),
            parameters=Boto3ParameterStoreClient(parameters),
        )


def _client_config(call_timeout_seconds: float | None) -> Config | None:
    if call_timeout_seconds is None:
        return None
    return Config(
        connect_timeout=call_timeout_seconds,
        read_timeout=call_timeout_seconds,
        retries={"total_max_attempts": 1, "mode": "standard"},
    )


class InMemorySecretStoreClient(SecretStoreClient):
    """Serve secrets from a fixed mapping of identifier to value."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values = dict(values or {})
        self.requests: list[str] = []

    def fetch_secret_value(self, identifier: str) -> str:
        self.requests.append(identifier)
        try:
            return self._values[identifier]
        except KeyError:
            raise BackendNotFoundError(identifier, "secret not found") from None


class InMemoryParameterStoreClient(ParameterStoreClient):
    """Serve parameters from a fixed mapping of identifier to value."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values = dict(values or {})
        self.requests: list[tuple[str, bool]] = []

    def fetch_parameter_value(self, identifier: str, decrypt: bool) -> str:
        self.requests.append((identifier, decrypt))
        try:
            return self._values[identifier]
        except KeyError:
            raise BackendNotFoundError(identifier, "parameter not found") from None

"""Secret resolution: references, collection, client pooling and fetching."""

from resolve_aws_secrets.core.secrets.base import (
    ParameterStoreClient,
    PendingFetch,
    ReferenceKind,
    RegionalClientPair,
    ResolvedEnv,
    SecretReference,
    SecretStoreClient,
    Store,
)
from resolve_aws_secrets.core.secrets.classifier import classify, region_of
from resolve_aws_secrets.core.secrets.collector import collect
from resolve_aws_secrets.core.secrets.errors import (
    BackendAccessDeniedError,
    BackendNotFoundError,
    BackendOtherError,
    BackendThrottledError,
    ChildSpawnError,
    ClientConstructionError,
    FetchError,
    ResolutionTimeoutError,
    ResolveError,
)
from resolve_aws_secrets.core.secrets.indirection import resolve_indirection
from resolve_aws_secrets.core.secrets.orchestrator import FetchOrchestrator
from resolve_aws_secrets.core.secrets.pool import ClientFactory, RegionalClientPool
from resolve_aws_secrets.core.secrets.providers import (
    Boto3ClientFactory,
    Boto3ParameterStoreClient,
    Boto3SecretStoreClient,
    InMemoryParameterStoreClient,
    InMemorySecretStoreClient,
)
from resolve_aws_secrets.core.secrets.resolver import EnvironmentResolver

__all__ = [
    "BackendAccessDeniedError",
    "BackendNotFoundError",
    "BackendOtherError",
    "BackendThrottledError",
    "Boto3ClientFactory",
    "Boto3ParameterStoreClient",
    "Boto3SecretStoreClient",
    "ChildSpawnError",
    "ClientConstructionError",
    "ClientFactory",
    "EnvironmentResolver",
    "FetchError",
    "FetchOrchestrator",
    "InMemoryParameterStoreClient",
    "InMemorySecretStoreClient",
    "ParameterStoreClient",
    "PendingFetch",
    "ReferenceKind",
    "RegionalClientPair",
    "RegionalClientPool",
    "ResolutionTimeoutError",
    "ResolveError",
    "ResolvedEnv",
    "SecretReference",
    "SecretStoreClient",
    "Store",
    "classify",
    "collect",
    "region_of",
    "resolve_indirection",
]

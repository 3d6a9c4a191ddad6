"""Secret resolution data model and backend client abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum


class ReferenceKind(str, Enum):
    """What a raw reference string denotes."""

    SECRET_STORE_ARN = "secret_store_arn"
    PARAMETER_STORE_ARN = "parameter_store_arn"
    NAME = "name"


class Store(str, Enum):
    """Backend a pending fetch is read from."""

    SECRET_STORE = "secretsmanager"
    PARAMETER_STORE = "ssm"


@dataclass(frozen=True)
class SecretReference:
    """A string naming a secret, either by ARN or by plain lookup name.

    Args:
        kind: Classification of the raw value.
        value: The raw reference, passed unchanged to the backend.
    """

    kind: ReferenceKind
    value: str

    @classmethod
    def secret_store_arn(cls, value: str) -> SecretReference:
        return cls(ReferenceKind.SECRET_STORE_ARN, value)

    @classmethod
    def parameter_store_arn(cls, value: str) -> SecretReference:
        return cls(ReferenceKind.PARAMETER_STORE_ARN, value)

    @classmethod
    def name(cls, value: str) -> SecretReference:
        return cls(ReferenceKind.NAME, value)

    @property
    def is_arn(self) -> bool:
        """True for references classified as a typed ARN."""
        return self.kind is not ReferenceKind.NAME


@dataclass(frozen=True)
class PendingFetch:
    """One value to fetch and the environment variable it is destined for.

    Args:
        output_key: Variable name in the child environment. For an
            indirection entry point this is the entry point variable itself.
        reference: What to fetch.
        indirect: The fetched value is a JSON document of further
            references rather than a value for the child.
    """

    output_key: str
    reference: SecretReference
    indirect: bool = False

    @property
    def store(self) -> Store:
        """Backend that holds the value for this fetch."""
        if self.indirect or self.reference.kind is ReferenceKind.PARAMETER_STORE_ARN:
            return Store.PARAMETER_STORE
        return Store.SECRET_STORE


class SecretStoreClient(ABC):
    """Read access to a secret-value store."""

    @abstractmethod
    def fetch_secret_value(self, identifier: str) -> str:
        """Return the current value of the secret named by *identifier*.

        Raises:
            FetchError: One of the backend error subclasses.
        """
        ...


class ParameterStoreClient(ABC):
    """Read access to a parameter store."""

    @abstractmethod
    def fetch_parameter_value(self, identifier: str, decrypt: bool) -> str:
        """Return the value of the parameter named by *identifier*.

        Raises:
            FetchError: One of the backend error subclasses.
        """
        ...


@dataclass(frozen=True)
class RegionalClientPair:
    """Secret-store and parameter-store clients bound to one region.

    ``region`` is ``None`` only for the default pair before its region
    was resolved by the client factory.
    """

    region: str | None
    secrets: SecretStoreClient
    parameters: ParameterStoreClient


class ResolvedEnv(Mapping[str, str]):
    """Resolved secret values keyed by output variable.

    Later entries overwrite earlier ones with the same key. Iteration
    follows first insertion, so merging is deterministic. Values are
    masked in ``repr`` to prevent accidental leakage in logs or tracebacks.
    """

    def __init__(self, entries: Iterable[tuple[str, str]] = ()) -> None:
        self._values: dict[str, str] = {}
        for key, value in entries:
            self._values[key] = value

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        masked = ", ".join(f"{key!r}: '***'" for key in self._values)
        return f"ResolvedEnv({{{masked}}})"

"""Secret resolution exceptions."""

from __future__ import annotations


class ResolveError(Exception):
    """Base exception for everything that stops the launcher."""

    pass


class FetchError(ResolveError):
    """A single pending fetch failed; the whole resolution fails with it.

    Args:
        identifier: ARN or name that was being fetched.
        reason: Human-readable failure description. Never contains a secret value.
        output_key: Environment variable the value was destined for, when known.
    """

    def __init__(self, identifier: str | None, reason: str, output_key: str | None = None) -> None:
        self.identifier = identifier
        self.reason = reason
        self.output_key = output_key
        super().__init__(identifier, reason, output_key)

    def __str__(self) -> str:
        target = repr(self.identifier)
        if self.output_key:
            target = f"{self.output_key} ({target})"
        return f"Failed to fetch {target}: {self.reason}"


class BackendNotFoundError(FetchError):
    """The secret or parameter does not exist."""


class BackendAccessDeniedError(FetchError):
    """The caller is not allowed to read the secret or parameter."""


class BackendThrottledError(FetchError):
    """The backend rejected the call because of request rate."""


class BackendOtherError(FetchError):
    """Any other network, service or response-shape failure."""


class ClientConstructionError(BackendOtherError):
    """The regional client pair could not be built (e.g. invalid region)."""


class ResolutionTimeoutError(FetchError):
    """The overall resolution deadline passed with fetches still outstanding."""

    def __init__(self, timeout_seconds: float, outstanding: int) -> None:
        self.timeout_seconds = timeout_seconds
        self.outstanding = outstanding
        super().__init__(None, f"timed out after {timeout_seconds}s with {outstanding} fetch(es) outstanding")

    def __str__(self) -> str:
        return f"Secret resolution {self.reason}"


class ChildSpawnError(ResolveError):
    """The target program could not be started."""

    def __init__(self, program: str, cause: OSError) -> None:
        self.program = program
        self.cause = cause
        super().__init__(f"Failed to start '{program}': {cause}")

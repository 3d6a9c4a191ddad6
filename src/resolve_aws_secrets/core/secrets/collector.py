"""Collect secret references from a process environment.

Recognized conventions, most specific first:

* ``SECRET_ARN_<NAME>=<value>``: value classified by shape, output ``<NAME>``
* ``SECRET_NAME_<NAME>=<value>``: value is always a lookup name, output ``<NAME>``
* ``SECRET_<NAME>=<value>``: value classified by shape, output ``<NAME>``
* ``SECRETS_PARAMETER_ARN`` / ``SECRETS_PARAMETER_NAME``: a parameter whose
  value is a JSON document of further references
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from resolve_aws_secrets.core.secrets.base import PendingFetch, SecretReference
from resolve_aws_secrets.core.secrets.classifier import classify

logger = logging.getLogger(__name__)

ARN_PREFIX = "SECRET_ARN_"
NAME_PREFIX = "SECRET_NAME_"
GENERIC_PREFIX = "SECRET_"

INDIRECTION_ARN_VAR = "SECRETS_PARAMETER_ARN"
INDIRECTION_NAME_VAR = "SECRETS_PARAMETER_NAME"

_CONVENTIONS: tuple[tuple[str, Callable[[str], SecretReference]], ...] = (
    (ARN_PREFIX, classify),
    (NAME_PREFIX, SecretReference.name),
    (GENERIC_PREFIX, classify),
)

_ENTRY_POINTS: tuple[tuple[str, Callable[[str], SecretReference]], ...] = (
    (INDIRECTION_ARN_VAR, classify),
    (INDIRECTION_NAME_VAR, SecretReference.name),
)


def collect(environment: Mapping[str, str]) -> list[PendingFetch]:
    """Scan *environment* for secret references.

    Direct references come first, in the iteration order of
    *environment*, followed by the indirection entry points.

    Args:
        environment: Variable names to values, typically ``os.environ``.

    Returns:
        Pending fetches; empty when nothing matches.
    """
    pending: list[PendingFetch] = []
    for key, value in environment.items():
        fetch = _match_convention(key, value)
        if fetch is not None:
            pending.append(fetch)

    for var, build in _ENTRY_POINTS:
        value = environment.get(var)
        if value:
            logger.debug("Found indirection entry point %s", var)
            pending.append(PendingFetch(var, build(value), indirect=True))

    return pending


def _match_convention(key: str, value: str) -> PendingFetch | None:
    for prefix, build in _CONVENTIONS:
        if not key.startswith(prefix):
            continue
        output_key = key[len(prefix):]
        if not output_key:
            logger.debug("Ignoring %s: no variable name after the prefix", key)
            return None
        return PendingFetch(output_key, build(value))
    return None

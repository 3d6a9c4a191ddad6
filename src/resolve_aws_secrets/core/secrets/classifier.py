"""Classify raw reference strings and extract ARN regions.

An ARN has the shape ``arn:PARTITION:SERVICE:REGION:ACCOUNT:RESOURCE``.
Only the service field decides the classification; anything that does
not look like an ARN of a known service is a plain lookup name.

Examples::

    classify("arn:aws:secretsmanager:us-west-2:123:secret:db")  # secret store
    classify("arn:aws:ssm:eu-west-1:123:parameter/app/config")  # parameter store
    classify("prod/db/password")                                # name
"""

from __future__ import annotations

import logging

from resolve_aws_secrets.core.secrets.base import ReferenceKind, SecretReference

logger = logging.getLogger(__name__)

ARN_PREFIX = "arn:"
_MIN_ARN_SEGMENTS = 6
_REGION_SEGMENT = 3

_SERVICE_KINDS: dict[str, ReferenceKind] = {
    "secretsmanager": ReferenceKind.SECRET_STORE_ARN,
    "ssm": ReferenceKind.PARAMETER_STORE_ARN,
}


def classify(raw: str) -> SecretReference:
    """Classify *raw* as a secret-store ARN, parameter-store ARN or name.

    Never fails: malformed or unknown-service ARNs degrade to a name.
    """
    if not raw.startswith(ARN_PREFIX):
        return SecretReference.name(raw)

    segments = raw.split(":")
    if len(segments) < _MIN_ARN_SEGMENTS:
        logger.debug("ARN-like reference with %d segments treated as a name", len(segments))
        return SecretReference.name(raw)

    kind = _SERVICE_KINDS.get(segments[2])
    if kind is None:
        logger.debug("ARN for unsupported service '%s' treated as a name", segments[2])
        return SecretReference.name(raw)
    return SecretReference(kind, raw)


def region_of(arn: str) -> str | None:
    """Return the region field of *arn*.

    ``None`` when there are fewer than four colon-delimited fields. An
    empty region field (global resources) is returned as ``""``.
    """
    segments = arn.split(":")
    if len(segments) <= _REGION_SEGMENT:
        return None
    return segments[_REGION_SEGMENT]

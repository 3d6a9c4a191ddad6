"""Expand an indirection document into further pending fetches."""

from __future__ import annotations

import json
import logging

from resolve_aws_secrets.core.secrets.base import PendingFetch
from resolve_aws_secrets.core.secrets.classifier import classify
from resolve_aws_secrets.core.secrets.collector import GENERIC_PREFIX

logger = logging.getLogger(__name__)


def resolve_indirection(raw_document: str, source: str = "indirection document") -> list[PendingFetch]:
    """Parse *raw_document* as a flat JSON object of references.

    Keys lose a leading ``SECRET_`` prefix; string values are classified
    like any other reference. Shape problems are logged and skipped, never
    raised: a document that is not a JSON object yields nothing, and
    non-string entries are dropped. Expanded fetches are never indirect
    themselves, so expansion stops at one level.

    Args:
        raw_document: The fetched parameter value.
        source: Where the document came from, for log messages.

    Returns:
        Pending fetches in document order.
    """
    try:
        document = json.loads(raw_document)
    except json.JSONDecodeError as exc:
        logger.warning("%s is not valid JSON (%s); no secrets expanded", source, exc.msg)
        return []

    if not isinstance(document, dict):
        logger.warning("%s is not a JSON object; no secrets expanded", source)
        return []

    pending: list[PendingFetch] = []
    for key, value in document.items():
        if not isinstance(value, str):
            logger.warning(
                "Unexpected value type %s for key %s in %s; skipped",
                type(value).__name__,
                key,
                source,
            )
            continue
        output_key = key[len(GENERIC_PREFIX):] if key.startswith(GENERIC_PREFIX) else key
        if not output_key:
            logger.warning("Empty variable name for key %s in %s; skipped", key, source)
            continue
        pending.append(PendingFetch(output_key, classify(value)))

    logger.info("Expanded %d secret reference(s) from %s", len(pending), source)
    return pending

"""Per-region client pool."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from resolve_aws_secrets.core.secrets.base import RegionalClientPair, SecretReference
from resolve_aws_secrets.core.secrets.classifier import region_of

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str | None], RegionalClientPair]
"""Builds a client pair for a region; ``None`` asks for the default region."""


class RegionalClientPool:
    """Thread-safe, lazily populated pool of regional client pairs.

    References that are typed ARNs use the pair for the region embedded in
    the ARN; everything else shares one default pair. Pairs are built on
    first use and kept for the lifetime of the pool. Construction of a
    new pair is serialized, so concurrent first requests for the same
    region observe a single shared pair. Lookups of existing pairs take
    no lock.

    A factory failure is raised to the caller and nothing is cached, so
    one bad region does not poison the pool.

    Args:
        factory: Builds the client pair for a region.
    """

    def __init__(self, factory: ClientFactory) -> None:
        self._factory = factory
        self._pairs: dict[str, RegionalClientPair] = {}
        self._default: RegionalClientPair | None = None
        self._lock = threading.Lock()

    def client_for(self, reference: SecretReference) -> RegionalClientPair:
        """Return the client pair that serves *reference*."""
        region = region_of(reference.value) if reference.is_arn else None
        if region is None:
            return self.default_pair()
        return self.pair_for_region(region)

    def pair_for_region(self, region: str) -> RegionalClientPair:
        """Return the pair for *region*, building it on first use.

        The empty string is a region key of its own, distinct from the
        default pair.
        """
        pair = self._pairs.get(region)
        if pair is not None:
            return pair

        with self._lock:
            pair = self._pairs.get(region)
            if pair is None:
                logger.info("Creating AWS clients for region '%s'", region)
                pair = self._factory(region)
                self._pairs[region] = pair
        return pair

    def default_pair(self) -> RegionalClientPair:
        """Return the pair for references without an explicit region."""
        pair = self._default
        if pair is not None:
            return pair

        with self._lock:
            if self._default is None:
                self._default = self._factory(None)
                logger.info("Created default AWS clients for region '%s'", self._default.region)
            return self._default

    @property
    def regions(self) -> list[str]:
        """Regions with an explicit pair, in creation order."""
        return list(self._pairs)

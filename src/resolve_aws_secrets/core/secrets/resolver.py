"""Environment-level secret resolution."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from resolve_aws_secrets.core.config.launcher import LauncherConfig
from resolve_aws_secrets.core.resilience.retry import RetryExecutor
from resolve_aws_secrets.core.secrets.base import ResolvedEnv
from resolve_aws_secrets.core.secrets.collector import collect
from resolve_aws_secrets.core.secrets.orchestrator import FetchOrchestrator
from resolve_aws_secrets.core.secrets.pool import ClientFactory, RegionalClientPool
from resolve_aws_secrets.core.secrets.providers import Boto3ClientFactory

logger = logging.getLogger(__name__)


class EnvironmentResolver:
    """Collect the secret references in an environment and fetch them.

    Args:
        orchestrator: Executes the fetches.
    """

    def __init__(self, orchestrator: FetchOrchestrator) -> None:
        self._orchestrator = orchestrator

    @classmethod
    def from_config(
        cls,
        config: LauncherConfig,
        factory: ClientFactory | None = None,
    ) -> EnvironmentResolver:
        """Build a resolver wired from *config*.

        Args:
            config: Launcher configuration.
            factory: Client pair factory. Defaults to boto3 clients using
                the configured default and fallback regions, with each
                call bounded by the resolution timeout.
        """
        if factory is None:
            factory = Boto3ClientFactory(
                config.default_region,
                config.fallback_region,
                call_timeout_seconds=config.timeout_seconds,
            )
        orchestrator = FetchOrchestrator(
            RegionalClientPool(factory),
            with_decryption=config.with_decryption,
            timeout_seconds=config.timeout_seconds,
            max_workers=config.max_workers,
            retry=RetryExecutor(config.retry),
        )
        return cls(orchestrator)

    def resolve(self, environment: Mapping[str, str]) -> ResolvedEnv:
        """Resolve every secret reference found in *environment*.

        Raises:
            FetchError: If any reference cannot be resolved.
        """
        pending = collect(environment)
        logger.info("Processing %d secret reference(s)", len(pending))
        resolved = self._orchestrator.fetch_all(pending)
        logger.info("Resolved %d environment variable(s)", len(resolved))
        return resolved

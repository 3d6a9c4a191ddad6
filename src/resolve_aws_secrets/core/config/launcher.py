"""Launcher configuration model."""

from dataclasses import dataclass, field

from .base import LogLevel
from .retry import RetryConfig

DEFAULT_FALLBACK_REGION = "us-east-1"


@dataclass
class LauncherConfig:
    """Top-level configuration for one launcher invocation.

    Every field has a default, so an empty environment yields a usable
    configuration.
    """

    default_region: str | None = None
    """Region for references without one (default: boto3 provider chain)"""

    fallback_region: str = DEFAULT_FALLBACK_REGION
    """Region used when the provider chain finds none (default: us-east-1)"""

    timeout_seconds: float = 60.0
    """Overall deadline for resolving every secret (default: 60.0)"""

    max_workers: int | None = None
    """Upper bound on concurrent fetch threads (default: executor default)"""

    with_decryption: bool = True
    """Decrypt SecureString parameters (default: True)"""

    log_level: LogLevel = LogLevel.INFO
    """Logging level (default: INFO)"""

    retry: RetryConfig = field(default_factory=RetryConfig)
    """Retry behavior for individual fetches"""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        if not self.fallback_region:
            raise ValueError("fallback_region is required")

"""Retry configuration for backend fetches."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retrying a single backend fetch.

    Implements exponential backoff with configurable parameters. Only
    throttling is retried by default; a missing or forbidden secret will
    not start existing on a second attempt.
    """

    max_attempts: int = 3
    """Maximum number of attempts per fetch, including the first (default: 3)"""

    initial_delay_seconds: float = 0.2
    """Initial delay between attempts in seconds (default: 0.2)"""

    max_delay_seconds: float = 5.0
    """Maximum delay between attempts in seconds (default: 5.0)"""

    backoff_multiplier: float = 2.0
    """Multiplier for exponential backoff (default: 2.0)"""

    retry_on_exceptions: list[str] = field(default_factory=lambda: ["BackendThrottledError"])
    """Exception class names to retry on (default: ['BackendThrottledError'])"""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay_seconds <= 0:
            raise ValueError("initial_delay_seconds must be positive")
        if self.max_delay_seconds < self.initial_delay_seconds:
            raise ValueError("max_delay_seconds must be >= initial_delay_seconds")
        if self.backoff_multiplier < 1.0:
            raise ValueError("backoff_multiplier must be >= 1.0")

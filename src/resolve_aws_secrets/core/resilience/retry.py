"""Retry execution with exponential backoff and jitter."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from typing import TypeVar

from resolve_aws_secrets.core.config.retry import RetryConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

RetryCallback = Callable[[int, Exception, float], None]
"""Called before each retry with ``(attempt, error, delay)``; attempt is 1-based."""


class RetryExecutor:
    """Run a backend call, retrying the failures listed in a ``RetryConfig``.

    Safe to share between threads: it holds no per-call state.

    Args:
        config: Attempts, delays and retryable exception names.
        jitter_factor: Random jitter multiplier applied to each delay (0 disables jitter).
        sleep_func: Injectable sleep function for testing. Defaults to ``time.sleep``.
    """

    def __init__(
        self,
        config: RetryConfig,
        jitter_factor: float = 0.25,
        sleep_func: Callable[[float], None] | None = None,
    ) -> None:
        self._config = config
        self._jitter_factor = jitter_factor
        self._sleep = sleep_func or time.sleep

    @property
    def config(self) -> RetryConfig:
        """Return the retry configuration."""
        return self._config

    def calculate_delay(self, attempt: int) -> float:
        """Return the delay in seconds before retry number *attempt* (0-based).

        ``min(initial * multiplier^attempt, max) * (1 + jitter)``
        """
        delay = min(
            self._config.initial_delay_seconds * (self._config.backoff_multiplier ** attempt),
            self._config.max_delay_seconds,
        )
        if self._jitter_factor > 0:
            delay += delay * self._jitter_factor * random.random()
        return delay

    def is_retryable(self, error: Exception) -> bool:
        """Check whether *error* matches ``retry_on_exceptions``.

        A name without a dot matches the class or any of its base classes
        by ``__name__``; a dotted name must equal ``module.class`` exactly.
        """
        error_type = type(error)
        qualified_name = f"{error_type.__module__}.{error_type.__name__}"
        base_names = {cls.__name__ for cls in error_type.__mro__}

        for name in self._config.retry_on_exceptions:
            if "." in name:
                if name == qualified_name:
                    return True
            elif name in base_names:
                return True
        return False

    def execute(self, func: Callable[[], T], on_retry: RetryCallback | None = None) -> T:
        """Call *func* until it succeeds or attempts run out.

        Raises:
            Exception: The last error once attempts are exhausted, or the
                first non-retryable error immediately.
        """
        attempt = 0
        while True:
            try:
                return func()
            except Exception as exc:
                if attempt + 1 >= self._config.max_attempts or not self.is_retryable(exc):
                    raise

                delay = self.calculate_delay(attempt)
                attempt += 1
                logger.debug(
                    "Attempt %d/%d failed (%s), retrying in %.3fs",
                    attempt,
                    self._config.max_attempts,
                    type(exc).__name__,
                    delay,
                )
                if on_retry is not None:
                    on_retry(attempt, exc, delay)
                self._sleep(delay)

"""Resilience patterns for backend calls."""

from resolve_aws_secrets.core.resilience.retry import RetryCallback, RetryExecutor

__all__ = [
    "RetryCallback",
    "RetryExecutor",
]

"""Configuration models for resolve-aws-secrets.

This package provides dataconf-based configuration models, loadable from
HOCON files or ``RESOLVE_AWS_SECRETS_*`` environment variables.
"""

from resolve_aws_secrets.core.config.base import LogLevel
from resolve_aws_secrets.core.config.launcher import DEFAULT_FALLBACK_REGION, LauncherConfig
from resolve_aws_secrets.core.config.loader import (
    ENV_PREFIX,
    load_from_env,
    load_from_file,
    load_launcher_config,
)
from resolve_aws_secrets.core.config.retry import RetryConfig

__all__ = [
    "DEFAULT_FALLBACK_REGION",
    "ENV_PREFIX",
    "LauncherConfig",
    "LogLevel",
    "RetryConfig",
    "load_from_env",
    "load_from_file",
    "load_launcher_config",
]

"""Launcher runtime: environment assembly, child process and CLI."""

from resolve_aws_secrets.runner.launcher import (
    ABNORMAL_EXIT_CODE,
    FORWARDED_SIGNALS,
    build_child_environment,
    launch,
)

__all__ = [
    "ABNORMAL_EXIT_CODE",
    "FORWARDED_SIGNALS",
    "build_child_environment",
    "launch",
]

"""HOCON configuration loader using dataconf.

This module provides functions for loading the launcher configuration from
HOCON files and environment variables using dataconf.
"""

from typing import TypeVar, cast

import dataconf

from .launcher import LauncherConfig

T = TypeVar("T")

ENV_PREFIX = "RESOLVE_AWS_SECRETS_"
"""Prefix of the environment variables that configure the launcher itself."""


def load_from_file(path: str, config_class: type[T]) -> T:
    """Load configuration from a HOCON file.

    Args:
        path: Path to the HOCON configuration file
        config_class: The configuration dataclass type to load into

    Returns:
        Instance of config_class populated with configuration from the file

    Example:
        >>> config = load_from_file("launcher.conf", LauncherConfig)
    """
    return cast(T, dataconf.file(path, config_class))


def load_from_env(prefix: str, config_class: type[T]) -> T:
    """Load configuration from environment variables.

    Args:
        prefix: Prefix for environment variables (e.g., "RESOLVE_AWS_SECRETS_")
        config_class: The configuration dataclass type to load into

    Returns:
        Instance of config_class populated with configuration from env vars

    Note:
        Environment variables use the format PREFIX_FIELD_NAME=value.
        Nested fields use double underscores: PREFIX_RETRY__MAX_ATTEMPTS=5
    """
    return cast(T, dataconf.env(prefix, config_class))


def load_launcher_config(path: str | None = None) -> LauncherConfig:
    """Load the launcher configuration.

    A HOCON file takes precedence when given; otherwise the configuration
    is read from ``RESOLVE_AWS_SECRETS_*`` environment variables.
    """
    if path is not None:
        return load_from_file(path, LauncherConfig)
    return load_from_env(ENV_PREFIX, LauncherConfig)

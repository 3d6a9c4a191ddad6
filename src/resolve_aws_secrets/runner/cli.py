"""Command-line interface: resolve secrets, then run a program."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from resolve_aws_secrets import __version__
from resolve_aws_secrets.core.config.base import LogLevel
from resolve_aws_secrets.core.config.loader import load_launcher_config
from resolve_aws_secrets.core.secrets.errors import ChildSpawnError, FetchError
from resolve_aws_secrets.core.secrets.resolver import EnvironmentResolver
from resolve_aws_secrets.runner.launcher import launch

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resolve-aws-secrets",
        description=(
            "Resolve AWS Secrets Manager and SSM Parameter Store references found in "
            "SECRET_* and SECRETS_PARAMETER_* environment variables, then run a program "
            "with the resolved values in its environment."
        ),
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a HOCON launcher configuration file (default: RESOLVE_AWS_SECRETS_* variables).",
    )
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Set the logging level (default: configured level, INFO).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "program",
        nargs="?",
        help="Program to run.",
    )
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Arguments passed to the program unchanged.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint.

    Args:
        argv: Command-line arguments. Defaults to ``sys.argv[1:]``.

    Returns:
        The program's exit code, or 1 if nothing could be launched or the
        program was terminated abnormally.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.program is None:
        parser.print_usage(sys.stderr)
        print("error: a program to run is required", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=args.log_level or LogLevel.INFO.value,
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )

    try:
        config = load_launcher_config(args.config)
    except Exception as exc:
        logger.error("Failed to load configuration: %s", exc)
        return 1

    if args.log_level is None:
        logging.getLogger().setLevel(config.log_level.value)

    logger.info("Starting resolve-aws-secrets %s", __version__)
    try:
        resolved = EnvironmentResolver.from_config(config).resolve(os.environ)
    except FetchError as exc:
        logger.error("Not starting %s: %s", args.program, exc)
        return 1

    try:
        return launch(args.program, args.args, resolved)
    except ChildSpawnError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())

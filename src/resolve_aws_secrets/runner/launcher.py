"""Child environment assembly and program launch."""

from __future__ import annotations

import contextlib
import logging
import os
import signal
import subprocess
import threading
from collections.abc import Iterator, Mapping, Sequence

from resolve_aws_secrets.core.secrets.base import ResolvedEnv
from resolve_aws_secrets.core.secrets.errors import ChildSpawnError

logger = logging.getLogger(__name__)

ABNORMAL_EXIT_CODE = 1
"""Exit code reported when the child did not exit on its own (e.g. killed by a signal)."""

FORWARDED_SIGNALS: tuple[signal.Signals, ...] = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGHUP", "SIGQUIT") if hasattr(signal, name)
)


def build_child_environment(
    resolved: ResolvedEnv,
    base: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Overlay resolved secrets on a copy of *base*.

    Resolved values always win over inherited ones of the same name.

    Args:
        resolved: Secret values to insert.
        base: Inherited environment. Defaults to ``os.environ``.
    """
    environment = dict(os.environ if base is None else base)
    for key, value in resolved.items():
        if key in environment:
            logger.debug("Overriding inherited environment variable: %s", key)
        logger.info("Setting environment variable: %s", key)
        environment[key] = value
    return environment


def launch(
    program: str,
    args: Sequence[str],
    resolved: ResolvedEnv,
    base_environment: Mapping[str, str] | None = None,
) -> int:
    """Run *program* with the resolved secrets and wait for it.

    Signals in :data:`FORWARDED_SIGNALS` received while the child runs are
    passed on to it.

    Args:
        program: Executable name or path, looked up on ``PATH``.
        args: Arguments passed to the program.
        resolved: Secret values merged into the child environment.
        base_environment: Inherited environment. Defaults to ``os.environ``.

    Returns:
        The child's exit code, or :data:`ABNORMAL_EXIT_CODE` if it was
        terminated by a signal.

    Raises:
        ChildSpawnError: If the program cannot be started.
    """
    environment = build_child_environment(resolved, base_environment)

    logger.info("Executing command: %s", program)
    try:
        process = subprocess.Popen([program, *args], env=environment)
    except OSError as exc:
        raise ChildSpawnError(program, exc) from exc

    with _forward_signals(process):
        returncode = process.wait()

    if returncode < 0:
        logger.warning("Command terminated by signal %d", -returncode)
        return ABNORMAL_EXIT_CODE

    logger.info("Command exited with status code: %d", returncode)
    return returncode


@contextlib.contextmanager
def _forward_signals(process: subprocess.Popen[bytes]) -> Iterator[None]:
    # Handlers can only be installed from the main thread.
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def forward(signum: int, _frame: object) -> None:
        logger.debug("Forwarding signal %d to child %d", signum, process.pid)
        with contextlib.suppress(ProcessLookupError):
            process.send_signal(signum)

    previous = {signum: signal.signal(signum, forward) for signum in FORWARDED_SIGNALS}
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)

"""Concurrent fetch orchestration.

Every pending fetch runs as its own task on a thread pool. When an
indirection entry point completes, its document is expanded and the
resulting fetches join the same batch. The first failure aborts the
batch: outstanding tasks are abandoned and no partial result is returned.

Duplicate output keys are settled after all fetches complete, with the
last write winning in this order: direct references in collection order,
then expanded references grouped by entry point in collection order and
in document order within an entry point.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait

from resolve_aws_secrets.core.config.retry import RetryConfig
from resolve_aws_secrets.core.resilience.retry import RetryCallback, RetryExecutor
from resolve_aws_secrets.core.secrets.base import PendingFetch, ResolvedEnv, Store
from resolve_aws_secrets.core.secrets.errors import FetchError, ResolutionTimeoutError
from resolve_aws_secrets.core.secrets.indirection import resolve_indirection
from resolve_aws_secrets.core.secrets.pool import RegionalClientPool

logger = logging.getLogger(__name__)

_DIRECT = 0
_EXPANDED = 1

# (wave, position of the originating fetch, position within its document)
_OrderKey = tuple[int, int, int]


class FetchOrchestrator:
    """Resolve a batch of pending fetches concurrently, failing fast.

    Args:
        pool: Supplies the client pair for each reference.
        with_decryption: Decrypt SecureString parameters.
        timeout_seconds: Deadline for the whole batch, expansions included.
        max_workers: Thread pool size. Defaults to the executor default.
        retry: Retry policy for individual backend calls. Defaults to
            retrying throttled calls with ``RetryConfig()`` settings.
        clock: Injectable monotonic clock for testing.
    """

    def __init__(
        self,
        pool: RegionalClientPool,
        *,
        with_decryption: bool = True,
        timeout_seconds: float = 60.0,
        max_workers: int | None = None,
        retry: RetryExecutor | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._pool = pool
        self._with_decryption = with_decryption
        self._timeout = timeout_seconds
        self._max_workers = max_workers
        self._retry = retry or RetryExecutor(RetryConfig())
        self._clock = clock or time.monotonic

    def fetch_all(self, pending: Sequence[PendingFetch]) -> ResolvedEnv:
        """Fetch every pending value and return the merged result.

        Raises:
            FetchError: The first fetch failure, or
                :class:`ResolutionTimeoutError` when the deadline passes.
        """
        if not pending:
            return ResolvedEnv()

        deadline = self._clock() + self._timeout
        executor = ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="resolve-secret")
        outstanding: dict[Future[str], tuple[_OrderKey, PendingFetch]] = {}
        resolved: list[tuple[_OrderKey, str, str]] = []

        def submit(item: PendingFetch, order: _OrderKey) -> None:
            outstanding[executor.submit(self._fetch, item)] = (order, item)

        try:
            for index, item in enumerate(pending):
                submit(item, (_DIRECT, index, 0))

            while outstanding:
                remaining = deadline - self._clock()
                done: set[Future[str]] = set()
                if remaining > 0:
                    done, _ = wait(outstanding, timeout=remaining, return_when=FIRST_COMPLETED)
                if not done:
                    raise ResolutionTimeoutError(self._timeout, len(outstanding))

                for future in done:
                    order, item = outstanding.pop(future)
                    value = future.result()
                    if item.indirect:
                        source = f"{item.output_key} ({item.reference.value})"
                        for position, child in enumerate(resolve_indirection(value, source)):
                            submit(child, (_EXPANDED, order[1], position))
                    else:
                        logger.info("Resolved secret for %s", item.output_key)
                        resolved.append((order, item.output_key, value))
        except FetchError as exc:
            logger.error("Secret resolution failed: %s", exc)
            raise
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        resolved.sort(key=lambda entry: entry[0])
        return ResolvedEnv((key, value) for _, key, value in resolved)

    def _fetch(self, item: PendingFetch) -> str:
        identifier = item.reference.value
        try:
            pair = self._pool.client_for(item.reference)
            if item.store is Store.PARAMETER_STORE:
                return self._retry.execute(
                    lambda: pair.parameters.fetch_parameter_value(identifier, self._with_decryption),
                    on_retry=self._retry_logger(item),
                )
            return self._retry.execute(
                lambda: pair.secrets.fetch_secret_value(identifier),
                on_retry=self._retry_logger(item),
            )
        except FetchError as exc:
            if exc.identifier is None:
                exc.identifier = identifier
            if exc.output_key is None:
                exc.output_key = item.output_key
            raise

    @staticmethod
    def _retry_logger(item: PendingFetch) -> RetryCallback:
        def on_retry(attempt: int, error: Exception, delay: float) -> None:
            logger.warning(
                "Fetch for %s failed (%s), retry %d in %.2fs",
                item.output_key,
                type(error).__name__,
                attempt,
                delay,
            )

        return on_retry

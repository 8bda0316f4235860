r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that retries an
operation producing an awaitable. Attempts are chained through
completion callbacks and backoff timers on the running event loop, so
neither the caller nor any other thread is blocked while waiting.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import functools
import inspect
import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from aretry.backoff.tiered import TieredBackoff
from aretry.engine.classifier import FailureClassifier
from aretry.engine.executor_core import attempt_once, create_timeout_error, log_retry
from aretry.engine.outcome import Success
from aretry.utils import clock
from aretry.utils.structured_logging import retry_location_scope

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.backoff.base import BaseBackoffStrategy
    from aretry.core.config import RetryPolicy
    from aretry.engine.outcome import Outcome

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes an asynchronous operation with retries.

    ``execute`` returns an ``asyncio.Future`` immediately. The first
    attempt is started right away and every later attempt is scheduled
    with ``loop.call_later`` once the previous one has settled, so at
    most one attempt is in flight at any time. The returned future is
    settled exactly once, by the executor.

    Cancelling the returned future stops the chain: the attempt in
    flight is cancelled and no further attempt is scheduled.

    Attributes:
        policy: The timeout/interval pair.
        classifier: Decides whether a failure is retryable.
        backoff: Computes the wait before the next attempt.
        location: Opaque call-site token attached to the timeout error.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.core.config import RetryPolicy
        >>> from aretry.engine import AsyncRetryExecutor
        >>>
        >>> async def fetch():
        ...     await asyncio.sleep(0)
        ...     return "ready"
        ...
        >>> async def main():
        ...     executor = AsyncRetryExecutor(RetryPolicy(timeout=1.0, interval=0.01))
        ...     return await executor.execute(fetch)
        ...
        >>> asyncio.run(main())
        'ready'

        ```
    """

    def __init__(
        self,
        policy: RetryPolicy,
        classifier: FailureClassifier | None = None,
        backoff: BaseBackoffStrategy | None = None,
        location: Any = None,
    ) -> None:
        """Initialize async retry executor.

        Args:
            policy: The timeout/interval pair governing the retries.
            classifier: Optional failure classifier. Defaults to
                ``FailureClassifier()``.
            backoff: Optional backoff strategy. Defaults to
                ``TieredBackoff()``.
            location: Optional call-site token, never inspected.
        """
        self.policy = policy
        self.classifier: FailureClassifier = (
            classifier if classifier is not None else FailureClassifier()
        )
        self.backoff: BaseBackoffStrategy = backoff if backoff is not None else TieredBackoff()
        self.location = location

    def execute(self, operation: Callable[[], Awaitable[T]]) -> asyncio.Future[T]:
        """Start retrying the operation and return its eventual result.

        Must be called from a coroutine or callback running in an event
        loop. If the operation returns a plain value instead of an
        awaitable, that value is an immediate success.

        Args:
            operation: Zero-argument callable returning an awaitable.

        Returns:
            A future resolved with the value of the first successful
            attempt. It fails with ``RetryTimeoutError`` if a retryable
            failure is still raised once the elapsed time reaches the
            timeout, or with a pending or fatal failure as is.

        Raises:
            RuntimeError: If no event loop is running.
        """
        loop = asyncio.get_running_loop()
        chain = _RetryChain(self, operation, loop)
        chain.start()
        return chain.result


class _RetryChain(Generic[T]):
    """State of one asynchronous retry invocation."""

    def __init__(
        self,
        executor: AsyncRetryExecutor,
        operation: Callable[[], Awaitable[T]],
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        self.executor = executor
        self.operation = operation
        self.loop = loop
        self.result: asyncio.Future[T] = loop.create_future()
        self.start_time = clock.now()
        self._inflight: asyncio.Future[T] | None = None
        self._timer: asyncio.TimerHandle | None = None

    def start(self) -> None:
        self.result.add_done_callback(self._on_result_done)
        self._attempt(1)

    def _attempt(self, attempt: int) -> None:
        self._timer = None
        if self.result.done():
            return
        with retry_location_scope(self.executor.location):
            outcome = attempt_once(self.operation, self.executor.classifier)
            if isinstance(outcome, Success) and inspect.isawaitable(outcome.value):
                self._inflight = asyncio.ensure_future(outcome.value)
                self._inflight.add_done_callback(functools.partial(self._on_attempt_done, attempt))
                return
        self._settle(attempt, outcome)

    def _on_attempt_done(self, attempt: int, inflight: asyncio.Future[T]) -> None:
        self._inflight = None
        if inflight.cancelled():
            outcome: Outcome[T] = self.executor.classifier.classify(asyncio.CancelledError())
        elif inflight.exception() is not None:
            outcome = self.executor.classifier.classify(inflight.exception())
        else:
            outcome = Success(inflight.result())
        self._settle(attempt, outcome)

    def _settle(self, attempt: int, outcome: Outcome[T]) -> None:
        if self.result.done():
            return
        if isinstance(outcome, Success):
            logger.debug(f"Operation succeeded on attempt {attempt}")
            self.result.set_result(outcome.value)
            return
        if outcome.is_terminal:
            logger.debug(
                f"Attempt {attempt} raised {type(outcome.cause).__name__} "
                f"({outcome.category.value}), not retrying"
            )
            if isinstance(outcome.cause, asyncio.CancelledError):
                self.result.cancel()
            else:
                self.result.set_exception(outcome.cause)
            return

        policy = self.executor.policy
        elapsed = clock.elapsed_since(self.start_time)
        if elapsed >= policy.timeout:
            self.result.set_exception(
                create_timeout_error(
                    attempts=attempt,
                    elapsed=elapsed,
                    last_cause=outcome.cause,
                    policy=policy,
                    location=self.executor.location,
                )
            )
            return

        wait = self.executor.backoff.calculate(elapsed, policy)
        log_retry(attempt, elapsed, wait, outcome.cause)
        self._timer = self.loop.call_later(wait, self._attempt, attempt + 1)

    def _on_result_done(self, result: asyncio.Future[T]) -> None:
        if not result.cancelled():
            return
        logger.debug("Retry cancelled by the caller")
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._inflight is not None:
            self._inflight.cancel()

r"""Implement the asynchronous retry entry point.

This module provides ``retry_async``, which retries an operation
producing an awaitable without blocking the event loop.
"""

from __future__ import annotations

__all__ = ["retry_async"]

from typing import TYPE_CHECKING, Any, TypeVar

from aretry.core.config import DEFAULT_INTERVAL, DEFAULT_TIMEOUT, RetryPolicy
from aretry.engine.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Awaitable, Callable

    from aretry.backoff.base import BaseBackoffStrategy
    from aretry.engine.classifier import FailureClassifier

T = TypeVar("T")


def retry_async(
    operation: Callable[[], Awaitable[T]],
    timeout: float = DEFAULT_TIMEOUT,
    interval: float = DEFAULT_INTERVAL,
    location: Any = None,
    *,
    classifier: FailureClassifier | None = None,
    backoff: BaseBackoffStrategy | None = None,
) -> asyncio.Future[T]:
    """Retry an asynchronous operation until it succeeds or the timeout
    elapses.

    The returned future is available immediately; attempts run on the
    current event loop and the wait between them is a loop timer, not a
    blocking sleep.

    Args:
        operation: Zero-argument callable returning an awaitable, for
            example an ``async def`` function.
        timeout: Total time budget in seconds for all attempts.
        interval: Steady-state spacing in seconds between attempts.
        location: Optional call-site token attached to the timeout
            error. It is never inspected.
        classifier: Optional failure classifier. Defaults to
            ``FailureClassifier()``.
        backoff: Optional backoff strategy. Defaults to ``TieredBackoff()``.

    Returns:
        A future resolved with the value of the first successful attempt,
        or failed with ``RetryTimeoutError`` or a pending or fatal
        failure.

    Raises:
        RuntimeError: If no event loop is running.
        ValueError: If ``timeout`` or ``interval`` is invalid.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import retry_async
        >>> state = {"calls": 0}
        >>> async def operation():
        ...     state["calls"] += 1
        ...     if state["calls"] < 3:
        ...         raise ValueError("not yet")
        ...     return "done"
        ...
        >>> async def main():
        ...     return await retry_async(operation, timeout=1.0, interval=0.01)
        ...
        >>> asyncio.run(main())
        'done'

        ```
    """
    executor = AsyncRetryExecutor(
        RetryPolicy(timeout=timeout, interval=interval),
        classifier=classifier,
        backoff=backoff,
        location=location,
    )
    return executor.execute(operation)

r"""Implement the synchronous retry entry point.

This module provides ``retry``, which invokes an operation on the
calling thread until it returns normally or the timeout elapses.
"""

from __future__ import annotations

__all__ = ["retry"]

from typing import TYPE_CHECKING, Any, TypeVar

from aretry.core.config import DEFAULT_INTERVAL, DEFAULT_TIMEOUT, RetryPolicy
from aretry.engine.executor import RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.backoff.base import BaseBackoffStrategy
    from aretry.engine.classifier import FailureClassifier

T = TypeVar("T")


def retry(
    operation: Callable[[], T],
    timeout: float = DEFAULT_TIMEOUT,
    interval: float = DEFAULT_INTERVAL,
    location: Any = None,
    *,
    classifier: FailureClassifier | None = None,
    backoff: BaseBackoffStrategy | None = None,
) -> T:
    """Invoke an operation until it succeeds or the timeout elapses.

    During the first interval the operation is retried every tenth of
    the interval, then every full interval. The calling thread sleeps
    between attempts.

    Args:
        operation: Zero-argument callable to retry.
        timeout: Total time budget in seconds for all attempts.
        interval: Steady-state spacing in seconds between attempts.
        location: Optional call-site token attached to the timeout
            error. It is never inspected.
        classifier: Optional failure classifier. Defaults to
            ``FailureClassifier()``.
        backoff: Optional backoff strategy. Defaults to ``TieredBackoff()``.

    Returns:
        The value returned by the first successful attempt.

    Raises:
        RetryTimeoutError: If the operation still fails once the
            elapsed time reaches ``timeout``.
        PendingError: If the operation signals it is intentionally
            incomplete. The exception is never retried nor wrapped.
        ValueError: If ``timeout`` or ``interval`` is invalid.

    Example:
        ```pycon
        >>> from aretry import retry
        >>> results = iter([ValueError("not yet"), ValueError("not yet"), "done"])
        >>> def operation():
        ...     result = next(results)
        ...     if isinstance(result, Exception):
        ...         raise result
        ...     return result
        ...
        >>> retry(operation, timeout=1.0, interval=0.01)
        'done'

        ```
    """
    executor = RetryExecutor(
        RetryPolicy(timeout=timeout, interval=interval),
        classifier=classifier,
        backoff=backoff,
        location=location,
    )
    return executor.execute(operation)

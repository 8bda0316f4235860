r"""Synchronous retry executor.

This module provides the RetryExecutor class that invokes an operation
on the calling thread until it succeeds, a fatal or pending failure
occurs, or the deadline elapses.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from aretry.backoff.tiered import TieredBackoff
from aretry.engine.classifier import FailureClassifier
from aretry.engine.executor_core import attempt_once, create_timeout_error, log_retry
from aretry.engine.outcome import Success
from aretry.utils import clock
from aretry.utils.structured_logging import retry_location_scope

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.backoff.base import BaseBackoffStrategy
    from aretry.core.config import RetryPolicy

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes an operation with retries, blocking between attempts.

    The executor runs a plain loop carrying the attempt counter, so the
    call stack does not grow with the number of attempts. Attempts are
    strictly sequential and the calling thread sleeps during the
    backoff wait.

    Attributes:
        policy: The timeout/interval pair.
        classifier: Decides whether a failure is retryable.
        backoff: Computes the wait before the next attempt.
        location: Opaque call-site token attached to the timeout error.

    Example:
        ```pycon
        >>> from aretry.core.config import RetryPolicy
        >>> from aretry.engine import RetryExecutor
        >>> executor = RetryExecutor(RetryPolicy(timeout=1.0, interval=0.01))
        >>> executor.execute(lambda: 42)
        42

        ```
    """

    def __init__(
        self,
        policy: RetryPolicy,
        classifier: FailureClassifier | None = None,
        backoff: BaseBackoffStrategy | None = None,
        location: Any = None,
    ) -> None:
        """Initialize retry executor.

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

    def execute(self, operation: Callable[[], T]) -> T:
        """Invoke the operation until it succeeds or the deadline elapses.

        Args:
            operation: Zero-argument callable to retry.

        Returns:
            The value returned by the first successful attempt.

        Raises:
            RetryTimeoutError: If a retryable failure is still raised
                once the elapsed time reaches the timeout.
            BaseException: A pending or fatal failure, re-raised as is.
        """
        start_time = clock.now()
        attempt = 1
        with retry_location_scope(self.location):
            while True:
                outcome = attempt_once(operation, self.classifier)
                if isinstance(outcome, Success):
                    logger.debug(f"Operation succeeded on attempt {attempt}")
                    return outcome.value
                if outcome.is_terminal:
                    logger.debug(
                        f"Attempt {attempt} raised {type(outcome.cause).__name__} "
                        f"({outcome.category.value}), not retrying"
                    )
                    raise outcome.cause

                elapsed = clock.elapsed_since(start_time)
                if elapsed >= self.policy.timeout:
                    raise create_timeout_error(
                        attempts=attempt,
                        elapsed=elapsed,
                        last_cause=outcome.cause,
                        policy=self.policy,
                        location=self.location,
                    )

                wait = self.backoff.calculate(elapsed, self.policy)
                log_retry(attempt, elapsed, wait, outcome.cause)
                time.sleep(wait)
                attempt += 1

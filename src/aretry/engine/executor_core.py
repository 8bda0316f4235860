r"""Shared core logic for retry executors.

This module provides helper functions used by both the synchronous and
the asynchronous retry executors: running one attempt into an explicit
outcome, logging a scheduled retry, and building the terminal timeout
error.
"""

from __future__ import annotations

__all__ = [
    "attempt_once",
    "create_timeout_error",
    "format_timeout_message",
    "log_retry",
]

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from aretry.exceptions import RetryTimeoutError
from aretry.engine.outcome import Success
from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.core.config import RetryPolicy
    from aretry.engine.classifier import FailureClassifier
    from aretry.engine.outcome import Outcome

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


def attempt_once(operation: Callable[[], T], classifier: FailureClassifier) -> Outcome[T]:
    """Invoke the operation once and classify any failure.

    This is the only place where an exception raised by the operation
    is caught.

    Args:
        operation: Zero-argument callable to invoke.
        classifier: Classifier deciding the category of a failure.

    Returns:
        ``Success`` with the returned value, or the failure outcome
        matching the category of the raised exception.
    """
    try:
        value = operation()
    except BaseException as exc:  # noqa: BLE001
        return classifier.classify(exc)
    return Success(value)


def log_retry(attempt: int, elapsed: float, wait: float, cause: BaseException) -> None:
    """Log a retryable failure before waiting for the next attempt.

    Args:
        attempt: The attempt that just failed (1-indexed).
        elapsed: Seconds elapsed since the first attempt.
        wait: Seconds to wait before the next attempt.
        cause: The exception raised by the attempt.
    """
    logger.debug(
        f"Attempt {attempt} failed with {type(cause).__name__} after {elapsed:.4f}s, "
        f"retrying in {wait:.4f}s"
    )


def format_timeout_message(attempts: int, elapsed: float, last_cause: BaseException | None) -> str:
    """Format the message of the terminal timeout error.

    Args:
        attempts: Number of attempts performed.
        elapsed: Elapsed time in seconds.
        last_cause: The failure raised by the last attempt.

    Returns:
        The error message.

    Example:
        ```pycon
        >>> from aretry.engine.executor_core import format_timeout_message
        >>> format_timeout_message(3, 0.2, ValueError("not ready"))
        'Operation never succeeded. Attempted 3 times over 0.200 seconds. Last failure message: not ready.'
        >>> format_timeout_message(1, 0.05, ValueError())
        'Operation never succeeded. Attempted 1 times over 0.050 seconds.'

        ```
    """
    message = f"Operation never succeeded. Attempted {attempts} times over {elapsed:.3f} seconds."
    last_message = str(last_cause) if last_cause is not None else ""
    if last_message:
        message += f" Last failure message: {last_message}."
    return message


def create_timeout_error(
    *,
    attempts: int,
    elapsed: float,
    last_cause: BaseException | None,
    policy: RetryPolicy,
    location: Any = None,
) -> RetryTimeoutError:
    """Create the terminal error raised when the deadline is exceeded.

    Args:
        attempts: Number of attempts performed.
        elapsed: Elapsed time in seconds.
        last_cause: The failure raised by the last attempt.
        policy: The retry policy.
        location: Opaque call-site token.

    Returns:
        RetryTimeoutError carrying the attempt count, the elapsed time,
        the last cause, the policy, and the location. Its ``__cause__``
        is set to the last cause.
    """
    log_structured(
        logger,
        logging.DEBUG,
        f"Giving up after {attempts} attempts ({elapsed:.4f}s >= {policy.timeout:.4f}s)",
        attempts=attempts,
        elapsed=elapsed,
        timeout=policy.timeout,
        interval=policy.interval,
    )
    error = RetryTimeoutError(
        format_timeout_message(attempts, elapsed, last_cause),
        attempts=attempts,
        elapsed=elapsed,
        last_cause=last_cause,
        policy=policy,
        location=location,
    )
    error.__cause__ = last_cause
    return error

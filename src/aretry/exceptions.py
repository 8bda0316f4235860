r"""Exceptions raised or recognized by the retry executors.

This module defines the failure that signals an intentionally incomplete
operation and the terminal error raised when a retry sequence runs out
of time.
"""

from __future__ import annotations

__all__ = ["PendingError", "RetryTimeoutError"]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from aretry.core.config import RetryPolicy


class PendingError(Exception):
    """Signal that an operation is intentionally incomplete.

    A ``PendingError`` raised by the guarded operation is never retried
    and never wrapped: the executors propagate the exact instance.

    Example:
        ```pycon
        >>> from aretry import PendingError, retry
        >>> def operation():
        ...     raise PendingError("not implemented yet")
        ...
        >>> retry(operation, timeout=1.0, interval=0.1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        aretry.exceptions.PendingError: not implemented yet

        ```
    """


class RetryTimeoutError(Exception):
    """Raised when an operation keeps failing until the deadline elapses.

    Args:
        message: Human-readable description of the failure.
        attempts: Number of attempts performed, including the first one.
        elapsed: Time in seconds between the first attempt and the
            deadline check that gave up.
        last_cause: The failure raised by the last attempt.
        policy: The timeout/interval pair that governed the retries.
        location: Opaque call-site token, never inspected by the
            executors.

    Attributes:
        message: Human-readable description of the failure.
        attempts: Number of attempts performed.
        elapsed: Elapsed time in seconds.
        last_cause: The failure raised by the last attempt.
        policy: The retry policy.
        location: The call-site token, or ``None``.

    Example:
        ```pycon
        >>> from aretry import RetryTimeoutError
        >>> from aretry.core.config import RetryPolicy
        >>> error = RetryTimeoutError(
        ...     "Operation never succeeded. Attempted 3 times over 0.200 seconds.",
        ...     attempts=3,
        ...     elapsed=0.2,
        ...     last_cause=ValueError("boom"),
        ...     policy=RetryPolicy(timeout=0.2, interval=0.05),
        ... )
        >>> error.attempts
        3
        >>> error.last_message
        'boom'

        ```
    """

    def __init__(
        self,
        message: str,
        *,
        attempts: int,
        elapsed: float,
        last_cause: BaseException | None,
        policy: RetryPolicy,
        location: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.attempts = attempts
        self.elapsed = elapsed
        self.last_cause = last_cause
        self.policy = policy
        self.location = location

    def __reduce__(self) -> tuple[Any, ...]:
        return (
            _rebuild_timeout_error,
            (
                self.__class__,
                self.message,
                self.attempts,
                self.elapsed,
                self.last_cause,
                self.policy,
                self.location,
            ),
        )

    @property
    def timeout(self) -> float:
        """The configured total time budget in seconds."""
        return self.policy.timeout

    @property
    def interval(self) -> float:
        """The configured steady-state interval in seconds."""
        return self.policy.interval

    @property
    def last_message(self) -> str | None:
        """The message of the last failure, or ``None`` if it had none."""
        if self.last_cause is None:
            return None
        return str(self.last_cause) or None


def _rebuild_timeout_error(
    cls: type[RetryTimeoutError],
    message: str,
    attempts: int,
    elapsed: float,
    last_cause: BaseException | None,
    policy: RetryPolicy,
    location: Any,
) -> RetryTimeoutError:
    error = cls(
        message,
        attempts=attempts,
        elapsed=elapsed,
        last_cause=last_cause,
        policy=policy,
        location=location,
    )
    error.__cause__ = last_cause
    return error

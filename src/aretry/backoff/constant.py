r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoffStrategy

if TYPE_CHECKING:
    from aretry.core.config import RetryPolicy


class ConstantBackoff(BaseBackoffStrategy):
    """Constant/fixed backoff strategy.

    Waits the same delay before every attempt, regardless of the elapsed
    time. Without an explicit delay, the policy interval is used.

    Args:
        delay: Optional fixed delay in seconds. Defaults to the policy interval.

    Example:
        ```pycon
        >>> from aretry.backoff import ConstantBackoff
        >>> from aretry.core.config import RetryPolicy
        >>> policy = RetryPolicy(timeout=1.0, interval=0.2)
        >>> ConstantBackoff().calculate(0.0, policy)
        0.2
        >>> ConstantBackoff(delay=0.01).calculate(0.5, policy)
        0.01

        ```
    """

    def __init__(self, delay: float | None = None) -> None:
        if delay is not None and delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)

        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, elapsed: float, policy: RetryPolicy) -> float:  # noqa: ARG002
        """Calculate constant backoff delay.

        Args:
            elapsed: Seconds elapsed since the first attempt (unused).
            policy: The retry policy of the current invocation.

        Returns:
            The fixed delay, or the policy interval if none was given.
        """
        return policy.interval if self.delay is None else self.delay

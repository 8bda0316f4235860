r"""Two-tier backoff strategy front-loaded on the first interval."""

from __future__ import annotations

__all__ = ["TieredBackoff"]

import logging
from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoffStrategy
from aretry.core.config import DEFAULT_INITIAL_INTERVAL_FRACTION

if TYPE_CHECKING:
    from aretry.core.config import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


class TieredBackoff(BaseBackoffStrategy):
    """Fixed two-tier backoff strategy.

    While less than one interval has elapsed, the strategy waits only a
    fraction of the interval, so fast-resolving conditions are observed
    quickly. Afterwards it settles on the full interval. There is no
    jitter and no growth: the deadline check of the executor is the
    only cap.

    Args:
        initial_fraction: Fraction of the interval used as wait during
            the first interval window (default: 0.1). Must be in [0, 1].

    Example:
        ```pycon
        >>> from aretry.backoff import TieredBackoff
        >>> from aretry.core.config import RetryPolicy
        >>> backoff = TieredBackoff()
        >>> policy = RetryPolicy(timeout=2.0, interval=0.5)
        >>> backoff.calculate(0.0, policy)  # First interval window
        0.05
        >>> backoff.calculate(0.5, policy)  # Afterwards
        0.5

        ```
    """

    def __init__(self, initial_fraction: float = DEFAULT_INITIAL_INTERVAL_FRACTION) -> None:
        if not 0 <= initial_fraction <= 1:
            msg = f"initial_fraction must be in [0, 1], got {initial_fraction}"
            raise ValueError(msg)

        self.initial_fraction = initial_fraction

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(initial_fraction={self.initial_fraction})"

    def initial_interval(self, policy: RetryPolicy) -> float:
        """Return the wait used during the first interval window.

        Args:
            policy: The retry policy of the current invocation.

        Returns:
            The front-loaded wait in seconds.
        """
        return policy.interval * self.initial_fraction

    def calculate(self, elapsed: float, policy: RetryPolicy) -> float:
        """Calculate the two-tier backoff delay.

        Args:
            elapsed: Seconds elapsed since the first attempt started.
            policy: The retry policy of the current invocation.

        Returns:
            ``policy.interval * initial_fraction`` if ``elapsed`` is below
            the interval, ``policy.interval`` otherwise.
        """
        if elapsed < policy.interval:
            delay = self.initial_interval(policy)
        else:
            delay = policy.interval
        logger.debug(f"Waiting {delay:.4f}s before next attempt (elapsed={elapsed:.4f}s)")
        return delay

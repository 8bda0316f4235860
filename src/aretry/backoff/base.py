r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aretry.core.config import RetryPolicy


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before the next
    attempt based on the time elapsed since the first attempt and the
    configured retry policy.
    """

    @abstractmethod
    def calculate(self, elapsed: float, policy: RetryPolicy) -> float:
        """Calculate the wait before the next attempt.

        Args:
            elapsed: Seconds elapsed since the first attempt started.
            policy: The retry policy of the current invocation.

        Returns:
            The delay in seconds before the next attempt.
        """

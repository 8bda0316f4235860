r"""Retry policy and default patience settings.

This module provides the default timeout and interval used by the
public entry points, and the immutable ``RetryPolicy`` consumed by the
retry executors.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_INITIAL_INTERVAL_FRACTION",
    "DEFAULT_INTERVAL",
    "DEFAULT_TIMEOUT",
    "RetryPolicy",
]

from dataclasses import asdict, dataclass, replace
from typing import Any

from aretry.core.validation import validate_policy_params

# Default total time budget in seconds for one retry invocation
DEFAULT_TIMEOUT = 0.15

# Default steady-state spacing in seconds between attempts
DEFAULT_INTERVAL = 0.015

# Fraction of the interval used as wait during the first interval window
# With interval=0.05: wait 0.005s while elapsed < 0.05s, then 0.05s
DEFAULT_INITIAL_INTERVAL_FRACTION = 0.1


@dataclass(frozen=True)
class RetryPolicy:
    """Timeout/interval pair governing one retry invocation.

    Args:
        timeout: Total time budget in seconds for all attempts. Must be >= 0.
        interval: Steady-state spacing in seconds between attempts. Must be >= 0.

    Example:
        ```pycon
        >>> from aretry.core.config import RetryPolicy
        >>> policy = RetryPolicy()  # Use defaults
        >>> policy.timeout
        0.15
        >>> policy = RetryPolicy(timeout=2.0, interval=0.1)
        >>> policy.merge(interval=0.5)
        RetryPolicy(timeout=2.0, interval=0.5)
        >>> policy.interval  # Unchanged
        0.1

        ```
    """

    timeout: float = DEFAULT_TIMEOUT
    interval: float = DEFAULT_INTERVAL

    def __post_init__(self) -> None:
        """Validate policy parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_policy_params(timeout=self.timeout, interval=self.interval)

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with some parameters overridden.

        Args:
            **overrides: Parameters to override. ``None`` values are ignored.

        Returns:
            A new validated ``RetryPolicy``.

        Raises:
            TypeError: If an unknown parameter is passed.
            ValueError: If an overridden parameter fails validation.
        """
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> dict[str, float]:
        """Return the policy as a dictionary.

        Returns:
            A dictionary with the ``timeout`` and ``interval`` keys.
        """
        return asdict(self)

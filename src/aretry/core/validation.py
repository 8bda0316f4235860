r"""Parameter validation utilities for retry policies.

This module provides validation functions for the timeout and interval
of a retry policy to ensure they meet the required constraints before
being used by the retry executors.
"""

from __future__ import annotations

__all__ = ["validate_duration", "validate_policy_params"]

import math


def validate_duration(name: str, value: float) -> None:
    """Validate a single duration expressed in seconds.

    Args:
        name: The parameter name, used in the error message.
        value: The duration in seconds. Must be finite and >= 0.

    Raises:
        ValueError: If the duration is negative, NaN, or infinite.

    Example:
        ```pycon
        >>> from aretry.core.validation import validate_duration
        >>> validate_duration("timeout", 1.5)
        >>> validate_duration("timeout", -1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be >= 0, got -1

        ```
    """
    if not math.isfinite(value):
        msg = f"{name} must be finite, got {value}"
        raise ValueError(msg)
    if value < 0:
        msg = f"{name} must be >= 0, got {value}"
        raise ValueError(msg)


def validate_policy_params(timeout: float, interval: float) -> None:
    """Validate retry policy parameters.

    Args:
        timeout: Total time budget in seconds for all attempts.
            Must be finite and >= 0.
        interval: Steady-state spacing in seconds between attempts.
            Must be finite and >= 0.

    Raises:
        ValueError: If timeout or interval is negative or not finite.

    Example:
        ```pycon
        >>> from aretry.core import validate_policy_params
        >>> validate_policy_params(timeout=0.15, interval=0.015)
        >>> validate_policy_params(timeout=-1.0, interval=0.015)  # doctest: +SKIP

        ```
    """
    validate_duration("timeout", timeout)
    validate_duration("interval", interval)

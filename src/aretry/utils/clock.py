r"""Monotonic clock used to measure elapsed retry time."""

from __future__ import annotations

__all__ = ["elapsed_since", "now"]

import time


def now() -> float:
    """Return the current value of the monotonic clock in seconds."""
    return time.monotonic()


def elapsed_since(start: float) -> float:
    """Return the seconds elapsed since ``start``.

    Args:
        start: A value previously returned by ``now()``.

    Returns:
        The elapsed time in seconds.

    Example:
        ```pycon
        >>> from aretry.utils.clock import elapsed_since, now
        >>> start = now()
        >>> elapsed_since(start) >= 0.0
        True

        ```
    """
    return time.monotonic() - start

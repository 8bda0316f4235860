r"""aretry - Bounded retry primitive for eventually-true conditions.

This package repeatedly invokes an operation that may fail transiently
until it succeeds, a deadline elapses, or a failure that must not be
retried occurs. It is meant to drive "eventually succeeds" style
assertions in test code, synchronously or on an asyncio event loop.

Key Features:
    - Two-tier backoff: poll every tenth of the interval during the first
      interval, then every full interval
    - Pending and fatal failures are propagated immediately, unmodified
    - Timeout error carrying attempt count, elapsed time, and last cause
    - Non-blocking asynchronous retries chained on the event loop

Example:
    ```pycon
    >>> from aretry import retry
    >>> retry(lambda: 1 + 1, timeout=1.0, interval=0.05)
    2

    ```
"""

from __future__ import annotations

__all__ = [
    "PendingError",
    "RetryPolicy",
    "RetryTimeoutError",
    "__version__",
    "retry",
    "retry_async",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.core.config import RetryPolicy
from aretry.exceptions import PendingError, RetryTimeoutError
from aretry.retry import retry
from aretry.retry_async import retry_async

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"

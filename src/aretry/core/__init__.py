r"""Core configuration and validation for retry policies.

This package contains the default patience settings, the immutable
``RetryPolicy`` and the validation helpers shared by the public
entry points and the executors.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_INITIAL_INTERVAL_FRACTION",
    "DEFAULT_INTERVAL",
    "DEFAULT_TIMEOUT",
    "RetryPolicy",
    "validate_duration",
    "validate_policy_params",
]

from aretry.core.config import (
    DEFAULT_INITIAL_INTERVAL_FRACTION,
    DEFAULT_INTERVAL,
    DEFAULT_TIMEOUT,
    RetryPolicy,
)
from aretry.core.validation import validate_duration, validate_policy_params

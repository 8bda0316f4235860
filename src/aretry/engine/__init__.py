r"""Retry engine implementing the blocking and the deferred execution
strategies.

Public API:
    - FailureClassifier: Decides whether a failure is retryable
    - FailureCategory: Category of a failed attempt
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Asynchronous retry executor
    - create_timeout_error: Builds the terminal timeout error
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "FailureCategory",
    "FailureClassifier",
    "FatalFailure",
    "PendingFailure",
    "RetryExecutor",
    "RetryableFailure",
    "Success",
    "create_timeout_error",
]

from aretry.engine.classifier import FailureClassifier
from aretry.engine.executor import RetryExecutor
from aretry.engine.executor_async import AsyncRetryExecutor
from aretry.engine.executor_core import create_timeout_error
from aretry.engine.outcome import (
    FailureCategory,
    FatalFailure,
    PendingFailure,
    RetryableFailure,
    Success,
)

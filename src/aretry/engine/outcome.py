r"""Explicit outcome values of a single attempt.

An attempt either succeeds with a value or fails with an exception that
has been classified as retryable, fatal, or pending. The executors
branch on these values instead of on caught exception types.
"""

from __future__ import annotations

__all__ = [
    "FailureCategory",
    "FatalFailure",
    "Outcome",
    "PendingFailure",
    "RetryableFailure",
    "Success",
]

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class FailureCategory(Enum):
    """Category of a failed attempt."""

    RETRYABLE = "retryable"
    FATAL = "fatal"
    PENDING = "pending"


@dataclass(frozen=True)
class Success(Generic[T]):
    """The attempt returned normally.

    Attributes:
        value: The value returned by the operation.
    """

    value: T

    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True)
class RetryableFailure:
    """The attempt failed and may be attempted again.

    Attributes:
        cause: The exception raised by the operation.
    """

    cause: BaseException
    category = FailureCategory.RETRYABLE

    @property
    def is_terminal(self) -> bool:
        return False


@dataclass(frozen=True)
class FatalFailure:
    """The attempt failed with a condition that must abort the process.

    Attributes:
        cause: The exception raised by the operation.
    """

    cause: BaseException
    category = FailureCategory.FATAL

    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True)
class PendingFailure:
    """The attempt signalled an intentionally incomplete operation.

    Attributes:
        cause: The exception raised by the operation.
    """

    cause: BaseException
    category = FailureCategory.PENDING

    @property
    def is_terminal(self) -> bool:
        return True


Outcome = Union[Success[T], RetryableFailure, FatalFailure, PendingFailure]

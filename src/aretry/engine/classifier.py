r"""Failure classification for retry decisions.

This module provides the FailureClassifier class that decides whether
an exception raised by one attempt is retryable, fatal, or pending.
"""

from __future__ import annotations

__all__ = ["DEFAULT_FATAL_TYPES", "DEFAULT_PENDING_TYPES", "FailureClassifier"]

import asyncio

from aretry.exceptions import PendingError
from aretry.engine.outcome import (
    FailureCategory,
    FatalFailure,
    PendingFailure,
    RetryableFailure,
)

# Conditions indicating the process itself should abort
DEFAULT_FATAL_TYPES: tuple[type[BaseException], ...] = (
    MemoryError,
    RecursionError,
    KeyboardInterrupt,
    SystemExit,
    GeneratorExit,
    asyncio.CancelledError,
)

DEFAULT_PENDING_TYPES: tuple[type[BaseException], ...] = (PendingError,)


class FailureClassifier:
    """Classifies the failure of one attempt.

    Pending types are checked first, then fatal types. Every other
    exception is retryable. Classification is a pure function of the
    exception type.

    Args:
        pending_types: Additional exception types signalling an
            intentionally incomplete operation, e.g. a test runner's
            skip exception.
        fatal_types: Additional exception types that must abort the
            retry immediately.

    Example:
        ```pycon
        >>> from aretry import PendingError
        >>> from aretry.engine import FailureClassifier
        >>> classifier = FailureClassifier()
        >>> classifier.category(ValueError("boom"))
        <FailureCategory.RETRYABLE: 'retryable'>
        >>> classifier.category(PendingError())
        <FailureCategory.PENDING: 'pending'>
        >>> classifier.category(MemoryError())
        <FailureCategory.FATAL: 'fatal'>

        ```
    """

    def __init__(
        self,
        pending_types: tuple[type[BaseException], ...] = (),
        fatal_types: tuple[type[BaseException], ...] = (),
    ) -> None:
        self.pending_types = DEFAULT_PENDING_TYPES + tuple(pending_types)
        self.fatal_types = DEFAULT_FATAL_TYPES + tuple(fatal_types)

    def __repr__(self) -> str:
        pending = ", ".join(t.__name__ for t in self.pending_types)
        fatal = ", ".join(t.__name__ for t in self.fatal_types)
        return f"{self.__class__.__qualname__}(pending=({pending}), fatal=({fatal}))"

    def category(self, exc: BaseException) -> FailureCategory:
        """Return the category of a failure.

        Args:
            exc: The exception raised by the attempt.

        Returns:
            The failure category.
        """
        if isinstance(exc, self.pending_types):
            return FailureCategory.PENDING
        if isinstance(exc, self.fatal_types):
            return FailureCategory.FATAL
        return FailureCategory.RETRYABLE

    def classify(self, exc: BaseException) -> RetryableFailure | FatalFailure | PendingFailure:
        """Wrap a failure into the outcome matching its category.

        Args:
            exc: The exception raised by the attempt.

        Returns:
            The failure outcome carrying ``exc`` as its cause.
        """
        category = self.category(exc)
        if category is FailureCategory.PENDING:
            return PendingFailure(exc)
        if category is FailureCategory.FATAL:
            return FatalFailure(exc)
        return RetryableFailure(exc)

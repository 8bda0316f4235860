from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from aretry.core.config import RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Generator


class FakeClock:
    """Deterministic replacement for ``time.monotonic`` and
    ``time.sleep``.

    Sleeping advances the clock by the requested amount and records it,
    so synchronous retry loops run instantly with exact timing.
    """

    def __init__(self, start: float = 0.0) -> None:
        self.current = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.current

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += seconds

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture
def fake_clock() -> Generator[FakeClock, None, None]:
    """Patch time.monotonic and time.sleep with a fake clock."""
    clock = FakeClock()
    with patch("time.monotonic", new=clock.monotonic), patch("time.sleep", new=clock.sleep):
        yield clock


@pytest.fixture
def policy() -> RetryPolicy:
    """Create the retry policy used by most tests."""
    return RetryPolicy(timeout=0.2, interval=0.05)


@pytest.fixture
def always_failing() -> Mock:
    """Create an operation that always fails with a retryable error."""
    return Mock(side_effect=ValueError("not ready"))



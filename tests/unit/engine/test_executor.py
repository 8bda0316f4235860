r"""Unit tests for synchronous retry executor."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from aretry.backoff import ConstantBackoff, TieredBackoff
from aretry.core.config import RetryPolicy
from aretry.engine import FailureClassifier, RetryExecutor
from aretry.exceptions import PendingError, RetryTimeoutError
from aretry.utils.structured_logging import get_retry_location

if TYPE_CHECKING:
    from tests.conftest import FakeClock


def failing_times(count: int, value: str = "ok") -> Mock:
    """Create an operation failing ``count`` times before returning
    ``value``."""
    return Mock(side_effect=[ValueError(f"failure {i}") for i in range(count)] + [value])


def test_retry_executor_creation(policy: RetryPolicy) -> None:
    """Test RetryExecutor initialization with defaults."""
    executor = RetryExecutor(policy)

    assert executor.policy is policy
    assert isinstance(executor.classifier, FailureClassifier)
    assert isinstance(executor.backoff, TieredBackoff)
    assert executor.location is None


def test_retry_executor_creation_with_components(policy: RetryPolicy) -> None:
    """Test RetryExecutor keeps the given components."""
    classifier = FailureClassifier()
    backoff = ConstantBackoff()

    executor = RetryExecutor(policy, classifier=classifier, backoff=backoff, location="here")

    assert executor.classifier is classifier
    assert executor.backoff is backoff
    assert executor.location == "here"


def test_retry_executor_immediate_success(policy: RetryPolicy, fake_clock: FakeClock) -> None:
    """Test an operation that never fails is invoked once without
    waiting."""
    operation = Mock(return_value=42)

    assert RetryExecutor(policy).execute(operation) == 42
    operation.assert_called_once_with()
    assert fake_clock.sleeps == []


@pytest.mark.parametrize("failures", [1, 2, 5])
def test_retry_executor_eventual_success(fake_clock: FakeClock, failures: int) -> None:
    """Test an operation failing k times succeeds after k + 1
    attempts."""
    policy = RetryPolicy(timeout=1.0, interval=0.1)
    operation = failing_times(failures)

    assert RetryExecutor(policy).execute(operation) == "ok"
    assert operation.call_count == failures + 1
    assert len(fake_clock.sleeps) == failures


def test_retry_executor_front_loaded_waits(fake_clock: FakeClock) -> None:
    """Test the first interval window is polled every tenth of the
    interval."""
    policy = RetryPolicy(timeout=1.0, interval=0.1)

    RetryExecutor(policy).execute(failing_times(3))

    assert fake_clock.sleeps == [policy.interval * 0.1] * 3


def test_retry_executor_settles_on_full_interval(fake_clock: FakeClock) -> None:
    """Test waits switch to the full interval once one interval has
    elapsed."""
    policy = RetryPolicy(timeout=10.0, interval=0.1)
    operation = Mock(side_effect=ValueError("slow"))

    def advance_then_fail() -> None:
        fake_clock.advance(0.06)
        operation()

    with pytest.raises(RetryTimeoutError):
        RetryExecutor(policy).execute(advance_then_fail)

    # elapsed is 0.06 after the first attempt, 0.13 after the second
    assert fake_clock.sleeps[0] == policy.interval * 0.1
    assert fake_clock.sleeps[1:] == [policy.interval] * (len(fake_clock.sleeps) - 1)


def test_retry_executor_concrete_scenario(
    policy: RetryPolicy, fake_clock: FakeClock, always_failing: Mock
) -> None:
    """Test timeout=0.2s, interval=0.05s with an always failing
    operation."""
    with pytest.raises(RetryTimeoutError) as exc_info:
        RetryExecutor(policy).execute(always_failing)

    assert fake_clock.sleeps[0] == pytest.approx(0.005)
    assert fake_clock.sleeps[-1] == pytest.approx(0.05)
    assert set(fake_clock.sleeps) <= {policy.interval * 0.1, policy.interval}
    assert exc_info.value.elapsed >= policy.timeout
    assert 13 <= exc_info.value.attempts <= 16
    assert exc_info.value.attempts == always_failing.call_count


def test_retry_executor_timeout_reports_last_cause(
    policy: RetryPolicy, fake_clock: FakeClock
) -> None:
    """Test the timeout error carries the failure of the last
    attempt."""
    failures: list[ValueError] = []

    def operation() -> None:
        failures.append(ValueError(f"failure {len(failures)}"))
        raise failures[-1]

    executor = RetryExecutor(policy, location="test_module.py:12")
    with pytest.raises(RetryTimeoutError) as exc_info:
        executor.execute(operation)

    error = exc_info.value
    assert error.attempts == len(failures)
    assert error.last_cause is failures[-1]
    assert error.__cause__ is failures[-1]
    assert error.policy is policy
    assert error.timeout == 0.2
    assert error.interval == 0.05
    assert error.location == "test_module.py:12"
    assert error.elapsed == pytest.approx(fake_clock.current)


def test_retry_executor_timeout_message(policy: RetryPolicy, fake_clock: FakeClock) -> None:
    """Test the timeout error message includes the last failure
    message."""
    with pytest.raises(
        RetryTimeoutError,
        match=r"Operation never succeeded\. Attempted \d+ times over 0\.2\d\d seconds\. "
        r"Last failure message: not ready\.",
    ):
        RetryExecutor(policy).execute(Mock(side_effect=ValueError("not ready")))


def test_retry_executor_timeout_message_without_cause_message(
    policy: RetryPolicy, fake_clock: FakeClock
) -> None:
    """Test the timeout message omits an empty failure message."""
    with pytest.raises(RetryTimeoutError) as exc_info:
        RetryExecutor(policy).execute(Mock(side_effect=ValueError()))

    assert "Last failure message" not in str(exc_info.value)
    assert exc_info.value.last_message is None
    assert isinstance(exc_info.value.last_cause, ValueError)


def test_retry_executor_zero_timeout(fake_clock: FakeClock, always_failing: Mock) -> None:
    """Test a zero timeout gives up after the first failure."""
    with pytest.raises(RetryTimeoutError) as exc_info:
        RetryExecutor(RetryPolicy(timeout=0.0, interval=0.05)).execute(always_failing)

    assert exc_info.value.attempts == 1
    always_failing.assert_called_once_with()
    assert fake_clock.sleeps == []


def test_retry_executor_pending_short_circuit(policy: RetryPolicy, fake_clock: FakeClock) -> None:
    """Test a pending failure propagates unmodified without retry."""
    pending = PendingError("later")
    operation = Mock(side_effect=pending)

    with pytest.raises(PendingError) as exc_info:
        RetryExecutor(policy).execute(operation)

    assert exc_info.value is pending
    assert exc_info.value.__cause__ is None
    operation.assert_called_once_with()
    assert fake_clock.sleeps == []


@pytest.mark.parametrize(
    "fatal",
    [
        MemoryError("oom"),
        RecursionError("deep"),
        KeyboardInterrupt(),
        SystemExit(3),
        asyncio.CancelledError(),
    ],
)
def test_retry_executor_fatal_short_circuit(
    policy: RetryPolicy, fake_clock: FakeClock, fatal: BaseException
) -> None:
    """Test a fatal failure on a later attempt stops retrying
    immediately."""
    operation = Mock(side_effect=[ValueError("a"), ValueError("b"), fatal, "never"])

    with pytest.raises(type(fatal)) as exc_info:
        RetryExecutor(policy).execute(operation)

    assert exc_info.value is fatal
    assert operation.call_count == 3
    assert len(fake_clock.sleeps) == 2


def test_retry_executor_custom_pending_type(policy: RetryPolicy, fake_clock: FakeClock) -> None:
    """Test extra pending types are propagated without retry."""

    class SkipError(Exception):
        pass

    operation = Mock(side_effect=SkipError("skip"))
    executor = RetryExecutor(policy, classifier=FailureClassifier(pending_types=(SkipError,)))

    with pytest.raises(SkipError):
        executor.execute(operation)
    operation.assert_called_once_with()


def test_retry_executor_custom_backoff(fake_clock: FakeClock) -> None:
    """Test the executor waits according to the given backoff."""
    policy = RetryPolicy(timeout=1.0, interval=0.1)

    RetryExecutor(policy, backoff=ConstantBackoff()).execute(failing_times(2))

    assert fake_clock.sleeps == [0.1, 0.1]


def test_retry_executor_sets_location_during_attempts(
    policy: RetryPolicy, fake_clock: FakeClock
) -> None:
    """Test the call-site location is visible to the operation."""
    seen = []

    def operation() -> str:
        seen.append(get_retry_location())
        if len(seen) < 2:
            msg = "not yet"
            raise ValueError(msg)
        return "ok"

    RetryExecutor(policy, location="test_module.py:7").execute(operation)

    assert seen == ["test_module.py:7", "test_module.py:7"]
    assert get_retry_location() is None


def test_retry_executor_is_iterative(fake_clock: FakeClock) -> None:
    """Test many attempts do not grow the call stack."""
    policy = RetryPolicy(timeout=100.0, interval=0.001)
    operation = failing_times(5000)

    assert RetryExecutor(policy).execute(operation) == "ok"
    assert operation.call_count == 5001

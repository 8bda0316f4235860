r"""Unit tests for the asynchronous retry entry point."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from aretry import PendingError, RetryTimeoutError, retry_async
from aretry.backoff import ConstantBackoff
from aretry.core.config import DEFAULT_TIMEOUT


@pytest.mark.asyncio
async def test_retry_async_success() -> None:
    operation = AsyncMock(return_value="ok")
    assert await retry_async(operation, timeout=1.0, interval=0.01) == "ok"
    operation.assert_awaited_once()


@pytest.mark.asyncio
async def test_retry_async_returns_future() -> None:
    result = retry_async(AsyncMock(return_value="ok"), timeout=1.0, interval=0.01)
    assert isinstance(result, asyncio.Future)
    assert not result.done()
    assert await result == "ok"


@pytest.mark.asyncio
async def test_retry_async_eventual_success() -> None:
    operation = AsyncMock(side_effect=[AssertionError("1 != 2"), "ok"])
    assert await retry_async(operation, timeout=1.0, interval=0.01) == "ok"
    assert operation.await_count == 2


@pytest.mark.asyncio
async def test_retry_async_default_policy() -> None:
    with pytest.raises(RetryTimeoutError) as exc_info:
        await retry_async(AsyncMock(side_effect=ValueError("not ready")))

    assert exc_info.value.timeout == DEFAULT_TIMEOUT
    assert exc_info.value.elapsed >= DEFAULT_TIMEOUT


@pytest.mark.asyncio
async def test_retry_async_location() -> None:
    location = ("test_module.py", 12)
    with pytest.raises(RetryTimeoutError) as exc_info:
        await retry_async(AsyncMock(side_effect=ValueError()), 0.05, 0.01, location)

    assert exc_info.value.location == location


@pytest.mark.asyncio
async def test_retry_async_pending() -> None:
    pending = PendingError()
    with pytest.raises(PendingError) as exc_info:
        await retry_async(AsyncMock(side_effect=pending), timeout=10.0, interval=1.0)
    assert exc_info.value is pending


@pytest.mark.asyncio
async def test_retry_async_custom_backoff() -> None:
    operation = AsyncMock(side_effect=[ValueError(), ValueError(), "ok"])
    result = await retry_async(
        operation, timeout=1.0, interval=0.5, backoff=ConstantBackoff(delay=0.001)
    )
    assert result == "ok"


@pytest.mark.asyncio
async def test_retry_async_invalid_policy() -> None:
    operation = AsyncMock(return_value="ok")
    with pytest.raises(ValueError, match=r"interval must be >= 0"):
        retry_async(operation, timeout=1.0, interval=-0.1)
    operation.assert_not_called()


def test_retry_async_without_loop() -> None:
    operation = AsyncMock(return_value="ok")
    with pytest.raises(RuntimeError):
        retry_async(operation, timeout=1.0, interval=0.1)
    operation.assert_not_called()

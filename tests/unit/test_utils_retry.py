"""Unit tests for the rate limit retry decorator."""

from typing import Callable
from unittest.mock import AsyncMock, patch

import pytest

from github_release_action.utils.retry import retry_on_rate_limit


class FakeAdapter:
    """Stand-in for an adapter exposing the configured retry count."""

    def __init__(self, rate_limit_retries: int, func: AsyncMock) -> None:
        """Store the retry count and the call to delegate to."""
        self.rate_limit_retries = rate_limit_retries
        self.func = func

    @retry_on_rate_limit(initial_delay=1.0)
    async def call(self) -> str:
        """Delegate to the wrapped mock."""
        return await self.func()


@pytest.mark.asyncio
async def test_no_retry_by_default(make_request_failed: Callable[..., Exception]) -> None:
    """Test that a rate limited call is not retried when no retries are configured."""
    func = AsyncMock(side_effect=make_request_failed(429, "Too Many Requests"))
    with patch("github_release_action.utils.retry.asyncio.sleep", new=AsyncMock()) as mock_sleep:
        with pytest.raises(Exception, match="Too Many Requests"):
            await FakeAdapter(0, func).call()
    assert func.await_count == 1
    mock_sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_retries_rate_limit_with_retry_after(make_request_failed: Callable[..., Exception]) -> None:
    """Test that rate limited calls are retried, honouring retry-after."""
    func = AsyncMock(side_effect=[make_request_failed(429, "Too Many Requests", {"retry-after": "3"}), "ok"])
    with patch("github_release_action.utils.retry.asyncio.sleep", new=AsyncMock()) as mock_sleep:
        assert await FakeAdapter(2, func).call() == "ok"
    assert func.await_count == 2
    mock_sleep.assert_awaited_once_with(3.0)


@pytest.mark.asyncio
async def test_retries_secondary_rate_limit_403(make_request_failed: Callable[..., Exception]) -> None:
    """Test that a 403 mentioning the rate limit is retried with the initial delay."""
    func = AsyncMock(side_effect=[make_request_failed(403, "API rate limit exceeded"), "ok"])
    with patch("github_release_action.utils.retry.asyncio.sleep", new=AsyncMock()) as mock_sleep:
        assert await FakeAdapter(1, func).call() == "ok"
    mock_sleep.assert_awaited_once_with(1.0)


@pytest.mark.asyncio
async def test_other_errors_are_not_retried(make_request_failed: Callable[..., Exception]) -> None:
    """Test that non rate limit failures propagate immediately."""
    func = AsyncMock(side_effect=make_request_failed(404, "Not Found"))
    with patch("github_release_action.utils.retry.asyncio.sleep", new=AsyncMock()) as mock_sleep:
        with pytest.raises(Exception, match="Not Found"):
            await FakeAdapter(3, func).call()
    assert func.await_count == 1
    mock_sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_gives_up_after_max_retries(make_request_failed: Callable[..., Exception]) -> None:
    """Test that the last rate limit error is raised once retries are exhausted."""
    func = AsyncMock(side_effect=make_request_failed(429, "Too Many Requests"))
    with patch("github_release_action.utils.retry.asyncio.sleep", new=AsyncMock()):
        with pytest.raises(Exception, match="Too Many Requests"):
            await FakeAdapter(2, func).call()
    assert func.await_count == 3


def test_sync_function_is_rejected() -> None:
    """Test that decorating a synchronous function raises TypeError."""
    with pytest.raises(TypeError, match="must be async"):

        @retry_on_rate_limit()
        def sync_call() -> None:
            pass

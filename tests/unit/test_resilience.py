"""
Unit tests for pacing and retry utilities.
"""

from unittest.mock import AsyncMock

import pytest

from llm_linter.exceptions import ModelCallError, ResponseError
from llm_linter.utils.resilience import Pacer, RetryPolicy, retry_async


class TestPacer:
    """Test suite for Pacer."""

    @pytest.mark.asyncio
    async def test_wait_sleeps_configured_delay(self):
        sleep = AsyncMock()

        await Pacer(3.0, sleep).wait()

        sleep.assert_awaited_once_with(3.0)

    @pytest.mark.asyncio
    async def test_zero_delay_does_not_sleep(self):
        sleep = AsyncMock()

        await Pacer(0, sleep).wait()

        sleep.assert_not_awaited()

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            Pacer(-1.0)


class TestRetryPolicy:
    """Test suite for backoff delays."""

    def test_exponential_delay_is_capped(self):
        policy = RetryPolicy(max_attempts=5, base_delay=1.0, max_delay=5.0)

        assert [policy.delay_for(n) for n in range(4)] == [1.0, 2.0, 4.0, 5.0]

    def test_default_is_single_attempt(self):
        assert RetryPolicy().max_attempts == 1


class TestRetryAsync:
    """Test suite for retry_async."""

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self):
        func = AsyncMock(return_value="ok")
        sleep = AsyncMock()

        result = await retry_async(func, RetryPolicy(max_attempts=3), sleep)

        assert result == "ok"
        assert func.await_count == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        func = AsyncMock(side_effect=[ModelCallError("a"), ModelCallError("b"), "ok"])
        sleep = AsyncMock()

        result = await retry_async(func, RetryPolicy(max_attempts=3, base_delay=0.5), sleep)

        assert result == "ok"
        assert [c.args[0] for c in sleep.await_args_list] == [0.5, 1.0]

    @pytest.mark.asyncio
    async def test_exhausted_attempts_reraise_last_error(self):
        func = AsyncMock(side_effect=[ModelCallError("first"), ModelCallError("last")])

        with pytest.raises(ModelCallError, match="last"):
            await retry_async(func, RetryPolicy(max_attempts=2), AsyncMock())

    @pytest.mark.asyncio
    async def test_unlisted_errors_propagate_immediately(self):
        func = AsyncMock(side_effect=ResponseError("bad json"))
        sleep = AsyncMock()
        policy = RetryPolicy(max_attempts=3, retry_on=(ModelCallError,))

        with pytest.raises(ResponseError):
            await retry_async(func, policy, sleep)

        assert func.await_count == 1
        sleep.assert_not_awaited()

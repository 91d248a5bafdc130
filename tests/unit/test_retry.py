"""
Unit tests for the retry utilities module.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from seas_toolkit.shared.exceptions import (
    ClientError,
    NetworkError,
    RetryableException,
    ServerError,
    ValidationError,
)
from seas_toolkit.shared.retry import (
    HTTP_RETRY_CONFIG,
    RPC_RETRY_CONFIG,
    RetryConfig,
    compute_delay,
    retry_async_operation,
    retry_sync_operation,
)


class TestComputeDelay:
    """Tests for the backoff delay helper."""

    def test_fixed_delay(self):
        assert [compute_delay(a, 2.0, 30.0, False) for a in range(3)] == [
            2.0,
            2.0,
            2.0,
        ]

    def test_exponential_delay_is_capped(self):
        delays = [compute_delay(a, 10.0, 15.0, True) for a in range(4)]
        assert delays == [10.0, 15.0, 15.0, 15.0]

    def test_jitter_stays_within_bounds(self):
        for attempt in range(5):
            delay = compute_delay(attempt, 1.0, 10.0, True, jitter=True)
            upper = min(2**attempt, 10.0)
            assert upper * 0.5 <= delay <= upper


class TestRetryAsyncOperation:
    """Tests for the retry_async_operation function."""

    @pytest.mark.asyncio
    async def test_succeeds_first_try(self):
        mock_fn = AsyncMock(return_value="success")

        result = await retry_async_operation(mock_fn, max_attempts=3)

        assert result == "success"
        assert mock_fn.call_count == 1

    @pytest.mark.asyncio
    async def test_succeeds_after_retry(self):
        mock_fn = AsyncMock(
            side_effect=[NetworkError("down"), ServerError("boom", 503), "ok"]
        )

        with patch("asyncio.sleep", new_callable=AsyncMock):
            result = await retry_async_operation(mock_fn, max_attempts=3)

        assert result == "ok"
        assert mock_fn.call_count == 3

    @pytest.mark.asyncio
    async def test_fails_after_max_attempts(self):
        mock_fn = AsyncMock(side_effect=NetworkError("always down"))

        with patch("asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(NetworkError, match="always down"):
                await retry_async_operation(mock_fn, max_attempts=3)

        assert mock_fn.call_count == 3

    @pytest.mark.asyncio
    async def test_non_retryable_propagates_immediately(self):
        mock_fn = AsyncMock(side_effect=ClientError("not found", 404))

        with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(ClientError):
                await retry_async_operation(mock_fn, max_attempts=5)

        assert mock_fn.call_count == 1
        mock_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_plain_exceptions_are_not_retried_by_default(self):
        mock_fn = AsyncMock(side_effect=ValueError("bad value"))

        with pytest.raises(ValueError):
            await retry_async_operation(mock_fn, max_attempts=3)

        assert mock_fn.call_count == 1

    @pytest.mark.asyncio
    async def test_exponential_backoff(self):
        """Delay doubles per attempt when exponential is set."""
        mock_fn = AsyncMock(
            side_effect=[ConnectionError(), ConnectionError(), "success"]
        )

        with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            result = await retry_async_operation(
                mock_fn, max_attempts=3, base_delay=1.0, exponential=True
            )

        assert result == "success"
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_fixed_delay(self):
        mock_fn = AsyncMock(
            side_effect=[TimeoutError(), TimeoutError(), "success"]
        )

        with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await retry_async_operation(
                mock_fn, max_attempts=3, base_delay=1.0, exponential=False
            )

        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 1.0]

    @pytest.mark.asyncio
    async def test_specific_exceptions(self):
        """Only the listed exception types are retried."""
        mock_fn = AsyncMock(side_effect=NetworkError("not listed"))

        with pytest.raises(NetworkError):
            await retry_async_operation(
                mock_fn, max_attempts=3, retryable_exceptions=(TypeError,)
            )

        assert mock_fn.call_count == 1

    @pytest.mark.asyncio
    async def test_on_retry_callback(self):
        mock_fn = AsyncMock(
            side_effect=[NetworkError("fail1"), NetworkError("fail2"), "ok"]
        )
        retry_calls = []

        def on_retry(exc, attempt):
            retry_calls.append((str(exc), attempt))

        with patch("asyncio.sleep", new_callable=AsyncMock):
            await retry_async_operation(
                mock_fn, max_attempts=3, on_retry=on_retry
            )

        assert retry_calls == [("fail1", 1), ("fail2", 2)]

    @pytest.mark.asyncio
    async def test_with_args(self):
        mock_fn = AsyncMock(return_value="result")

        result = await retry_async_operation(
            mock_fn, "arg1", "arg2", max_attempts=3, kwarg1="value1"
        )

        assert result == "result"
        mock_fn.assert_called_once_with("arg1", "arg2", kwarg1="value1")


class TestRetrySyncOperation:
    """Tests for the retry_sync_operation function."""

    def test_succeeds_after_retry(self):
        mock_fn = MagicMock(side_effect=[OSError("reset"), "success"])

        with patch("time.sleep") as mock_sleep:
            result = retry_sync_operation(mock_fn, max_attempts=3)

        assert result == "success"
        assert mock_fn.call_count == 2
        assert mock_sleep.call_count == 1

    def test_validation_error_is_not_retried(self):
        mock_fn = MagicMock(side_effect=ValidationError("wallet", "bad"))

        with pytest.raises(ValidationError):
            retry_sync_operation(mock_fn, max_attempts=3)

        assert mock_fn.call_count == 1

    def test_with_args(self):
        mock_fn = MagicMock(return_value="result")

        result = retry_sync_operation(
            mock_fn, "arg1", max_attempts=3, kwarg1="value1"
        )

        assert result == "result"
        mock_fn.assert_called_once_with("arg1", kwarg1="value1")


class TestRetryConfig:
    """Tests for RetryConfig class."""

    def test_default_config(self):
        config = RetryConfig()
        assert config.max_attempts == 3
        assert config.base_delay == 1.0
        assert config.max_delay == 30.0
        assert config.exponential is True
        assert config.jitter is False
        assert RetryableException in config.retryable_exceptions

    def test_run_sync(self):
        config = RetryConfig(max_attempts=2, base_delay=0.0)
        mock_fn = MagicMock(side_effect=[ConnectionError(), "success"])

        with patch("time.sleep"):
            assert config.run_sync(mock_fn, operation_name="read") == "success"
        assert mock_fn.call_count == 2

    def test_rpc_retry_config(self):
        assert RPC_RETRY_CONFIG.max_attempts == 3
        assert RPC_RETRY_CONFIG.max_delay == 10.0
        assert RPC_RETRY_CONFIG.exponential is True
        assert RPC_RETRY_CONFIG.jitter is True

    def test_http_retry_config_is_fixed_delay(self):
        assert HTTP_RETRY_CONFIG.max_attempts == 4
        assert HTTP_RETRY_CONFIG.base_delay == 1.0
        assert HTTP_RETRY_CONFIG.exponential is False

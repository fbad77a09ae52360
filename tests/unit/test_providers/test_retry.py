"""Tests for the retry helper and transport failure classification."""

import pytest

from ens_mcp.core.errors import (
    ContractRevertError,
    HttpStatusError,
    RpcResponseError,
    TransportError,
)
from ens_mcp.core.providers.resilience import (
    ErrorClassification,
    ErrorType,
    TransportPolicy,
    async_retry_with_backoff,
    classify_transport_error,
    is_retryable_status,
)


class TestTransportPolicy:
    """Tests for TransportPolicy defaults."""

    def test_default_values(self):
        policy = TransportPolicy()
        assert policy.timeout == 10.0
        assert policy.retry_count == 3
        assert policy.retry_delay == 1.0
        assert policy.headers == {"Content-Type": "application/json"}

    def test_instances_do_not_share_headers(self):
        assert TransportPolicy().headers is not TransportPolicy().headers


class TestClassifyTransportError:
    """Tests for classify_transport_error()."""

    @pytest.mark.parametrize("status", [408, 413, 429, 500, 502, 503])
    def test_retryable_statuses(self, status):
        assert is_retryable_status(status)
        classification = classify_transport_error(HttpStatusError(status, "boom", retryable=True))
        assert classification.retryable is True

    @pytest.mark.parametrize("status", [400, 401, 403, 404])
    def test_client_errors_not_retried_but_fall_back(self, status):
        classification = classify_transport_error(HttpStatusError(status, "nope"))
        assert classification.retryable is False
        assert classification.falls_back is True

    def test_rate_limit_carries_retry_after(self):
        error = HttpStatusError(429, "slow down", retryable=True, retry_after=7.0)
        classification = classify_transport_error(error)
        assert classification.error_type == ErrorType.RATE_LIMIT
        assert classification.backoff_seconds == 7.0

    @pytest.mark.parametrize("code,retryable", [(-32603, True), (-32005, True), (-32602, False)])
    def test_rpc_codes(self, code, retryable):
        classification = classify_transport_error(RpcResponseError(code, "rpc"))
        assert classification.retryable is retryable
        assert classification.error_type == ErrorType.RPC_ERROR

    def test_revert_never_retries_or_falls_back(self):
        classification = classify_transport_error(ContractRevertError("execution reverted"))
        assert classification.retryable is False
        assert classification.falls_back is False
        assert classification.error_type == ErrorType.REVERTED

    def test_timeout_detected_from_original_error(self):
        class ReadTimeout(Exception):
            pass

        error = TransportError("HTTP request failed: timeout", original_error=ReadTimeout())
        assert classify_transport_error(error).error_type == ErrorType.TIMEOUT

    def test_unknown_errors_not_retried(self):
        assert classify_transport_error(RuntimeError("bug")).retryable is False


class TestAsyncRetryWithBackoff:
    """Tests for async_retry_with_backoff()."""

    @pytest.mark.asyncio
    async def test_success_first_try_does_not_sleep(self, fake_sleep):
        async def ok():
            return "done"

        result = await async_retry_with_backoff(
            ok, classify=classify_transport_error, sleep_func=fake_sleep
        )
        assert result == "done"
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_exponential_delays_until_budget_spent(self, fake_sleep):
        """3 retries means 4 attempts with delays 1, 2, 4."""
        calls = []

        async def always_fail():
            calls.append(1)
            raise TransportError("HTTP request failed: connection reset")

        with pytest.raises(TransportError):
            await async_retry_with_backoff(
                always_fail,
                classify=classify_transport_error,
                max_retries=3,
                base_delay=1.0,
                sleep_func=fake_sleep,
            )
        assert len(calls) == 4
        assert fake_sleep.delays == [1.0, 2.0, 4.0]

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failure(self, fake_sleep):
        calls = []

        async def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise HttpStatusError(503, "unavailable", retryable=True)
            return "0x1"

        result = await async_retry_with_backoff(
            flaky, classify=classify_transport_error, base_delay=0.5, sleep_func=fake_sleep
        )
        assert result == "0x1"
        assert fake_sleep.delays == [0.5, 1.0]

    @pytest.mark.asyncio
    async def test_non_retryable_raises_immediately(self, fake_sleep):
        calls = []

        async def revert():
            calls.append(1)
            raise ContractRevertError("execution reverted")

        with pytest.raises(ContractRevertError):
            await async_retry_with_backoff(
                revert, classify=classify_transport_error, sleep_func=fake_sleep
            )
        assert len(calls) == 1
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_backoff_seconds_raises_delay(self, fake_sleep):
        calls = []

        async def rate_limited():
            calls.append(1)
            if len(calls) == 1:
                raise HttpStatusError(429, "slow", retryable=True, retry_after=5.0)
            return "ok"

        await async_retry_with_backoff(
            rate_limited, classify=classify_transport_error, base_delay=1.0, sleep_func=fake_sleep
        )
        assert fake_sleep.delays == [5.0]

    @pytest.mark.asyncio
    async def test_delay_capped_by_max_delay(self, fake_sleep):
        async def always_fail():
            raise TransportError("HTTP request failed")

        with pytest.raises(TransportError):
            await async_retry_with_backoff(
                always_fail,
                classify=lambda e: ErrorClassification(retryable=True),
                max_retries=3,
                base_delay=10.0,
                max_delay=15.0,
                sleep_func=fake_sleep,
            )
        assert fake_sleep.delays == [10.0, 15.0, 15.0]

    @pytest.mark.asyncio
    async def test_backoff_seconds_capped_by_max_delay(self, fake_sleep):
        async def rate_limited():
            raise HttpStatusError(429, "slow", retryable=True, retry_after=86_400.0)

        with pytest.raises(HttpStatusError):
            await async_retry_with_backoff(
                rate_limited,
                classify=classify_transport_error,
                max_retries=3,
                base_delay=1.0,
                max_delay=30.0,
                sleep_func=fake_sleep,
            )
        assert fake_sleep.delays == [30.0, 30.0, 30.0]

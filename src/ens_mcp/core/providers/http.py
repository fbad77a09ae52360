"""Single-endpoint JSON-RPC transport.

``HttpTransport`` sends JSON-RPC requests to one URL with its own
``TransportPolicy`` (timeout, retry budget, headers). It retries transient
failures at that endpoint and then gives up; moving on to another endpoint
is the fallback transport's job.

Example usage:
    transport = HttpTransport("https://eth.drpc.org")
    block = await transport.request("eth_blockNumber", [])
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Optional, Sequence

import httpx

from ens_mcp.core.errors.transport import (
    ContractRevertError,
    HttpStatusError,
    RpcResponseError,
    TransportError,
)
from ens_mcp.core.providers.resilience import (
    RETRYABLE_RPC_CODES,
    SleepFunc,
    TransportPolicy,
    async_retry_with_backoff,
    classify_transport_error,
    is_retryable_status,
)
from ens_mcp.core.providers.shared import (
    extract_error_message,
    parse_retry_after,
    redact_url,
)

logger = logging.getLogger(__name__)

# EIP-1474 code some clients use for reverts; others send -32000 with a
# message, hence the message check in _is_revert.
_REVERT_CODE = 3


def _is_revert(code: Any, message: str) -> bool:
    return code == _REVERT_CODE or "execution reverted" in message.lower()


class HttpTransport:
    """JSON-RPC over HTTP against a single endpoint.

    Attributes:
        url: Endpoint URL
        policy: Timeout/retry/header configuration for this endpoint
    """

    def __init__(
        self,
        url: str,
        policy: Optional[TransportPolicy] = None,
        *,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep_func: Optional[SleepFunc] = None,
    ):
        """Initialize the transport.

        Args:
            url: Endpoint URL.
            policy: Per-endpoint policy (defaults to 10s timeout, 3 retries,
                1s base delay, JSON content type).
            http_transport: Optional httpx transport (tests pass
                ``httpx.MockTransport``).
            sleep_func: Optional sleep used between retries.
        """
        self.url = url
        self.policy = policy or TransportPolicy()
        self._http_transport = http_transport
        self._sleep_func = sleep_func
        self._request_ids = itertools.count(1)

    def __repr__(self) -> str:
        return f"HttpTransport(url={redact_url(self.url)!r})"

    async def request(self, method: str, params: Sequence[Any]) -> Any:
        """Send a JSON-RPC request, retrying transient failures.

        Raises:
            ContractRevertError: The call reverted (never retried).
            TransportError: The endpoint failed after its retry budget.
        """
        return await async_retry_with_backoff(
            lambda: self._send(method, params),
            classify=classify_transport_error,
            max_retries=self.policy.retry_count,
            base_delay=self.policy.retry_delay,
            max_delay=self.policy.max_delay,
            sleep_func=self._sleep_func,
            label=f"{method} via {redact_url(self.url)}",
        )

    async def _send(self, method: str, params: Sequence[Any]) -> Any:
        safe_url = redact_url(self.url)
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": method,
            "params": list(params),
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.policy.timeout,
                headers=self.policy.headers,
                transport=self._http_transport,
            ) as client:
                response = await client.post(self.url, json=payload)
        except httpx.TimeoutException as e:
            raise TransportError(
                f"HTTP request failed: timeout after {self.policy.timeout}s ({safe_url})",
                url=self.url,
                retryable=True,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"HTTP request failed: {type(e).__name__}: {e} ({safe_url})",
                url=self.url,
                retryable=True,
                original_error=e,
            ) from e

        if not response.is_success:
            status = response.status_code
            raise HttpStatusError(
                status,
                f"{extract_error_message(response)} ({safe_url})",
                url=self.url,
                retryable=is_retryable_status(status),
                retry_after=parse_retry_after(response) if status == 429 else None,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                f"HTTP request failed: invalid JSON in response ({safe_url})",
                url=self.url,
                retryable=False,
                original_error=e,
            ) from e

        if not isinstance(body, dict):
            raise TransportError(
                f"HTTP request failed: unexpected JSON-RPC payload ({safe_url})",
                url=self.url,
                retryable=False,
            )

        error = body.get("error")
        if error:
            code = error.get("code") if isinstance(error, dict) else None
            message = str(error.get("message", error)) if isinstance(error, dict) else str(error)
            data = error.get("data") if isinstance(error, dict) else None
            if _is_revert(code, message):
                raise ContractRevertError(message, url=self.url, data=data)
            raise RpcResponseError(
                code,
                message,
                url=self.url,
                retryable=code in RETRYABLE_RPC_CODES,
                data=data,
            )

        if "result" not in body:
            raise TransportError(
                f"HTTP request failed: JSON-RPC response has no result ({safe_url})",
                url=self.url,
                retryable=False,
            )
        return body["result"]

"""Transport error classes.

Raised by the endpoint transport and the fallback transport. All of them are
tagged as network errors except ``ContractRevertError``, which is a
deterministic answer from the chain and never triggers a retry or fallback.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ens_mcp.core.errors.base import EnsMcpError, ErrorKind


class TransportError(EnsMcpError):
    """A request to a single endpoint failed.

    Attributes:
        url: Endpoint URL that failed
        retryable: Whether another attempt at the same endpoint may succeed
    """

    kind = ErrorKind.NETWORK

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        retryable: bool = True,
        original_error: Optional[BaseException] = None,
    ):
        self.url = url
        self.retryable = retryable
        super().__init__(message, original_error=original_error)


class HttpStatusError(TransportError):
    """Endpoint answered with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        url: Optional[str] = None,
        retryable: bool = False,
        retry_after: Optional[float] = None,
    ):
        self.status_code = status_code
        self.retry_after = retry_after
        super().__init__(
            f"HTTP request failed with status {status_code}: {message}",
            url=url,
            retryable=retryable,
        )


class RpcResponseError(TransportError):
    """Endpoint returned a JSON-RPC error object."""

    def __init__(
        self,
        code: Optional[int],
        message: str,
        *,
        url: Optional[str] = None,
        retryable: bool = False,
        data: object = None,
    ):
        self.code = code
        self.data = data
        super().__init__(
            f"RPC error {code}: {message}",
            url=url,
            retryable=retryable,
        )


class ContractRevertError(EnsMcpError):
    """An ``eth_call`` reverted.

    A revert is the same on every endpoint, so it is surfaced as-is.
    """

    kind = ErrorKind.ENS_PROTOCOL

    def __init__(self, message: str, *, url: Optional[str] = None, data: object = None):
        self.url = url
        self.data = data
        super().__init__(f"ENS contract call reverted: {message}")


class AllProvidersFailedError(EnsMcpError):
    """Every endpoint in the fallback transport exhausted its retry budget.

    Attributes:
        errors: The final error observed at each endpoint, in attempt order
    """

    kind = ErrorKind.NETWORK

    def __init__(self, errors: Sequence[BaseException]):
        self.errors = list(errors)
        last = self.errors[-1] if self.errors else None
        detail = f" (last error: {last})" if last is not None else ""
        super().__init__(
            f"HTTP request failed: all {len(self.errors)} providers failed{detail}",
            original_error=last,
        )


class ProviderExhaustedError(EnsMcpError):
    """No provider is left to rotate the records client onto."""

    kind = ErrorKind.NETWORK

    def __init__(
        self,
        message: str = "All providers failed",
        *,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message, original_error=original_error)

"""Transport failure classification for retry and fallback decisions."""

from ens_mcp.core.errors.transport import (
    ContractRevertError,
    HttpStatusError,
    RpcResponseError,
    TransportError,
)
from ens_mcp.core.providers.resilience.models import ErrorClassification, ErrorType

RETRYABLE_STATUS_CODES = frozenset({408, 413, 429})

# Unknown (-1), limit exceeded (-32005) and internal (-32603) are transient on
# public endpoints; everything else is answered the same way on a retry.
RETRYABLE_RPC_CODES = frozenset({-1, -32005, -32603})


def is_retryable_status(status_code: int) -> bool:
    return status_code in RETRYABLE_STATUS_CODES or status_code >= 500


def classify_transport_error(error: Exception) -> ErrorClassification:
    """Classify a transport failure.

    Classification rules (applied in order):
        1. ``ContractRevertError`` -> no retry, no fallback
        2. ``HttpStatusError`` 429 -> retryable, backoff from Retry-After
        3. ``HttpStatusError`` 5xx/408/413 -> retryable
        4. ``HttpStatusError`` other -> not retryable, falls back
        5. ``RpcResponseError`` -> retryable only for transient codes
        6. ``TransportError`` -> uses its ``retryable`` flag
        7. Default -> not retryable, falls back
    """
    if isinstance(error, ContractRevertError):
        return ErrorClassification(
            retryable=False, falls_back=False, error_type=ErrorType.REVERTED
        )

    if isinstance(error, HttpStatusError):
        if error.status_code == 429:
            return ErrorClassification(
                retryable=True,
                backoff_seconds=error.retry_after,
                error_type=ErrorType.RATE_LIMIT,
            )
        if is_retryable_status(error.status_code):
            return ErrorClassification(retryable=True, error_type=ErrorType.SERVER_ERROR)
        return ErrorClassification(retryable=False, error_type=ErrorType.INVALID_RESPONSE)

    if isinstance(error, RpcResponseError):
        return ErrorClassification(
            retryable=error.code in RETRYABLE_RPC_CODES,
            error_type=ErrorType.RPC_ERROR,
        )

    if isinstance(error, TransportError):
        error_type_name = type(error.original_error).__name__.lower()
        if "timeout" in error_type_name:
            error_type = ErrorType.TIMEOUT
        elif error.retryable:
            error_type = ErrorType.NETWORK
        else:
            error_type = ErrorType.INVALID_RESPONSE
        return ErrorClassification(retryable=error.retryable, error_type=error_type)

    return ErrorClassification(retryable=False, error_type=ErrorType.UNKNOWN)

"""Endpoint resilience: transport policy, retry, and failure classification."""

from ens_mcp.core.providers.resilience.classify import (
    RETRYABLE_RPC_CODES,
    RETRYABLE_STATUS_CODES,
    classify_transport_error,
    is_retryable_status,
)
from ens_mcp.core.providers.resilience.models import (
    ErrorClassification,
    ErrorType,
    SleepFunc,
    TransportPolicy,
)
from ens_mcp.core.providers.resilience.retry import async_retry_with_backoff

__all__ = [
    # Models & enums
    "ErrorType",
    "ErrorClassification",
    "TransportPolicy",
    "SleepFunc",
    # Classification
    "RETRYABLE_RPC_CODES",
    "RETRYABLE_STATUS_CODES",
    "classify_transport_error",
    "is_retryable_status",
    # Retry
    "async_retry_with_backoff",
]

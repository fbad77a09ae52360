"""Resilience data models, enums, and protocols.

Defines the core types used across the resilience sub-package:
- ErrorType enum for transport failure classification
- TransportPolicy for per-endpoint tuning
- ErrorClassification for retry/fallback decisions
- SleepFunc protocol for injectable async sleep
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol


class ErrorType(str, Enum):
    """Classification of transport failures for resilience decisions."""

    RATE_LIMIT = "rate_limit"
    SERVER_ERROR = "server_error"
    TIMEOUT = "timeout"
    NETWORK = "network"
    RPC_ERROR = "rpc_error"
    REVERTED = "reverted"
    INVALID_RESPONSE = "invalid_response"
    UNKNOWN = "unknown"


def _default_headers() -> dict[str, str]:
    return {"Content-Type": "application/json"}


@dataclass(frozen=True)
class TransportPolicy:
    """Per-endpoint transport configuration.

    ``retry_count`` counts retries, so an endpoint is attempted at most
    ``retry_count + 1`` times before the fallback transport moves on.
    """

    timeout: float = 10.0
    retry_count: int = 3
    retry_delay: float = 1.0  # Base delay, doubled on every retry
    max_delay: float = 30.0
    headers: dict[str, str] = field(default_factory=_default_headers)


@dataclass
class ErrorClassification:
    """Classification result for a transport failure.

    ``retryable`` governs retries at the same endpoint; ``falls_back``
    governs whether the fallback transport may try the next endpoint.
    """

    retryable: bool
    falls_back: bool = True
    backoff_seconds: Optional[float] = None
    error_type: ErrorType = ErrorType.UNKNOWN


class SleepFunc(Protocol):
    """Protocol for injectable sleep function."""

    async def __call__(self, seconds: float) -> None: ...

"""Base error type and kind tags for ens-mcp.

Every error raised at the transport, client, or subgraph boundary carries an
explicit ``kind`` so the classifier never has to guess from message text.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """User-facing error categories."""

    NETWORK = "network"  # transient upstream/transport failure
    ENS_PROTOCOL = "ens_protocol"  # upstream reported a domain fault
    INVALID_INPUT = "invalid_input"  # malformed caller input
    UNKNOWN = "unknown"


class EnsMcpError(Exception):
    """Base exception for all ens-mcp errors.

    Attributes:
        message: Human-readable error description
        kind: Classification tag used by the error classifier
        original_error: The underlying exception if available
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        kind: Optional[ErrorKind] = None,
        original_error: Optional[BaseException] = None,
    ):
        self.message = message
        if kind is not None:
            self.kind = kind
        self.original_error = original_error
        super().__init__(message)

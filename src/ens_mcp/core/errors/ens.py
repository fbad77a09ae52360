"""ENS domain error classes."""

from __future__ import annotations

from typing import Optional

from ens_mcp.core.errors.base import EnsMcpError, ErrorKind


class InvalidNameError(EnsMcpError):
    """The caller supplied a name that cannot be normalized."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, name: str, reason: str):
        self.name = name
        super().__init__(f"invalid ENS name '{name}': {reason}")


class UnsupportedNameError(EnsMcpError):
    """The operation only applies to second-level .eth names."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, name: str, operation: str):
        self.name = name
        self.operation = operation
        super().__init__(
            f"invalid name type for {operation}: '{name}' is not a second-level .eth name"
        )


class SubgraphError(EnsMcpError):
    """The ENS subgraph returned GraphQL errors or an unexpected payload."""

    kind = ErrorKind.ENS_PROTOCOL

    def __init__(self, message: str, *, original_error: Optional[BaseException] = None):
        super().__init__(f"ENS subgraph error: {message}", original_error=original_error)

"""Map raised failures onto user-facing error messages.

Errors raised inside ens-mcp carry an explicit ``ErrorKind`` and are mapped
directly. Anything else (httpx internals, eth-abi decode failures, bugs) goes
through a substring cascade on its message, first match wins:

1. "fetch failed" / "timeout" / "network" / "HTTP request failed" -> network
2. "ENS" -> ENS protocol
3. "invalid" / "parameter" -> invalid input
4. anything else -> unknown

Matching is case-sensitive.
"""

from __future__ import annotations

import logging

from ens_mcp.core.errors.base import EnsMcpError, ErrorKind

logger = logging.getLogger(__name__)

_NETWORK_MARKERS = ("fetch failed", "timeout", "network", "HTTP request failed")
_ENS_MARKERS = ("ENS",)
_INVALID_MARKERS = ("invalid", "parameter")

_TEMPLATES: dict[ErrorKind, str] = {
    ErrorKind.NETWORK: (
        "Network error while accessing Ethereum providers. Please check your "
        "internet connection or try again later. Technical details: {message}"
    ),
    ErrorKind.ENS_PROTOCOL: "ENS error: {message}",
    ErrorKind.INVALID_INPUT: "Invalid input: {message}",
    ErrorKind.UNKNOWN: "Error during {operation}: {message}",
}


def _error_message(error: BaseException) -> str:
    return str(error)


def infer_error_kind(error: BaseException) -> ErrorKind:
    """Return the kind of *error*, preferring its explicit tag."""
    if isinstance(error, EnsMcpError):
        return error.kind

    message = _error_message(error)
    if any(marker in message for marker in _NETWORK_MARKERS):
        return ErrorKind.NETWORK
    if any(marker in message for marker in _ENS_MARKERS):
        return ErrorKind.ENS_PROTOCOL
    if any(marker in message for marker in _INVALID_MARKERS):
        return ErrorKind.INVALID_INPUT
    return ErrorKind.UNKNOWN


def format_error_message(kind: ErrorKind, message: str, operation: str) -> str:
    """Render the message template for *kind*."""
    return _TEMPLATES[kind].format(message=message, operation=operation)


def classify_error(error: BaseException, operation: str) -> str:
    """Classify *error* raised during *operation* and return the user message.

    Args:
        error: The failure caught at a handler boundary
        operation: Human label of the operation (e.g. "name resolution")

    Returns:
        The templated message for the error's category
    """
    logger.error("Error during ENS %s: %s", operation, error, exc_info=error)

    kind = infer_error_kind(error)
    message = _error_message(error) or type(error).__name__
    return format_error_message(kind, message, operation)

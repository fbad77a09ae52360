"""Shared helpers for HTTP-backed upstreams (JSON-RPC endpoints, subgraph).

SECURITY: provider URLs frequently embed API keys (``/v3/<key>``,
``?apikey=...``). Everything that ends up in a log line or an error message
goes through :func:`redact_url` first.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional
from urllib.parse import urlsplit, urlunsplit

if TYPE_CHECKING:
    import httpx

# Path segments that look like API keys: long runs of key-ish characters
_KEYLIKE_SEGMENT = re.compile(r"^[A-Za-z0-9_\-]{20,}$")


def redact_url(url: str) -> str:
    """Mask API-key-like path segments and drop the query string.

    Args:
        url: Endpoint URL as configured.

    Returns:
        URL safe for logs, e.g. ``https://mainnet.infura.io/v3/****``.
    """
    if not url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return "****"
    segments = [
        "****" if _KEYLIKE_SEGMENT.match(segment) else segment
        for segment in parts.path.split("/")
    ]
    query = "****" if parts.query else ""
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, "/".join(segments), query, ""))


def parse_retry_after(response: "httpx.Response") -> Optional[float]:
    """Parse the ``Retry-After`` header from an HTTP response.

    Handles numeric (integer or float) values only.  RFC 7231 date-based
    values are not supported and will return ``None``.
    """
    retry_after = response.headers.get("Retry-After")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            pass
    return None


def extract_error_message(response: "httpx.Response") -> str:
    """Extract a short error message from an HTTP error response.

    Tries the JSON-RPC ``{"error": {"message": ...}}`` shape first, then
    ``{"message": ...}``, then the first 200 characters of the body.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        error_field = data.get("error")
        if isinstance(error_field, dict) and error_field.get("message"):
            return str(error_field["message"])
        if isinstance(error_field, str):
            return error_field
        if data.get("message"):
            return str(data["message"])

    text = response.text[:200] if response.text else ""
    return text or response.reason_phrase or "Unknown error"

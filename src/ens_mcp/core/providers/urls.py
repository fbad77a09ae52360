"""Provider URL list resolution.

Turns the configured override (``PROVIDER_URL``) into the ordered list of
JSON-RPC endpoints that the fallback transport walks through.
"""

from __future__ import annotations

from typing import Optional

DEFAULT_PROVIDERS: tuple[str, ...] = (
    "https://eth.drpc.org",
    "https://eth.llamarpc.com",
    "https://ethereum.publicnode.com",
    "https://rpc.ankr.com/eth",
)


def _dedupe(urls: list[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for url in urls:
        if url and url not in seen:
            seen.add(url)
            result.append(url)
    return result


def get_provider_urls(override: Optional[str] = None) -> list[str]:
    """Resolve the ordered provider list.

    Precedence:
        - comma-separated override: split and trimmed, replaces the defaults
          entirely (order preserved, blanks and repeats dropped)
        - single override: placed first, defaults fill the remaining slots
        - no override: the built-in defaults

    Args:
        override: Raw override value, usually from ``PROVIDER_URL``

    Returns:
        Non-empty list of endpoint URLs, preferred endpoint first
    """
    value = (override or "").strip()

    if "," in value:
        urls = _dedupe([part.strip() for part in value.split(",")])
        if urls:
            return urls
        return list(DEFAULT_PROVIDERS)

    if value:
        return [value] + [url for url in DEFAULT_PROVIDERS if url != value]

    return list(DEFAULT_PROVIDERS)

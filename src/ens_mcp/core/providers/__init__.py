"""Upstream provider access: URL list, endpoint transport, fallback transport."""

from ens_mcp.core.providers.fallback import FallbackTransport, build_fallback_transport
from ens_mcp.core.providers.http import HttpTransport
from ens_mcp.core.providers.resilience import TransportPolicy
from ens_mcp.core.providers.urls import DEFAULT_PROVIDERS, get_provider_urls

__all__ = [
    "DEFAULT_PROVIDERS",
    "get_provider_urls",
    "TransportPolicy",
    "HttpTransport",
    "FallbackTransport",
    "build_fallback_transport",
]

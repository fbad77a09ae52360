"""Ordered-fallback composition of endpoint transports.

``FallbackTransport`` tries its endpoints strictly in order. Each endpoint
spends its own retry budget before the next one is attempted
(retry-then-fallback). Attempts are never issued in parallel, so worst-case
latency is bounded by the sum of the per-endpoint budgets.

The transport is stateless across calls: every request starts at the
preferred endpoint again.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional, Sequence

import httpx

from ens_mcp.core.errors.transport import (
    AllProvidersFailedError,
    ContractRevertError,
    TransportError,
)
from ens_mcp.core.providers.http import HttpTransport
from ens_mcp.core.providers.resilience import (
    SleepFunc,
    TransportPolicy,
    classify_transport_error,
)
from ens_mcp.core.providers.shared import redact_url

logger = logging.getLogger(__name__)


class FallbackTransport:
    """Try each endpoint transport in order until one yields a result."""

    def __init__(self, transports: Sequence[HttpTransport]):
        if not transports:
            raise ValueError("FallbackTransport requires at least one transport")
        self._transports: tuple[HttpTransport, ...] = tuple(transports)

    @property
    def transports(self) -> tuple[HttpTransport, ...]:
        return self._transports

    @property
    def urls(self) -> list[str]:
        return [transport.url for transport in self._transports]

    async def request(self, method: str, params: Sequence[Any]) -> Any:
        """Send a JSON-RPC request through the first endpoint that answers.

        ``ContractRevertError`` propagates immediately: a revert is the same
        on every endpoint.

        Raises:
            AllProvidersFailedError: Every endpoint exhausted its retries.
        """
        errors: list[Exception] = []
        total = len(self._transports)

        for index, transport in enumerate(self._transports):
            try:
                result = await transport.request(method, params)
            except (TransportError, ContractRevertError) as e:
                if not classify_transport_error(e).falls_back:
                    raise
                errors.append(e)
                if index + 1 < total:
                    logger.warning(
                        "Provider %d/%d (%s) failed for %s, falling back: %s",
                        index + 1,
                        total,
                        redact_url(transport.url),
                        method,
                        e,
                    )
                continue

            if index > 0:
                logger.info(
                    "%s served by fallback provider %d/%d (%s)",
                    method,
                    index + 1,
                    total,
                    redact_url(transport.url),
                )
            return result

        logger.error("All %d providers failed for %s", total, method)
        raise AllProvidersFailedError(errors)


def build_fallback_transport(
    urls: Sequence[str],
    policy: Optional[TransportPolicy] = None,
    *,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep_func: Optional[SleepFunc] = None,
) -> FallbackTransport:
    """Wrap every URL in its own ``HttpTransport`` and compose them.

    Each endpoint gets its own copy of the policy.
    """
    policy = policy or TransportPolicy()
    return FallbackTransport(
        [
            HttpTransport(
                url,
                replace(policy),
                http_transport=http_transport,
                sleep_func=sleep_func,
            )
            for url in urls
        ]
    )

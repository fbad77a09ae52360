"""Client construction: records-client rotation and the shared client context.

Two retry layers exist and no more:

* every ``HttpTransport`` retries its own endpoint (see ``providers.http``);
* ``RotatableClientHandle.run`` moves the records client to the next provider
  when a call fails with a network-kind error.

The low-level ``EnsPublicClient`` sits on the full ``FallbackTransport`` and
never rotates.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, Sequence, TypeVar

import httpx

from ens_mcp.core.clients.public import EnsPublicClient
from ens_mcp.core.clients.records import EnsRecordsClient
from ens_mcp.core.clients.subgraph import SubgraphClient, resolve_subgraph_url
from ens_mcp.core.errors import ErrorKind, ProviderExhaustedError, infer_error_kind
from ens_mcp.core.providers import (
    HttpTransport,
    TransportPolicy,
    build_fallback_transport,
    get_provider_urls,
)
from ens_mcp.core.providers.resilience import SleepFunc
from ens_mcp.core.providers.shared import redact_url

if TYPE_CHECKING:
    from ens_mcp.config import ServerConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

RecordsClientFactory = Callable[[str], EnsRecordsClient]


class RotatableClientHandle:
    """Holds the current records client and the provider index it is bound to.

    Only ``rotate`` mutates the handle. Rotation is serialized by a lock and
    guarded by compare-and-swap on the index: callers pass the index they
    observed failing, and a caller that lost the race gets the already
    rotated client back instead of advancing a second time.
    """

    def __init__(self, provider_urls: Sequence[str], factory: RecordsClientFactory):
        if not provider_urls:
            raise ValueError("RotatableClientHandle requires at least one provider URL")
        self._urls: tuple[str, ...] = tuple(provider_urls)
        self._factory = factory
        self._index = 0
        self._client = factory(self._urls[0])
        self._lock = asyncio.Lock()

    @property
    def client(self) -> EnsRecordsClient:
        return self._client

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def provider_urls(self) -> tuple[str, ...]:
        return self._urls

    async def rotate(self, current_index: int) -> EnsRecordsClient:
        """Move to the provider after *current_index*.

        Raises:
            ProviderExhaustedError: *current_index* is the last provider.
        """
        _, client = await self._advance(current_index)
        return client

    async def run(self, fn: Callable[[EnsRecordsClient], Awaitable[T]]) -> T:
        """Call ``fn(client)``, rotating to the next provider on network errors.

        Non-network errors propagate unchanged.

        Raises:
            ProviderExhaustedError: The last provider failed too; chained to
                that failure.
        """
        index, client = self._index, self._client
        while True:
            try:
                return await fn(client)
            except Exception as e:
                if infer_error_kind(e) is not ErrorKind.NETWORK:
                    raise
                logger.warning(
                    "Records call failed on provider %d/%d: %s", index + 1, len(self._urls), e
                )
                try:
                    index, client = await self._advance(index)
                except ProviderExhaustedError:
                    raise ProviderExhaustedError(original_error=e) from e

    async def _advance(self, current_index: int) -> tuple[int, EnsRecordsClient]:
        async with self._lock:
            if current_index < self._index:
                return self._index, self._client
            if current_index >= len(self._urls) - 1:
                logger.error("Records client exhausted all %d providers", len(self._urls))
                raise ProviderExhaustedError()
            next_index = current_index + 1
            self._client = self._factory(self._urls[next_index])
            self._index = next_index
            logger.info(
                "Records client rotated to provider %d/%d (%s)",
                next_index + 1,
                len(self._urls),
                redact_url(self._urls[next_index]),
            )
            return self._index, self._client


def create_records_client(
    provider_urls: Sequence[str],
    policy: Optional[TransportPolicy] = None,
    *,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep_func: Optional[SleepFunc] = None,
) -> RotatableClientHandle:
    """Build a rotatable records handle starting at ``provider_urls[0]``.

    Each records client talks to a single endpoint, not the fallback chain.
    """
    policy = policy or TransportPolicy()

    def factory(url: str) -> EnsRecordsClient:
        return EnsRecordsClient(
            HttpTransport(
                url, replace(policy), http_transport=http_transport, sleep_func=sleep_func
            )
        )

    return RotatableClientHandle(provider_urls, factory)


@dataclass(frozen=True)
class ClientContext:
    """Long-lived clients shared by all tool handlers."""

    public: EnsPublicClient
    records: RotatableClientHandle
    subgraph: SubgraphClient
    provider_urls: tuple[str, ...]


def build_client_context(
    config: "ServerConfig",
    *,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep_func: Optional[SleepFunc] = None,
) -> ClientContext:
    """Build every client from configuration, once per process."""
    urls = get_provider_urls(config.provider_url)
    policy = config.transport_policy()

    fallback = build_fallback_transport(
        urls, policy, http_transport=http_transport, sleep_func=sleep_func
    )
    subgraph_url = resolve_subgraph_url(config.subgraph_url, config.thegraph_api_key)
    logger.info(
        "ENS providers: %s; subgraph: %s",
        ", ".join(redact_url(url) for url in urls),
        redact_url(subgraph_url),
    )

    return ClientContext(
        public=EnsPublicClient(fallback),
        records=create_records_client(
            urls, policy, http_transport=http_transport, sleep_func=sleep_func
        ),
        subgraph=SubgraphClient(
            subgraph_url, replace(policy), http_transport=http_transport, sleep_func=sleep_func
        ),
        provider_urls=tuple(urls),
    )

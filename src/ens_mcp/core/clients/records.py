"""Enriched ENS records client.

``EnsRecordsClient`` aggregates the profile of a name (well-known text
records, multicoin addresses and the content hash) in one call. It is bound
to a single endpoint; moving to another endpoint after a failure is handled
by ``RotatableClientHandle`` in ``factory.py``.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from functools import partial
from typing import Any, Awaitable, Callable, Optional, TypeVar

from ens_mcp.core.clients.models import AddressRecord, NameRecords
from ens_mcp.core.clients.public import EnsPublicClient, RpcTransport

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TEXT_KEYS: tuple[str, ...] = (
    "avatar",
    "description",
    "display",
    "email",
    "keywords",
    "location",
    "name",
    "notice",
    "url",
    "com.discord",
    "com.github",
    "com.twitter",
    "org.telegram",
)

DEFAULT_COINS: tuple[str, ...] = ("ETH", "BTC", "OP", "BASE", "ARB1", "MATIC")

# eth_calls in flight per get_records call
DEFAULT_MAX_CONCURRENCY = 4

# Multicodec prefixes (ENSIP-7)
_CONTENT_CODECS: tuple[tuple[bytes, str], ...] = (
    (bytes.fromhex("e301"), "ipfs"),
    (bytes.fromhex("e501"), "ipns"),
    (bytes.fromhex("e401"), "bzz"),
    (bytes.fromhex("bc03"), "onion"),
    (bytes.fromhex("bd03"), "onion3"),
    (bytes.fromhex("90b2ca05"), "ar"),
)


def decode_content_hash(raw: bytes) -> str:
    """Render an ENSIP-7 content hash as ``<protocol>://<value>``.

    IPFS/IPNS CIDs are rendered in base32 multibase form; other protocols
    keep their payload as hex.
    """
    for prefix, protocol in _CONTENT_CODECS:
        if raw.startswith(prefix):
            payload = raw[len(prefix):]
            if protocol in ("ipfs", "ipns"):
                value = "b" + base64.b32encode(payload).decode().lower().rstrip("=")
            elif protocol in ("onion", "onion3"):
                value = payload.decode("ascii", errors="replace")
            elif protocol == "ar":
                value = base64.urlsafe_b64encode(payload).decode().rstrip("=")
            else:
                value = payload.hex()
            return f"{protocol}://{value}"
    return "0x" + raw.hex()


class EnsRecordsClient:
    """Aggregated record queries bound to one endpoint."""

    def __init__(
        self,
        transport: RpcTransport,
        *,
        text_keys: tuple[str, ...] = DEFAULT_TEXT_KEYS,
        coins: tuple[str, ...] = DEFAULT_COINS,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._client = EnsPublicClient(transport)
        self.text_keys = text_keys
        self.coins = coins
        self.max_concurrency = max_concurrency

    @property
    def transport(self) -> RpcTransport:
        return self._client.transport

    async def get_records(self, name: str) -> Optional[NameRecords]:
        """Fetch the resolver records of *name*.

        Returns:
            ``None`` when the name has no resolver; otherwise the records that
            are set (unset ones are left out).
        """
        resolver = await self._client.get_resolver(name)
        if resolver is None:
            return None

        texts, coins, content = await self._gather_records(name, resolver)

        coin_records: list[AddressRecord] = [record for record in coins if record is not None]
        return NameRecords(
            resolver_address=resolver,
            texts={key: value for key, value in zip(self.text_keys, texts) if value},
            coins=coin_records,
            content_hash=decode_content_hash(content) if content else None,
        )

    async def _gather_records(
        self, name: str, resolver: str
    ) -> tuple[list[Optional[str]], list[Optional[AddressRecord]], Optional[bytes]]:
        """Run the per-record reads with bounded concurrency.

        The first failure cancels the reads still pending, so a caller that
        rotates to another provider does not leave calls running on this one.
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def limited(call: Callable[[], Awaitable[T]]) -> T:
            async with semaphore:
                return await call()

        client = self._client
        calls: list[Callable[[], Awaitable[Any]]] = [
            *(
                partial(client.get_text_record, name, key, resolver=resolver)
                for key in self.text_keys
            ),
            *(
                partial(client.get_address_record, name, coin, resolver=resolver)
                for coin in self.coins
            ),
            partial(client.get_content_hash, name, resolver=resolver),
        ]
        tasks = [asyncio.ensure_future(limited(call)) for call in calls]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

        n_texts, n_coins = len(self.text_keys), len(self.coins)
        return (
            results[:n_texts],
            results[n_texts : n_texts + n_coins],
            results[-1],
        )

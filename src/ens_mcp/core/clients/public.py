"""Low-level ENS client over JSON-RPC ``eth_call``.

``EnsPublicClient`` reads the mainnet ENS contracts through any object with
an async ``request(method, params)`` method, normally a ``FallbackTransport``.
It keeps no per-request state, so one instance serves every concurrent tool
call for the life of the process.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional, Protocol, Sequence

from ens_mcp.core.clients import contracts as c
from ens_mcp.core.clients.models import (
    AddressRecord,
    ExpiryRecord,
    OwnerRecord,
    PriceRecord,
    ReverseRecord,
)
from ens_mcp.core.clients.names import eth_2ld_label, labelhash, namehash, reverse_name
from ens_mcp.core.errors import (
    ContractRevertError,
    EnsMcpError,
    ErrorKind,
    InvalidNameError,
    UnsupportedNameError,
)

logger = logging.getLogger(__name__)


class RpcTransport(Protocol):
    async def request(self, method: str, params: Sequence[Any]) -> Any: ...


class EnsPublicClient:
    """Read-only ENS queries against mainnet."""

    def __init__(self, transport: RpcTransport):
        self._transport = transport

    @property
    def transport(self) -> RpcTransport:
        return self._transport

    async def call(self, to: str, fn: c.ViewFunction, *args: Any) -> Optional[tuple[Any, ...]]:
        """Run a view function with ``eth_call`` and decode its return data."""
        data = await self._transport.request(
            "eth_call", [{"to": to, "data": fn.encode_call(*args)}, "latest"]
        )
        return fn.decode_result(data)

    async def _call_optional(self, to: str, fn: c.ViewFunction, *args: Any) -> Optional[Any]:
        """Like ``call`` but returns the first value, and ``None`` on revert."""
        try:
            result = await self.call(to, fn, *args)
        except ContractRevertError:
            return None
        return result[0] if result else None

    # Resolver lookups

    async def get_resolver(self, name: str) -> Optional[str]:
        result = await self.call(c.ENS_REGISTRY, c.REGISTRY_RESOLVER, namehash(name))
        if not result or c.is_zero_address(result[0]):
            return None
        return c.checksum(result[0])

    async def get_address_record(
        self, name: str, coin: str = "ETH", *, resolver: Optional[str] = None
    ) -> Optional[AddressRecord]:
        """Resolve *name* to an address for *coin* (default ETH).

        Returns:
            The record, or ``None`` when the name has no resolver or no
            address set for the coin.
        """
        coin_type = c.COIN_TYPES.get(coin.upper())
        if coin_type is None:
            raise InvalidNameError(name, f"unsupported coin '{coin}'")

        resolver = resolver or await self.get_resolver(name)
        if resolver is None:
            return None

        node = namehash(name)
        if coin_type == c.COIN_TYPES["ETH"]:
            value = await self._call_optional(resolver, c.RESOLVER_ADDR, node)
            if c.is_zero_address(value):
                return None
            return AddressRecord(id=coin_type, name="ETH", value=c.checksum(value))

        raw = await self._call_optional(resolver, c.RESOLVER_ADDR_COIN, node, coin_type)
        if not raw:
            return None
        return AddressRecord(
            id=coin_type,
            name=c.coin_name(coin_type),
            value=c.format_coin_address(coin_type, raw),
        )

    async def get_text_record(
        self, name: str, key: str, *, resolver: Optional[str] = None
    ) -> Optional[str]:
        resolver = resolver or await self.get_resolver(name)
        if resolver is None:
            return None
        value = await self._call_optional(resolver, c.RESOLVER_TEXT, namehash(name), key)
        return value or None

    async def get_content_hash(
        self, name: str, *, resolver: Optional[str] = None
    ) -> Optional[bytes]:
        resolver = resolver or await self.get_resolver(name)
        if resolver is None:
            return None
        value = await self._call_optional(resolver, c.RESOLVER_CONTENTHASH, namehash(name))
        return value or None

    async def get_name(self, address: str) -> Optional[ReverseRecord]:
        """Primary ENS name for *address*.

        ``match`` is True only when the name resolves forward to the same
        address.
        """
        reverse = reverse_name(address)
        resolver = await self.get_resolver(reverse)
        if resolver is None:
            return None

        name = await self._call_optional(resolver, c.RESOLVER_NAME, namehash(reverse))
        if not name:
            return None

        try:
            forward = await self.get_address_record(name)
        except InvalidNameError:
            logger.debug("Primary name %r for %s does not normalize", name, address)
            forward = None
        match = forward is not None and forward.value.lower() == address.lower()
        return ReverseRecord(name=name, match=match)

    # .eth registrar

    def _require_eth_2ld(self, name: str, operation: str) -> str:
        label = eth_2ld_label(name)
        if label is None:
            raise UnsupportedNameError(name, operation)
        return label

    async def get_available(self, name: str) -> bool:
        """Whether a second-level .eth name can be registered."""
        label = self._require_eth_2ld(name, "availability check")
        result = await self.call(c.ETH_REGISTRAR_CONTROLLER, c.CONTROLLER_AVAILABLE, label)
        return bool(result and result[0])

    async def get_owner(self, name: str) -> Optional[OwnerRecord]:
        """Owner of *name*, following the registrar and the name wrapper."""
        node = namehash(name)
        result = await self.call(c.ENS_REGISTRY, c.REGISTRY_OWNER, node)
        registry_owner = result[0] if result else None

        label = eth_2ld_label(name)
        if label is not None:
            token_id = int.from_bytes(labelhash(label), "big")
            registrant = await self._call_optional(
                c.BASE_REGISTRAR, c.REGISTRAR_OWNER_OF, token_id
            )
            if c.same_address(registrant, c.NAME_WRAPPER):
                return await self._wrapped_owner(node)
            if registrant is None and c.is_zero_address(registry_owner):
                return None
            return OwnerRecord(
                owner=None if c.is_zero_address(registry_owner) else c.checksum(registry_owner),
                registrant=c.checksum(registrant) if registrant else None,
                ownership_level="registrar",
            )

        if c.is_zero_address(registry_owner):
            return None
        if c.same_address(registry_owner, c.NAME_WRAPPER):
            return await self._wrapped_owner(node)
        return OwnerRecord(owner=c.checksum(registry_owner), ownership_level="registry")

    async def _wrapped_owner(self, node: bytes) -> OwnerRecord:
        owner = await self._call_optional(
            c.NAME_WRAPPER, c.WRAPPER_OWNER_OF, int.from_bytes(node, "big")
        )
        return OwnerRecord(
            owner=None if c.is_zero_address(owner) else c.checksum(owner),
            ownership_level="nameWrapper",
        )

    async def get_expiry(self, name: str) -> Optional[ExpiryRecord]:
        """Expiry of a second-level .eth name; ``None`` for other names."""
        label = eth_2ld_label(name)
        if label is None:
            return None

        token_id = int.from_bytes(labelhash(label), "big")
        expires, grace = await asyncio.gather(
            self.call(c.BASE_REGISTRAR, c.REGISTRAR_NAME_EXPIRES, token_id),
            self.call(c.BASE_REGISTRAR, c.REGISTRAR_GRACE_PERIOD),
        )
        expiry_ts = expires[0] if expires else 0
        if not expiry_ts:
            return None
        grace_period = grace[0] if grace else 0

        now = datetime.now(timezone.utc).timestamp()
        if expiry_ts > now:
            status = "active"
        elif expiry_ts + grace_period > now:
            status = "gracePeriod"
        else:
            status = "expired"
        return ExpiryRecord(
            expiry=datetime.fromtimestamp(expiry_ts, tz=timezone.utc),
            grace_period=grace_period,
            status=status,
        )

    async def get_price(self, name: str, duration: int) -> PriceRecord:
        """Rent price of a second-level .eth name for *duration* seconds."""
        label = self._require_eth_2ld(name, "price lookup")
        result = await self.call(
            c.ETH_REGISTRAR_CONTROLLER, c.CONTROLLER_RENT_PRICE, label, duration
        )
        if not result:
            raise EnsMcpError(
                "ENS controller returned no price data", kind=ErrorKind.ENS_PROTOCOL
            )
        base, premium = result[0]
        return PriceRecord(base=base, premium=premium)

"""Mainnet ENS contract addresses and the view functions ens-mcp calls.

Calls are ABI-encoded with eth-abi and sent as raw ``eth_call`` requests so
they can travel over any JSON-RPC transport in this package.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

ENS_REGISTRY = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"
BASE_REGISTRAR = "0x57f1887a8BF19b14fC0dF6Fd9B2acc9Af147eA85"
ETH_REGISTRAR_CONTROLLER = "0x253553366Da8546fC250F225fe3d25d0C782303b"
NAME_WRAPPER = "0xD4416b13d2b3a9aBae7AcD5D6C2BbDBE25686401"

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# SLIP-44 / ENSIP-11 coin types
COIN_TYPES: dict[str, int] = {
    "ETH": 60,
    "BTC": 0,
    "LTC": 2,
    "DOGE": 3,
    "OP": 2147483658,
    "MATIC": 2147483785,
    "BASE": 2147492101,
    "ARB1": 2147525809,
}

# ENSIP-11: EVM chain coin types have the high bit set
_EVM_COIN_FLAG = 0x80000000


@dataclass(frozen=True)
class ViewFunction:
    """A contract view function: name, input types, output types."""

    name: str
    inputs: tuple[str, ...]
    outputs: tuple[str, ...]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)

    def encode_call(self, *args: Any) -> str:
        return "0x" + (self.selector + encode(list(self.inputs), list(args))).hex()

    def decode_result(self, data: Optional[str]) -> Optional[tuple[Any, ...]]:
        """Decode return data; ``None`` when the call returned nothing."""
        if not data or data == "0x":
            return None
        return decode(list(self.outputs), bytes.fromhex(data.removeprefix("0x")))


# ENS registry
REGISTRY_RESOLVER = ViewFunction("resolver", ("bytes32",), ("address",))
REGISTRY_OWNER = ViewFunction("owner", ("bytes32",), ("address",))

# Public resolver profiles
RESOLVER_ADDR = ViewFunction("addr", ("bytes32",), ("address",))
RESOLVER_ADDR_COIN = ViewFunction("addr", ("bytes32", "uint256"), ("bytes",))
RESOLVER_TEXT = ViewFunction("text", ("bytes32", "string"), ("string",))
RESOLVER_NAME = ViewFunction("name", ("bytes32",), ("string",))
RESOLVER_CONTENTHASH = ViewFunction("contenthash", ("bytes32",), ("bytes",))

# .eth registrar
REGISTRAR_OWNER_OF = ViewFunction("ownerOf", ("uint256",), ("address",))
REGISTRAR_NAME_EXPIRES = ViewFunction("nameExpires", ("uint256",), ("uint256",))
REGISTRAR_GRACE_PERIOD = ViewFunction("GRACE_PERIOD", (), ("uint256",))
CONTROLLER_AVAILABLE = ViewFunction("available", ("string",), ("bool",))
CONTROLLER_RENT_PRICE = ViewFunction("rentPrice", ("string", "uint256"), ("(uint256,uint256)",))

# Name wrapper
WRAPPER_OWNER_OF = ViewFunction("ownerOf", ("uint256",), ("address",))


def checksum(address: str) -> str:
    return to_checksum_address(address)


def is_zero_address(address: Optional[str]) -> bool:
    return not address or int(address, 16) == 0


def coin_name(coin_type: int) -> str:
    for name, value in COIN_TYPES.items():
        if value == coin_type:
            return name
    return str(coin_type)


def format_coin_address(coin_type: int, raw: bytes) -> str:
    """Render a multicoin ``addr`` value.

    EVM chains (ETH and ENSIP-11 chain ids) are rendered as checksummed hex;
    other coins keep their raw encoding as hex.
    """
    if len(raw) == 20 and (coin_type == COIN_TYPES["ETH"] or coin_type & _EVM_COIN_FLAG):
        return to_checksum_address(raw)
    return "0x" + raw.hex()


def same_address(a: Optional[str], b: Optional[str]) -> bool:
    return bool(a and b) and a.lower() == b.lower()

"""ENS name handling: caller input, ENSIP-15 normalization, namehash, labelhash."""

from __future__ import annotations

from typing import Optional

from ens.exceptions import InvalidName
from ens.utils import normalize_name as _ensip15_normalize
from eth_utils import keccak

from ens_mcp.core.errors.ens import InvalidNameError

ETH_SUFFIX = ".eth"


def normalize_name(name: str) -> str:
    """Append ``.eth`` to a name that does not already end with it.

    Raises:
        InvalidNameError: The name is empty or whitespace.
    """
    name = name.strip()
    if not name:
        raise InvalidNameError(name, "name is empty")
    return name if name.endswith(ETH_SUFFIX) else f"{name}{ETH_SUFFIX}"


def ensip15(name: str) -> str:
    """Normalize *name* per ENSIP-15 before hashing."""
    try:
        return _ensip15_normalize(name)
    except InvalidName as e:
        raise InvalidNameError(name, str(e)) from e


def labelhash(label: str) -> bytes:
    return keccak(text=label)


def namehash(name: str) -> bytes:
    """Compute the EIP-137 namehash of *name*."""
    node = b"\x00" * 32
    normalized = ensip15(name) if name else ""
    if normalized:
        for label in reversed(normalized.split(".")):
            node = keccak(node + labelhash(label))
    return node


def is_eth_2ld(name: str) -> bool:
    """True for ``<label>.eth`` names. Expects an ENSIP-15 normalized name."""
    labels = name.split(".")
    return len(labels) == 2 and labels[1] == "eth" and bool(labels[0])


def eth_2ld_label(name: str) -> Optional[str]:
    """Normalized label of a second-level .eth name, ``None`` for other names.

    ``"Vitalik.eth"`` and ``"vitalik.eth"`` both give ``"vitalik"``, so the
    registrar sees the same label and token id that ``namehash`` uses.
    """
    normalized = ensip15(name)
    return normalized.split(".")[0] if is_eth_2ld(normalized) else None


def reverse_name(address: str) -> str:
    """Reverse-registrar name for an address (``<hex>.addr.reverse``)."""
    return f"{address.lower().removeprefix('0x')}.addr.reverse"

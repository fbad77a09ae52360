"""Result records returned by the ENS clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AddressRecord:
    """An address record: coin type id, coin name and rendered address."""

    id: int
    name: str
    value: str


@dataclass(frozen=True)
class ReverseRecord:
    """Primary name of an address and whether forward resolution agrees."""

    name: str
    match: bool


@dataclass(frozen=True)
class OwnerRecord:
    owner: Optional[str]
    registrant: Optional[str] = None
    ownership_level: str = "registry"  # registry | registrar | nameWrapper


@dataclass(frozen=True)
class ExpiryRecord:
    expiry: datetime
    grace_period: int  # seconds
    status: str  # active | gracePeriod | expired


@dataclass(frozen=True)
class PriceRecord:
    """Registration price in wei."""

    base: int
    premium: int

    @property
    def total(self) -> int:
        return self.base + self.premium


@dataclass(frozen=True)
class NameRecords:
    """Aggregated resolver records for one name."""

    resolver_address: Optional[str] = None
    texts: dict[str, str] = field(default_factory=dict)
    coins: list[AddressRecord] = field(default_factory=list)
    content_hash: Optional[str] = None

"""ENS operation handlers.

Each handler normalizes its input, makes the upstream calls through the
shared ``ClientContext`` and returns exactly one ``ToolEnvelope``. Failures
are converted to error envelopes by ``envelope_errors``; nothing is raised
to the protocol layer.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from eth_utils import is_address

from ens_mcp.core.clients import (
    ClientContext,
    ExpiryRecord,
    HistoryEvent,
    NameHistory,
    NameRecords,
    OwnerRecord,
)
from ens_mcp.core.clients.names import normalize_name
from ens_mcp.core.errors import EnsMcpError, ErrorKind
from ens_mcp.core.responses import ToolEnvelope, envelope_errors, error_envelope, text_envelope

SECONDS_PER_YEAR = 365 * 24 * 60 * 60
SECONDS_PER_DAY = 86_400
WEI_PER_ETHER = 10**18


@envelope_errors("name resolution")
async def resolve_name(context: ClientContext, name: str) -> ToolEnvelope:
    normalized = normalize_name(name)
    record = await context.public.get_address_record(normalized, "ETH")
    if record is None:
        return text_envelope(f"Could not resolve {normalized} to an address.")
    return text_envelope(f"The address for {normalized} is {record.value}")


@envelope_errors("reverse lookup")
async def reverse_lookup(context: ClientContext, address: str) -> ToolEnvelope:
    if not is_address(address):
        return error_envelope(f"Invalid Ethereum address: {address}")

    result = await context.public.get_name(address)
    if result is None:
        return text_envelope(f"No ENS name found for address {address}")

    note = "" if result.match else " (Note: forward resolution does not match this address)"
    return text_envelope(f"The ENS name for {address} is {result.name}{note}")


@envelope_errors("getting records")
async def get_text_record(context: ClientContext, name: str, key: str) -> ToolEnvelope:
    normalized = normalize_name(name)
    value = await context.public.get_text_record(normalized, key)
    if not value:
        return text_envelope(f"No '{key}' record found for {normalized}")
    return text_envelope(f"The '{key}' record for {normalized} is: {value}")


@envelope_errors("name availability check")
async def check_availability(context: ClientContext, name: str) -> ToolEnvelope:
    normalized = normalize_name(name)
    if await context.public.get_available(normalized):
        return text_envelope(f"The name {normalized} is available for registration.")

    owner = await context.public.get_owner(normalized)
    suffix = f"Current owner: {owner.owner}" if owner else ""
    return text_envelope(f"The name {normalized} is already registered. {suffix}")


@envelope_errors("ens information")
async def get_all_records(context: ClientContext, name: str) -> ToolEnvelope:
    """Resolver records, ownership and expiry of a name in one report.

    Records come from the rotatable records client, which moves to the next
    provider when a call fails on the network.
    """
    normalized = normalize_name(name)
    records = await context.records.run(lambda client: client.get_records(normalized))
    owner = await context.public.get_owner(normalized)
    expiry = await context.public.get_expiry(normalized)
    return text_envelope(_records_report(normalized, records, owner, expiry))


@envelope_errors("getting subdomains")
async def get_subdomains(context: ClientContext, name: str) -> ToolEnvelope:
    normalized = normalize_name(name)
    subnames = await context.subgraph.get_subnames(normalized)
    if not subnames:
        return text_envelope(f"No subdomains found for {name}")

    lines = [f"Subdomains for {name}:", ""]
    for subname in subnames:
        owner = subname.effective_owner
        lines.append(f"- {subname.name}" + (f" (Owner: {owner})" if owner else ""))
    return text_envelope("\n".join(lines) + "\n")


@envelope_errors("get name history")
async def get_name_history(context: ClientContext, name: str) -> ToolEnvelope:
    normalized = normalize_name(name)
    history = await context.subgraph.get_name_history(normalized)
    if history is None:
        return text_envelope(f"No history found for {name}")
    return text_envelope(_history_report(name, history))


@envelope_errors("get registration price")
async def get_registration_price(
    context: ClientContext, name: str, duration: int = 1
) -> ToolEnvelope:
    normalized = normalize_name(name)
    if isinstance(duration, bool) or not isinstance(duration, int) or duration < 1:
        raise EnsMcpError(
            f"duration must be a whole number of years >= 1, got {duration!r}",
            kind=ErrorKind.INVALID_INPUT,
        )

    price = await context.public.get_price(normalized, duration * SECONDS_PER_YEAR)
    return text_envelope(
        f"Registration price for {normalized} for {duration} year(s):\n"
        f"- Base Price: {format_ether(price.base)} ETH\n"
        f"- Premium: {format_ether(price.premium)} ETH\n"
        f"- Total: {format_ether(price.total)} ETH"
    )


# Report formatting


def format_ether(wei: int) -> str:
    """Render a wei amount in ether, e.g. ``5000000000000000 -> "0.005"``.

    Always keeps at least one decimal place (``10**18 -> "1.0"``).
    """
    whole, fraction = divmod(wei, WEI_PER_ETHER)
    decimals = f"{fraction:018d}".rstrip("0") or "0"
    return f"{whole}.{decimals}"


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def _records_report(
    name: str,
    records: Optional[NameRecords],
    owner: Optional[OwnerRecord],
    expiry: Optional[ExpiryRecord],
) -> str:
    records = records or NameRecords()
    output = f"Information for {name}:\n\n"
    output += f"Resolver Address: {records.resolver_address or 'none'}\n"

    if records.texts:
        output += "\nText Records:\n"
        for key, value in records.texts.items():
            output += f"- {key}: {value}\n"
    else:
        output += "\nNo text records found.\n"

    if records.coins:
        output += "\nAddresses:\n"
        for coin in records.coins:
            output += f"- {coin.name} ({coin.id}): {coin.value}\n"
    else:
        output += "\nNo cryptocurrency addresses found.\n"

    if records.content_hash:
        protocol = records.content_hash.split("://", 1)[0]
        output += f"\nContent Hash: {records.content_hash} (Protocol: {protocol})\n"

    if owner:
        output += "\nOwnership Information:"
        output += f"\n- Owner: {owner.owner}"
        if owner.registrant:
            output += f"\n- Registrant: {owner.registrant}"
        output += f"\n- Level: {owner.ownership_level}\n"

    if expiry:
        output += "\nExpiration Information:"
        output += f"\n- Expires: {format_timestamp(expiry.expiry)}"
        output += f"\n- Status: {expiry.status}"
        if expiry.status == "gracePeriod":
            output += f"\n- Grace Period: {expiry.grace_period // SECONDS_PER_DAY} days"
        output += "\n"

    return output.rstrip("\n")


def _expiry_date(event: HistoryEvent) -> str:
    if event.expiry_date is None:
        return "unknown"
    return format_timestamp(datetime.fromtimestamp(event.expiry_date, tz=timezone.utc))


def _account(value) -> str:
    return value.id if value else "unknown"


def _history_report(name: str, history: NameHistory) -> str:
    output = f"History for {name}:\n\n"

    if history.domain_events:
        output += "Domain Events:\n"
        for event in history.domain_events:
            output += f"- {event.type} at block {event.block_number}\n"
            if event.type in ("Transfer", "NewOwner", "WrappedTransfer"):
                output += f"  New owner: {_account(event.owner)}\n"
            elif event.type == "NewResolver":
                output += f"  New resolver: {_account(event.resolver)}\n"

    if history.registration_events:
        output += "\nRegistration Events:\n"
        for event in history.registration_events:
            output += f"- {event.type} at block {event.block_number}\n"
            if event.type == "NameRegistered":
                output += f"  Registrant: {_account(event.registrant)}\n"
                output += f"  Expiry Date: {_expiry_date(event)}\n"
            elif event.type == "NameRenewed":
                output += f"  New Expiry Date: {_expiry_date(event)}\n"
            elif event.type == "NameTransferred":
                output += f"  New owner: {_account(event.new_owner)}\n"

    if history.resolver_events:
        output += "\nResolver Events:\n"
        for event in history.resolver_events:
            output += f"- {event.type} at block {event.block_number}\n"
            if event.type == "AddrChanged":
                output += f"  New address: {_account(event.addr)}\n"
            elif event.type == "TextChanged":
                output += f"  Key: {event.key}\n"
                if event.value:
                    output += f"  Value: {event.value}\n"

    return output

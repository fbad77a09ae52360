"""Register the ENS tools on a FastMCP server."""

import logging
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from ens_mcp.config import ServerConfig
from ens_mcp.core.clients import ClientContext
from ens_mcp.core.naming import canonical_tool
from ens_mcp.tools import ens

logger = logging.getLogger(__name__)

TOOL_NAMES: tuple[str, ...] = (
    "resolve-name",
    "reverse-lookup",
    "get-text-record",
    "check-availability",
    "get-all-records",
    "get-subdomains",
    "get-name-history",
    "get-registration-price",
)

NameArg = Annotated[str, Field(description="The ENS name (e.g. 'vitalik.eth' or 'vitalik')")]


def register_ens_tools(mcp: FastMCP, config: ServerConfig, context: ClientContext) -> None:
    """Register the eight ENS tools, each bound to the shared client context."""

    @canonical_tool(mcp, canonical_name="resolve-name")
    async def resolve_name(name: NameArg) -> CallToolResult:
        """Resolve an ENS name to its Ethereum address."""
        return (await ens.resolve_name(context, name)).to_call_tool_result()

    @canonical_tool(mcp, canonical_name="reverse-lookup")
    async def reverse_lookup(
        address: Annotated[str, Field(description="The Ethereum address to look up")],
    ) -> CallToolResult:
        """Find the primary ENS name of an Ethereum address."""
        return (await ens.reverse_lookup(context, address)).to_call_tool_result()

    @canonical_tool(mcp, canonical_name="get-text-record")
    async def get_text_record(
        name: NameArg,
        key: Annotated[
            str, Field(description="The record key (e.g. 'email', 'url', 'avatar', 'com.twitter')")
        ],
    ) -> CallToolResult:
        """Read one text record of an ENS name."""
        return (await ens.get_text_record(context, name, key)).to_call_tool_result()

    @canonical_tool(mcp, canonical_name="check-availability")
    async def check_availability(name: NameArg) -> CallToolResult:
        """Check whether a .eth name is available for registration."""
        return (await ens.check_availability(context, name)).to_call_tool_result()

    @canonical_tool(mcp, canonical_name="get-all-records")
    async def get_all_records(name: NameArg) -> CallToolResult:
        """Get resolver records, ownership and expiry of an ENS name."""
        return (await ens.get_all_records(context, name)).to_call_tool_result()

    @canonical_tool(mcp, canonical_name="get-subdomains")
    async def get_subdomains(name: NameArg) -> CallToolResult:
        """List the subdomains of an ENS name."""
        return (await ens.get_subdomains(context, name)).to_call_tool_result()

    @canonical_tool(mcp, canonical_name="get-name-history")
    async def get_name_history(name: NameArg) -> CallToolResult:
        """Show the ownership, registration and resolver history of an ENS name."""
        return (await ens.get_name_history(context, name)).to_call_tool_result()

    @canonical_tool(mcp, canonical_name="get-registration-price")
    async def get_registration_price(
        name: NameArg,
        duration: Annotated[
            int, Field(description="Registration duration in years (default 1)")
        ] = 1,
    ) -> CallToolResult:
        """Quote the price of registering a .eth name."""
        return (await ens.get_registration_price(context, name, duration)).to_call_tool_result()

    logger.debug("Registered %d ENS tools for %s", len(TOOL_NAMES), config.server_name)


__all__ = [
    "TOOL_NAMES",
    "register_ens_tools",
]

"""FastMCP server factory and stdio entry point."""

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from ens_mcp.config import ServerConfig, get_config
from ens_mcp.core.clients import ClientContext, build_client_context
from ens_mcp.tools.registration import register_ens_tools

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = (
    "Ethereum Name Service lookups: resolve names and addresses, read records, "
    "check availability and prices, and browse subdomains and history."
)


def create_server(
    config: Optional[ServerConfig] = None,
    context: Optional[ClientContext] = None,
) -> FastMCP:
    """
    Create and configure the FastMCP server.

    Args:
        config: Server configuration (defaults to the global config)
        context: Pre-built clients; built from ``config`` when omitted

    Returns:
        Configured FastMCP server instance
    """
    config = config or get_config()
    context = context or build_client_context(config)

    mcp = FastMCP(name=config.server_name, instructions=SERVER_INSTRUCTIONS)
    register_ens_tools(mcp, config, context)

    logger.info(
        "%s v%s ready with %d provider(s)",
        config.server_name,
        config.server_version,
        len(context.provider_urls),
    )
    return mcp


def main(config: Optional[ServerConfig] = None) -> None:
    """Run the server over stdio."""
    config = config or get_config()
    config.setup_logging()
    mcp = create_server(config)
    logger.info("Starting %s on stdio", config.server_name)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()

"""ens-mcp: MCP server for Ethereum Name Service lookups."""

__version__ = "0.1.1"

"""MCP tool handlers and registration for ens-mcp."""

"""Command line interface for ens-mcp."""

from ens_mcp.cli.main import cli, main

__all__ = ["cli", "main"]

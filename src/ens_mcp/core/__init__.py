"""Core functionality for ens-mcp: providers, clients, errors, responses."""

"""ServerConfig dataclass and global configuration state.

This module defines the ``ServerConfig`` class (field declarations and simple
accessor methods) and the global ``get_config`` / ``set_config`` helpers.
Loading logic lives in the ``_ServerConfigLoader`` mixin (``loader.py``).
"""

import logging
import sys
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_package_version
from typing import Optional

from ens_mcp.config.loader import _ServerConfigLoader
from ens_mcp.core.providers.resilience import TransportPolicy


def _get_version() -> str:
    """Get package version from metadata."""
    try:
        return get_package_version("ens-mcp")
    except PackageNotFoundError:
        return "0.1.1"  # Fallback for dev without install


_PACKAGE_VERSION = _get_version()


@dataclass
class ServerConfig(_ServerConfigLoader):
    """Server configuration with support for env vars and TOML overrides."""

    # Upstream JSON-RPC providers (single URL or comma-separated list)
    provider_url: Optional[str] = None
    request_timeout: float = 10.0
    retry_count: int = 3
    retry_delay: float = 1.0

    # ENS subgraph
    subgraph_url: Optional[str] = None
    thegraph_api_key: Optional[str] = field(default=None, repr=False)

    # Logging configuration
    log_level: str = "INFO"
    structured_logging: bool = True

    # Server configuration
    server_name: str = "ens-mcp"
    server_version: str = field(default_factory=lambda: _PACKAGE_VERSION)

    def transport_policy(self) -> TransportPolicy:
        """Build the per-endpoint transport policy from these settings."""
        return TransportPolicy(
            timeout=self.request_timeout,
            retry_count=self.retry_count,
            retry_delay=self.retry_delay,
        )

    def setup_logging(self) -> None:
        """Configure logging based on settings.

        Logs go to stderr; stdout carries the stdio MCP stream.
        """
        level = getattr(logging, self.log_level, logging.INFO)

        if self.structured_logging:
            # JSON-style structured logging
            formatter = logging.Formatter(
                '{"timestamp":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}'
            )
        else:
            formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)

        root_logger = logging.getLogger("ens_mcp")
        root_logger.setLevel(level)
        root_logger.addHandler(handler)


# Global configuration instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def set_config(config: ServerConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config

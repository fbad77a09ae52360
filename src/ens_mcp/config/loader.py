"""ServerConfig loading logic.

Provides ``_ServerConfigLoader``, a mixin class whose methods are inherited by
``ServerConfig`` (defined in ``server.py``).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from ens_mcp.config.server import ServerConfig

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback

from ens_mcp.config.parsing import (
    _join_provider_urls,
    _normalize_log_level,
    _parse_bool,
    _parse_non_negative_int,
    _parse_positive_float,
)

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV_VAR = "ENS_MCP_CONFIG_FILE"
PROJECT_CONFIG_NAME = "ens-mcp.toml"


class _ServerConfigLoader:
    """Mixin providing config-loading methods for ``ServerConfig``.

    At runtime ``self`` is always a ``ServerConfig`` instance.
    """

    if TYPE_CHECKING:
        provider_url: Optional[str]
        request_timeout: float
        retry_count: int
        retry_delay: float
        subgraph_url: Optional[str]
        thegraph_api_key: Optional[str]
        log_level: str
        structured_logging: bool
        server_name: str

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "ServerConfig":
        """
        Create configuration from environment variables and optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. TOML config (explicit path, ENS_MCP_CONFIG_FILE, or ./ens-mcp.toml)
        3. Default values
        """
        config = cls()

        toml_path = config_file or os.environ.get(CONFIG_FILE_ENV_VAR)
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            project_config = Path(PROJECT_CONFIG_NAME)
            if project_config.exists():
                config._load_toml(project_config)
                logger.debug("Loaded project config from %s", project_config)

        config._load_env()
        return config  # type: ignore[return-value]

    def _load_toml(self, path: Path) -> None:
        """Load configuration from TOML file."""
        if not path.exists():
            logger.warning("Config file not found: %s", path)
            return

        try:
            with open(path, "rb") as f:
                data: Dict[str, Any] = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error("Error loading config file %s: %s", path, e)
            return

        # Provider settings
        if "providers" in data:
            prov = data["providers"]
            if "urls" in prov:
                self.provider_url = _join_provider_urls(prov["urls"])
            elif "url" in prov:
                self.provider_url = _join_provider_urls(prov["url"])
            if "timeout" in prov:
                self.request_timeout = _parse_positive_float(
                    prov["timeout"], "providers.timeout", self.request_timeout
                )
            if "retry_count" in prov:
                self.retry_count = _parse_non_negative_int(
                    prov["retry_count"], "providers.retry_count", self.retry_count
                )
            if "retry_delay" in prov:
                self.retry_delay = _parse_positive_float(
                    prov["retry_delay"], "providers.retry_delay", self.retry_delay
                )

        # Subgraph settings
        if "subgraph" in data:
            sub = data["subgraph"]
            if "url" in sub:
                self.subgraph_url = str(sub["url"])

        # Logging settings
        if "logging" in data:
            log = data["logging"]
            if "level" in log:
                self.log_level = _normalize_log_level(str(log["level"]))
            if "structured" in log:
                self.structured_logging = _parse_bool(log["structured"])

        # Server settings
        if "server" in data:
            srv = data["server"]
            if "name" in srv:
                self.server_name = str(srv["name"])

    def _load_env(self) -> None:
        """Load configuration from environment variables."""
        # Provider override: single URL or comma-separated list
        if provider := os.environ.get("PROVIDER_URL"):
            self.provider_url = provider

        if timeout := os.environ.get("ENS_MCP_REQUEST_TIMEOUT"):
            self.request_timeout = _parse_positive_float(
                timeout, "ENS_MCP_REQUEST_TIMEOUT", self.request_timeout
            )

        if retries := os.environ.get("ENS_MCP_RETRY_COUNT"):
            self.retry_count = _parse_non_negative_int(
                retries, "ENS_MCP_RETRY_COUNT", self.retry_count
            )

        if delay := os.environ.get("ENS_MCP_RETRY_DELAY"):
            self.retry_delay = _parse_positive_float(
                delay, "ENS_MCP_RETRY_DELAY", self.retry_delay
            )

        # Subgraph
        if subgraph := os.environ.get("ENS_SUBGRAPH_URL"):
            self.subgraph_url = subgraph

        if api_key := os.environ.get("THEGRAPH_API_KEY"):
            self.thegraph_api_key = api_key

        # Logging
        if level := os.environ.get("ENS_MCP_LOG_LEVEL"):
            self.log_level = _normalize_log_level(level)

        if structured := os.environ.get("ENS_MCP_STRUCTURED_LOGGING"):
            self.structured_logging = _parse_bool(structured)

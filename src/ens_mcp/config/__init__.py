"""Configuration package for ens-mcp.

Sub-modules:
    parsing – boolean/number/log-level parsing helpers
    server  – ServerConfig dataclass, get_config/set_config globals
    loader  – ServerConfig loading mixin (_ServerConfigLoader)
"""

from ens_mcp.config.parsing import (  # noqa: F401
    _normalize_log_level,
    _parse_bool,
)
from ens_mcp.config.server import (  # noqa: F401
    _PACKAGE_VERSION,
    ServerConfig,
    get_config,
    set_config,
)

__all__ = [
    "ServerConfig",
    "get_config",
    "set_config",
]

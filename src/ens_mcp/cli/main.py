"""``ens-mcp`` command line entry point."""

from typing import Optional

import click

from ens_mcp.config import ServerConfig, _normalize_log_level, set_config
from ens_mcp.server import main as run_server


def build_config(
    config_file: Optional[str],
    provider_url: Optional[str],
    log_level: Optional[str],
    structured: Optional[bool],
) -> ServerConfig:
    """Load config (env > TOML > defaults) and apply command-line overrides."""
    config = ServerConfig.from_env(config_file)
    if provider_url:
        config.provider_url = provider_url
    if log_level:
        config.log_level = _normalize_log_level(log_level)
    if structured is not None:
        config.structured_logging = structured
    return config


@click.command("ens-mcp")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to an ens-mcp.toml config file.",
)
@click.option(
    "--provider-url",
    default=None,
    help="Preferred RPC URL, or a comma-separated list that replaces the defaults.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (overrides ENS_MCP_LOG_LEVEL).",
)
@click.option(
    "--structured/--plain",
    "structured",
    default=None,
    help="JSON-style or plain log lines.",
)
@click.version_option(package_name="ens-mcp", prog_name="ens-mcp")
def cli(
    config_file: Optional[str],
    provider_url: Optional[str],
    log_level: Optional[str],
    structured: Optional[bool],
) -> None:
    """Run the ENS MCP server over stdio."""
    config = build_config(config_file, provider_url, log_level, structured)
    set_config(config)
    run_server(config)


def main() -> None:
    cli()

"""Shared fixtures for ens-mcp tests."""

import pytest

from ens_mcp.config import ServerConfig
from tests.helpers import SleepRecorder

_ENV_VARS = (
    "PROVIDER_URL",
    "ENS_MCP_LOG_LEVEL",
    "ENS_MCP_STRUCTURED_LOGGING",
    "ENS_MCP_CONFIG_FILE",
    "ENS_SUBGRAPH_URL",
    "THEGRAPH_API_KEY",
    "ENS_MCP_REQUEST_TIMEOUT",
    "ENS_MCP_RETRY_COUNT",
    "ENS_MCP_RETRY_DELAY",
)


@pytest.fixture
def fake_sleep():
    return SleepRecorder()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No ens-mcp environment variables and no project config file."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def mock_config(clean_env):
    """ServerConfig with defaults and fast retries."""
    return ServerConfig(retry_delay=0.01)

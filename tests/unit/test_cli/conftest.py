"""Shared fixtures for CLI tests."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def run_server(clean_env):
    """Patch the stdio server so invoking the CLI returns immediately."""
    with patch("ens_mcp.cli.main.run_server") as mock_run:
        yield mock_run

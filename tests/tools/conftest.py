"""Fixtures for tool handler tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def context():
    """ClientContext stand-in with async client methods."""
    ctx = MagicMock()
    ctx.public = MagicMock()
    for method in (
        "get_address_record",
        "get_name",
        "get_text_record",
        "get_available",
        "get_owner",
        "get_expiry",
        "get_price",
    ):
        setattr(ctx.public, method, AsyncMock(return_value=None))
    ctx.subgraph = MagicMock()
    ctx.subgraph.get_subnames = AsyncMock(return_value=[])
    ctx.subgraph.get_name_history = AsyncMock(return_value=None)
    ctx.records = MagicMock()
    ctx.records.run = AsyncMock(return_value=None)
    ctx.provider_urls = ("https://one.example",)
    return ctx

"""Tests for tool response envelopes."""

import pytest
from mcp.types import CallToolResult

from ens_mcp.core.errors import TransportError
from ens_mcp.core.responses import (
    ToolEnvelope,
    envelope_errors,
    error_envelope,
    text_envelope,
)


class TestEnvelopes:
    """Tests for envelope constructors."""

    def test_text_envelope(self):
        envelope = text_envelope("hello")
        assert envelope.to_dict() == {
            "content": [{"type": "text", "text": "hello"}],
            "isError": False,
        }

    def test_error_envelope(self):
        envelope = error_envelope("bad")
        assert envelope.is_error is True
        assert envelope.content[0]["text"] == "bad"

    def test_error_envelope_requires_message(self):
        with pytest.raises(ValueError):
            error_envelope("")

    def test_to_call_tool_result(self):
        result = error_envelope("bad").to_call_tool_result()
        assert isinstance(result, CallToolResult)
        assert result.isError is True
        assert result.content[0].type == "text"
        assert result.content[0].text == "bad"


class TestEnvelopeErrors:
    """Tests for the envelope_errors decorator."""

    @pytest.mark.asyncio
    async def test_passes_through_success(self):
        @envelope_errors("name resolution")
        async def handler():
            return text_envelope("ok")

        assert await handler() == ToolEnvelope("ok")

    @pytest.mark.asyncio
    async def test_converts_exceptions(self):
        @envelope_errors("name resolution")
        async def handler():
            raise TransportError("HTTP request failed: connection reset")

        envelope = await handler()
        assert envelope.is_error is True
        assert envelope.text.startswith("Network error while accessing Ethereum providers.")
        assert envelope.text.endswith("HTTP request failed: connection reset")

    @pytest.mark.asyncio
    async def test_unknown_errors_use_operation_label(self):
        @envelope_errors("get registration price")
        async def handler():
            raise KeyError()

        envelope = await handler()
        assert envelope.text == "Error during get registration price: KeyError"

"""Response envelopes returned by every ENS tool.

An invocation always produces exactly one ``ToolEnvelope``. Failures never
escape the handler boundary; they are classified and returned with
``is_error`` set.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from mcp.types import CallToolResult, TextContent

from ens_mcp.core.errors.classification import classify_error


@dataclass(frozen=True)
class ToolEnvelope:
    """A single text block plus an error flag."""

    text: str
    is_error: bool = False

    @property
    def content(self) -> list[dict[str, str]]:
        return [{"type": "text", "text": self.text}]

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.content, "isError": self.is_error}

    def to_call_tool_result(self) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )


def text_envelope(text: str) -> ToolEnvelope:
    return ToolEnvelope(text=text)


def error_envelope(text: str) -> ToolEnvelope:
    if not text:
        raise ValueError("error envelopes must carry a message")
    return ToolEnvelope(text=text, is_error=True)


def envelope_errors(
    operation: str,
) -> Callable[[Callable[..., Awaitable[ToolEnvelope]]], Callable[..., Awaitable[ToolEnvelope]]]:
    """Turn any exception raised by an async handler into an error envelope.

    Args:
        operation: Human-readable label used in the classified message,
            e.g. ``"name resolution"``.
    """

    def decorator(
        func: Callable[..., Awaitable[ToolEnvelope]],
    ) -> Callable[..., Awaitable[ToolEnvelope]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> ToolEnvelope:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                return error_envelope(classify_error(e, operation))

        return wrapper

    return decorator

"""Logging decorator for MCP tool handlers."""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar

from ens_mcp.core.context import request_context

logger = logging.getLogger(__name__)

T = TypeVar("T")


def mcp_tool(
    tool_name: Optional[str] = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator for async MCP tool handlers.

    Binds a correlation id and logs each invocation with its latency and
    outcome. An envelope with ``isError`` set counts as a failed call.

    Args:
        tool_name: Override tool name (defaults to function name)
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        name = tool_name or func.__name__

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            with request_context() as cid:
                start = time.perf_counter()
                success = False
                try:
                    result = await func(*args, **kwargs)
                    success = not getattr(result, "isError", False)
                    return result
                finally:
                    duration_ms = (time.perf_counter() - start) * 1000
                    logger.info(
                        "tool=%s cid=%s status=%s duration_ms=%.2f",
                        name,
                        cid,
                        "success" if success else "error",
                        duration_ms,
                    )

        return wrapper

    return decorator

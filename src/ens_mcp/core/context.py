"""Request-scoped context for tool invocations.

Each tool call gets a short correlation id, stored in a ``ContextVar`` so
that log lines emitted anywhere below the handler (transport retries,
fallback steps, rotation) can be tied back to the invocation.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    return uuid.uuid4().hex[:12]


def get_correlation_id() -> str:
    return correlation_id.get()


@contextmanager
def request_context(cid: Optional[str] = None) -> Iterator[str]:
    """Bind a correlation id for the duration of the block."""
    token = correlation_id.set(cid or generate_correlation_id())
    try:
        yield correlation_id.get()
    finally:
        correlation_id.reset(token)

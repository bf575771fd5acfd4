"""
Request context for linkedin-ads-mcp.

Each tool call runs in its own asyncio task; the correlation id lives in a
ContextVar so log lines emitted anywhere below the tool boundary (client,
retry loop) can be tied back to the invocation that produced them.

Example:
    with request_context(correlation_id=generate_correlation_id("tool")):
        await handler(params, client)
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional
from uuid import uuid4

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id(prefix: Optional[str] = None) -> str:
    """Create a new correlation id, e.g. ``tool_3f2a9c0d1e4b5a6c``."""
    value = uuid4().hex[:16]
    return f"{prefix}_{value}" if prefix else value


def get_correlation_id() -> str:
    """Return the correlation id of the current request ("" outside one)."""
    return correlation_id.get()


@contextmanager
def request_context(correlation_id_value: Optional[str] = None) -> Iterator[str]:
    """Bind a correlation id for the duration of the block."""
    value = correlation_id_value or generate_correlation_id()
    token = correlation_id.set(value)
    try:
        yield value
    finally:
        correlation_id.reset(token)


__all__ = [
    "correlation_id",
    "generate_correlation_id",
    "get_correlation_id",
    "request_context",
]

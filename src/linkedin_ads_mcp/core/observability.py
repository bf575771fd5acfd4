"""
Observability utilities for linkedin-ads-mcp.

Provides the ``mcp_tool`` decorator used at the tool boundary: every
invocation is logged with its tool name, duration, outcome and correlation
id, and a structured audit entry is written to a dedicated logger.

Example:
    @mcp_tool(tool_name="list_campaigns")
    async def list_campaigns(**kwargs) -> str:
        ...
"""

import functools
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from linkedin_ads_mcp.core.context import (
    generate_correlation_id,
    get_correlation_id,
    request_context,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class AuditEvent:
    """Structured audit event for a tool invocation."""

    tool: str
    success: bool
    duration_ms: float
    correlation_id: str
    error: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "event_type": "tool_invocation",
            "timestamp": self.timestamp,
            "tool": self.tool,
            "success": self.success,
            "duration_ms": self.duration_ms,
            "correlation_id": self.correlation_id,
        }
        if self.error:
            result["error"] = self.error
        return result


class AuditLogger:
    """
    Audit entries are written to a separate logger for easy filtering.
    """

    def __init__(self):
        self._logger = logging.getLogger(f"{__name__}.audit")

    def tool_invocation(self, event: AuditEvent) -> None:
        self._logger.info(f"AUDIT: tool_invocation {event.tool}", extra={"audit": event.to_dict()})


_audit = AuditLogger()


def mcp_tool(
    tool_name: Optional[str] = None, audit: bool = True
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator for async MCP tool handlers with observability.

    Automatically:
    - Binds a correlation id when the caller has not set one
    - Logs invocation outcome and latency
    - Creates audit log entries

    Args:
        tool_name: Override tool name (defaults to function name)
        audit: Whether to create audit log entries
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        name = tool_name or func.__name__

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            existing_corr_id = get_correlation_id()
            if existing_corr_id:
                return await _run(func, name, existing_corr_id, audit, args, kwargs)
            with request_context(generate_correlation_id(prefix="tool")) as corr_id:
                return await _run(func, name, corr_id, audit, args, kwargs)

        return wrapper

    return decorator


async def _run(
    func: Callable[..., Awaitable[T]],
    name: str,
    corr_id: str,
    audit: bool,
    args: tuple,
    kwargs: dict,
) -> T:
    start = time.perf_counter()
    success = True
    error_msg = None

    logger.debug("Invoking tool %s [%s]", name, corr_id)
    try:
        return await func(*args, **kwargs)
    except Exception as e:
        success = False
        error_msg = str(e)
        raise
    finally:
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        if success:
            logger.info("Tool %s succeeded in %.2fms [%s]", name, duration_ms, corr_id)
        else:
            logger.warning("Tool %s failed in %.2fms [%s]: %s", name, duration_ms, corr_id, error_msg)

        if audit:
            _audit.tool_invocation(
                AuditEvent(
                    tool=name,
                    success=success,
                    duration_ms=duration_ms,
                    correlation_id=corr_id,
                    error=error_msg,
                )
            )

"""Async retry for rate-limited LinkedIn calls.

Only ``RateLimitError`` is retried. A server-supplied ``retry-after`` hint is
honored exactly; without one the delay doubles per attempt starting at one
second. Every other classified error propagates on first occurrence.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from linkedin_ads_mcp.core.errors import RateLimitError, classify_error
from linkedin_ads_mcp.core.resilience.models import (
    BASE_DELAY_MS,
    DEFAULT_MAX_RETRIES,
    RetryAttempt,
    SleepFunc,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def compute_retry_delay_ms(error: RateLimitError, attempt_number: int) -> int:
    """Delay before the next attempt, in milliseconds.

    Args:
        error: The rate limit error raised by the failed attempt.
        attempt_number: Zero-based number of the failed attempt.

    Returns:
        ``retry_after * 1000`` when the server sent a hint, otherwise
        ``2 ** attempt_number * 1000``.
    """
    if error.retry_after is not None:
        return error.retry_after * 1000
    return (2**attempt_number) * BASE_DELAY_MS


async def execute_with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    max_retries: int = DEFAULT_MAX_RETRIES,
    sleep_func: Optional[SleepFunc] = None,
    operation_name: Optional[str] = None,
) -> T:
    """Run ``operation``, retrying rate-limited attempts with backoff.

    Args:
        operation: Zero-argument coroutine factory performing one remote call.
        max_retries: Retries allowed after the first attempt (default 3,
            i.e. at most 4 attempts).
        sleep_func: Injectable sleep function for time control in tests.
        operation_name: Label used in retry log lines.

    Returns:
        Result of the first successful attempt.

    Raises:
        LinkedInAdsError: The classified error of the last attempt. A
            ``RateLimitError`` once retries are exhausted, any other class
            immediately.
        RuntimeError: Failures that carry no response status.

    Testing example:
        >>> delays = []
        >>> async def fake_sleep(s): delays.append(s)
        >>> await execute_with_retry(op, sleep_func=fake_sleep)
    """
    _sleep = sleep_func or asyncio.sleep
    state = RetryAttempt(max_attempts=max_retries + 1)
    label = operation_name or getattr(operation, "__name__", "operation")

    while True:
        try:
            return await operation()
        except Exception as e:
            classified = classify_error(e)

            if not isinstance(classified, RateLimitError) or state.attempt_number >= max_retries:
                if classified is e:
                    raise
                raise classified from e

            state.computed_delay_ms = compute_retry_delay_ms(classified, state.attempt_number)
            logger.warning(
                "Rate limited on %s (attempt %d/%d), retrying in %dms",
                label,
                state.attempt_number + 1,
                state.max_attempts,
                state.computed_delay_ms,
            )
            await _sleep(state.computed_delay_ms / 1000)
            state.attempt_number += 1

"""Retry utilities for LinkedIn API calls."""

from linkedin_ads_mcp.core.resilience.models import (
    BASE_DELAY_MS,
    DEFAULT_MAX_RETRIES,
    RetryAttempt,
    SleepFunc,
)
from linkedin_ads_mcp.core.resilience.retry import (
    compute_retry_delay_ms,
    execute_with_retry,
)

__all__ = [
    "BASE_DELAY_MS",
    "DEFAULT_MAX_RETRIES",
    "RetryAttempt",
    "SleepFunc",
    "compute_retry_delay_ms",
    "execute_with_retry",
]

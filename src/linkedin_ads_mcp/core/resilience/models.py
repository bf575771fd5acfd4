"""Retry data models and protocols.

Defines the core types used by the retry executor:
- RetryAttempt for per-call retry bookkeeping
- SleepFunc protocol for injectable async sleep
"""

from dataclasses import dataclass
from typing import Protocol

DEFAULT_MAX_RETRIES = 3
BASE_DELAY_MS = 1000


@dataclass
class RetryAttempt:
    """Retry state for one logical operation.

    Lives only for the duration of a single ``execute_with_retry`` call.
    """

    attempt_number: int = 0
    max_attempts: int = DEFAULT_MAX_RETRIES + 1
    computed_delay_ms: int = 0

    @property
    def retries_remaining(self) -> int:
        return self.max_attempts - 1 - self.attempt_number


class SleepFunc(Protocol):
    """Protocol for injectable sleep function."""

    async def __call__(self, seconds: float) -> None: ...

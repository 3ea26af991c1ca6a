"""
Error classification and retry timing for the AI client.
"""

import asyncio
from typing import Awaitable, Callable

from ..core.config import AIConfig
from ..core.errors import AIError, status_code_of


Sleep = Callable[[float], Awaitable[None]]


class ErrorClassifier:
    """
    Decides whether a failed attempt is worth retrying.

    Domain errors carry their own answer (`AIError.retryable`). Authentication
    failures (HTTP 401) are never retried. Anything else - network errors,
    timeouts, transient provider errors - is.
    """

    def is_retryable(self, error: BaseException) -> bool:
        if isinstance(error, AIError):
            return error.retryable
        if status_code_of(error) == 401:
            return False
        return True


class RetryPolicy:
    """Attempt budget and exponential delay between attempts."""

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        backoff: float = 2.0,
        max_delay: float = 10.0,
        sleep: Sleep = asyncio.sleep,
    ):
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.backoff = backoff
        self.max_delay = max_delay
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: AIConfig, sleep: Sleep = asyncio.sleep) -> "RetryPolicy":
        return cls(
            max_retries=config.max_retries,
            base_delay=config.retry_base_delay,
            backoff=config.retry_backoff,
            max_delay=config.retry_max_delay,
            sleep=sleep,
        )

    def delay(self, attempt_number: int) -> float:
        """Seconds to wait after failed attempt `attempt_number` (1-based)."""
        return min(self.base_delay * self.backoff ** (attempt_number - 1), self.max_delay)

    def can_retry(self, attempt_number: int) -> bool:
        return attempt_number < self.max_retries

    async def wait(self, attempt_number: int) -> None:
        await self._sleep(self.delay(attempt_number))

"""Bounded exponential-backoff retry for async operations."""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")

# Lowercased substrings that mark an error message as transient.
TRANSIENT_ERROR_MARKERS: tuple[str, ...] = (
    "timeout",
    "too many scripts running simultaneously",
    "service invoked too many times",
    "rate",
    "exceeded",
    "503",
    "429",
)


def is_transient_error(error: BaseException) -> bool:
    """Return True when the error message looks like a retryable failure."""
    message = str(error).lower()
    if not message:
        message = type(error).__name__.lower()
    return any(marker in message for marker in TRANSIENT_ERROR_MARKERS)


def _default_jitter(max_jitter: float) -> float:
    return random.uniform(0, max_jitter)  # noqa: S311


@dataclass
class RetryPolicy:
    """Runs an operation up to ``max_attempts + 1`` times with backoff."""

    max_attempts: int = 3
    base_delay: float = 0.8
    max_jitter: float = 0.25
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep)
    jitter: Callable[[float], float] = field(default=_default_jitter)

    def delay_for(self, attempt: int, base_delay: float | None = None) -> float:
        """Return the wait before retrying after the given zero-based attempt."""
        base = self.base_delay if base_delay is None else base_delay
        return base * 2**attempt + self.jitter(self.max_jitter)

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        classifier: Callable[[BaseException], bool] = is_transient_error,
        max_attempts: int | None = None,
        base_delay: float | None = None,
    ) -> T:
        """Run the operation, retrying only errors the classifier accepts."""
        retries = self.max_attempts if max_attempts is None else max(0, max_attempts)
        attempt = 0
        while True:
            try:
                return await operation()
            except Exception as exc:
                if attempt >= retries or not classifier(exc):
                    raise
                wait = self.delay_for(attempt, base_delay)
                _logger.warning(
                    "Transient failure, retrying: attempt=%s wait=%.2fs error=%s",
                    attempt + 1,
                    wait,
                    exc,
                )
                await self.sleep(wait)
                attempt += 1

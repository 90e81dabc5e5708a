"""
Retry framework with exponential backoff for asynchronous API calls.

The policy decides *whether* to retry from the raised exception: anything
exposing ``error_category == "retryable"`` (see ``NetworkError``) is retried,
everything else propagates on the first failure.
"""

import asyncio
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from src.utils.core.logger import get_logger

logger = get_logger(__name__, utility="utils")

T = TypeVar("T")


class RetryError(Exception):
    """Exception raised when all retry attempts are exhausted."""

    def __init__(self, message: str, last_exception: Exception, attempts: int):
        super().__init__(message)
        self.last_exception = last_exception
        self.attempts = attempts


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 4
    base_delay: float = 0.25  # seconds
    max_delay: float = 30.0  # seconds
    backoff_factor: float = 2.0
    jitter: bool = False


def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """Delay to wait after the failed zero-based ``attempt``.

    Without jitter this yields base, base*factor, base*factor**2, ...
    """
    delay = min(config.base_delay * (config.backoff_factor**attempt), config.max_delay)

    if config.jitter:
        jitter_range = delay * 0.25
        delay += random.uniform(-jitter_range, jitter_range)

    return max(0.0, delay)


def is_retryable_exception(exception: BaseException) -> bool:
    """Check if an exception should trigger a retry."""
    return getattr(exception, "error_category", None) == "retryable"


async def execute_with_async_retry(
    func: Callable[..., Awaitable[T]],
    config: RetryConfig,
    *args: Any,
    **kwargs: Any,
) -> T:
    """Await ``func(*args, **kwargs)`` under the retry policy in ``config``.

    Raises:
        The original exception when it is not retryable.
        RetryError: when every attempt failed with a retryable exception.
    """
    last_exception = None

    for attempt in range(config.max_attempts):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            if not is_retryable_exception(e):
                logger.debug(f"Non-retryable exception: {type(e).__name__}: {e}")
                raise

            last_exception = e
            if attempt < config.max_attempts - 1:
                delay = calculate_delay(attempt, config)
                logger.warning(
                    f"Attempt {attempt + 1}/{config.max_attempts} failed "
                    f"({type(e).__name__}). Retrying in {delay:.2f}s: {e}"
                )
                await asyncio.sleep(delay)
            else:
                logger.error(
                    f"All {config.max_attempts} attempts failed. "
                    f"Last error: {type(e).__name__}: {e}"
                )

    raise RetryError(
        f"Async operation failed after {config.max_attempts} attempts",
        last_exception,
        config.max_attempts,
    )

# Shared infrastructure utilities

from .core.logger import get_logger, shutdown_logging
from .core.retry import (
    RetryConfig,
    RetryError,
    calculate_delay,
    execute_with_async_retry,
    is_retryable_exception,
)

__all__ = [
    "get_logger",
    "shutdown_logging",
    "RetryConfig",
    "RetryError",
    "calculate_delay",
    "execute_with_async_retry",
    "is_retryable_exception",
]

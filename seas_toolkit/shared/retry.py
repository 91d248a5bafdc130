"""
Retry utilities for handling transient failures.

This module provides helpers for retrying operations with either a fixed
delay (the default for HTTP calls) or exponential backoff with optional
jitter.

Exception Handling:
- By default, retries on RetryableException and low-level connection errors
- NonRetryableException is never retried (propagates immediately)
- Can customize retryable_exceptions per operation
"""

import asyncio
import logging
import random
import time
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

from seas_toolkit.shared.exceptions import RetryableException

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Contract reverts are not listed: a revert is final.
DEFAULT_RETRYABLE_EXCEPTIONS: Tuple[Type[Exception], ...] = (
    RetryableException,
    ConnectionError,
    TimeoutError,
    OSError,
)


def compute_delay(
    attempt: int,
    base_delay: float,
    max_delay: float,
    exponential: bool,
    jitter: bool = False,
) -> float:
    """
    Delay to wait after the given (zero-based) failed attempt.

    Fixed delay returns ``base_delay`` unchanged. Exponential doubles per
    attempt, capped at ``max_delay``. Jitter scales the result by a random
    factor in [0.5, 1.0].
    """
    if exponential:
        delay = min(base_delay * (2**attempt), max_delay)
    else:
        delay = base_delay
    if jitter:
        delay *= random.uniform(0.5, 1.0)
    return delay


async def retry_async_operation(
    operation: Callable[..., Any],
    *args: Any,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential: bool = True,
    jitter: bool = False,
    retryable_exceptions: Optional[Tuple[Type[Exception], ...]] = None,
    operation_name: Optional[str] = None,
    on_retry: Optional[Callable[[Exception, int], None]] = None,
    **kwargs: Any,
) -> Any:
    """
    Retry an async operation with configurable backoff.

    Args:
        operation: Async function to call
        *args: Positional arguments for the operation
        max_attempts: Total attempts including the first one
        base_delay: Delay between retries in seconds
        max_delay: Maximum delay between retries
        exponential: Use exponential backoff instead of a fixed delay
        jitter: Randomize the delay to spread out concurrent retries
        retryable_exceptions: Exception types to retry on
        operation_name: Optional name for logging
        on_retry: Optional callback called on each retry with (exception, attempt)
        **kwargs: Keyword arguments for the operation

    Returns:
        Result of the operation

    Raises:
        The last retryable exception once attempts are exhausted, or any
        non-retryable exception immediately.

    Example:
        result = await retry_async_operation(
            fetch_data,
            url,
            max_attempts=4,
            base_delay=1.0,
            exponential=False,
        )
    """
    if retryable_exceptions is None:
        retryable_exceptions = DEFAULT_RETRYABLE_EXCEPTIONS

    name = operation_name or getattr(operation, "__name__", "operation")
    last_exception: Optional[Exception] = None

    for attempt in range(max_attempts):
        try:
            return await operation(*args, **kwargs)
        except retryable_exceptions as e:
            last_exception = e

            if attempt < max_attempts - 1:
                delay = compute_delay(
                    attempt, base_delay, max_delay, exponential, jitter
                )

                logger.warning(
                    f"Attempt {attempt + 1}/{max_attempts} failed for "
                    f"{name}: {e}. Retrying in {delay:.1f}s..."
                )

                if on_retry:
                    on_retry(e, attempt + 1)

                await asyncio.sleep(delay)

    if last_exception:
        raise last_exception
    raise RuntimeError(
        "Unexpected state: no exception but all attempts exhausted"
    )


def retry_sync_operation(
    operation: Callable[..., T],
    *args: Any,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential: bool = True,
    jitter: bool = False,
    retryable_exceptions: Optional[Tuple[Type[Exception], ...]] = None,
    operation_name: Optional[str] = None,
    **kwargs: Any,
) -> T:
    """
    Retry a synchronous operation with configurable backoff.

    Used for blocking RPC reads, which run in an executor thread.
    """
    if retryable_exceptions is None:
        retryable_exceptions = DEFAULT_RETRYABLE_EXCEPTIONS

    name = operation_name or getattr(operation, "__name__", "operation")
    last_exception: Optional[Exception] = None

    for attempt in range(max_attempts):
        try:
            return operation(*args, **kwargs)
        except retryable_exceptions as e:
            last_exception = e

            if attempt < max_attempts - 1:
                delay = compute_delay(
                    attempt, base_delay, max_delay, exponential, jitter
                )

                logger.warning(
                    f"Attempt {attempt + 1}/{max_attempts} failed for "
                    f"{name}: {e}. Retrying in {delay:.1f}s..."
                )

                time.sleep(delay)

    if last_exception:
        raise last_exception
    raise RuntimeError(
        "Unexpected state: no exception but all attempts exhausted"
    )


class RetryConfig:
    """
    Configuration class for retry behavior.

    Can be used to share retry settings across multiple operations.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        exponential: bool = True,
        jitter: bool = False,
        retryable_exceptions: Optional[Tuple[Type[Exception], ...]] = None,
    ):
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential = exponential
        self.jitter = jitter
        self.retryable_exceptions = (
            retryable_exceptions or DEFAULT_RETRYABLE_EXCEPTIONS
        )

    def run_sync(
        self,
        operation: Callable[..., T],
        *args: Any,
        operation_name: Optional[str] = None,
        **kwargs: Any,
    ) -> T:
        """Run a blocking operation under this config."""
        return retry_sync_operation(
            operation,
            *args,
            max_attempts=self.max_attempts,
            base_delay=self.base_delay,
            max_delay=self.max_delay,
            exponential=self.exponential,
            jitter=self.jitter,
            retryable_exceptions=self.retryable_exceptions,
            operation_name=operation_name,
            **kwargs,
        )


# Pre-configured retry configs for common use cases
RPC_RETRY_CONFIG = RetryConfig(
    max_attempts=3,
    base_delay=1.0,
    max_delay=10.0,
    exponential=True,
    jitter=True,
)

# Fixed one second delay, three retries after the first attempt
HTTP_RETRY_CONFIG = RetryConfig(
    max_attempts=4,
    base_delay=1.0,
    max_delay=1.0,
    exponential=False,
)

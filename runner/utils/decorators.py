"""
Utility decorators for the agent runner.
"""

import asyncio
import functools
import random
from collections.abc import Callable

from loguru import logger


def with_retry(
    max_retries=3,
    base_backoff=1.5,
    jitter: float = 1.0,
    retry_on: tuple[type[Exception], ...] | None = None,
    skip_on: tuple[type[Exception], ...] | None = None,
    skip_if: Callable[[Exception], bool] | None = None,
):
    """
    Retry an async function with exponential backoff.

    Args:
        max_retries: Total attempts, including the first one
        base_backoff: Delay before the second attempt; doubles every attempt
        jitter: Upper bound of the random delay added to each backoff
        retry_on: Exception types worth retrying. None retries every exception.
        skip_on: Exception types never retried, even when they match retry_on
        skip_if: Predicate returning True for exceptions that must not be retried
    """

    def should_retry(e: Exception) -> bool:
        if skip_on is not None and isinstance(e, skip_on):
            return False
        if skip_if is not None and skip_if(e):
            return False
        return retry_on is None or isinstance(e, retry_on)

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            for attempt in range(1, max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not should_retry(e):
                        raise
                    if attempt >= max_retries:
                        logger.error(
                            f"Error in {func.__name__}: {e!r}, after {max_retries} attempts"
                        )
                        raise

                    delay = base_backoff * (2 ** (attempt - 1))
                    if jitter > 0:
                        delay += random.uniform(0, jitter)
                    logger.warning(
                        f"Error in {func.__name__}: {e!r}, retrying in {delay:.1f}s "
                        f"(attempt {attempt}/{max_retries})"
                    )
                    await asyncio.sleep(delay)

        return wrapper

    return decorator

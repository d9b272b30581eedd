"""Bounded retries with randomized exponential backoff."""
import asyncio
import random
from typing import Awaitable, Callable, TypeVar

from src.config import (
    DEFAULT_MAX_ATTEMPTS,
    RETRY_BASE_DELAY,
    RETRY_JITTER,
    RETRY_MAX_DELAY,
)
from src.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


def backoff_delay(attempt: int, rng: Callable[[], float] = random.random) -> float:
    """Delay in seconds before the next try, after `attempt` failures."""
    return min(RETRY_BASE_DELAY * 2 ** attempt + rng() * RETRY_JITTER, RETRY_MAX_DELAY)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    rng: Callable[[], float] = random.random,
    label: str = "operation",
) -> T:
    """
    Await operation() until it succeeds or max_attempts calls have failed.

    Only the attempt count is bounded, not elapsed time. The error of the
    last attempt is re-raised as is.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except Exception as e:
            attempt += 1
            if attempt >= max_attempts:
                logger.warning(f"{label}: failed after {attempt} attempt(s): {e}")
                raise

            delay = backoff_delay(attempt, rng)
            logger.info(f"{label}: attempt {attempt}/{max_attempts} failed ({e}) -> retry in {delay:.1f}s")
            await sleep(delay)

"""
Standalone waiting and retry helpers.

``wait`` implements the engine's inter-attempt delay:
- ``delay == 0`` yields once to the event loop without a timer
- ``delay > 0`` sleeps for ``delay`` seconds
- ``delay < 0`` does not wait at all
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def sleep(seconds: float) -> None:
    """Wait ``seconds`` on the running event loop."""
    await asyncio.sleep(seconds)


async def wait(delay: float) -> None:
    """Inter-attempt wait used by the retry loops."""
    if delay < 0:
        return
    await asyncio.sleep(delay)


async def retry(
    fn: Callable[[], Awaitable[T]],
    retries: int = 0,
    delay: float = 0.0,
) -> T:
    """
    Call ``fn`` until it succeeds, at most ``retries + 1`` times.

    Args:
        fn: Zero-argument coroutine function
        retries: Additional attempts after the first failure
        delay: Seconds to wait before each retry (only when positive)

    Returns:
        The first successful result

    Raises:
        Exception: The error of the last attempt, unchanged
    """
    remaining = retries
    while True:
        try:
            return await fn()
        except Exception as error:
            if remaining <= 0:
                raise
            remaining -= 1
            logger.debug("Retrying after %r (%d retries left)", error, remaining)
            if delay > 0:
                await asyncio.sleep(delay)

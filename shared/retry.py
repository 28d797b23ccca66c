"""Async retry helper with exponential backoff.

Usage:
    from shared.retry import retry_call

    info = await retry_call(client.ping, max_retries=settings.startup_retries)
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")


def backoff_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """Delay before retry number ``attempt + 1`` (0-based attempt)."""
    return min(base_delay * (2**attempt), max_delay)


async def retry_call(
    func: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    name: str | None = None,
) -> T:
    """Await ``func()`` up to ``max_retries + 1`` times.

    The last exception is re-raised once retries are exhausted.
    """
    name = name or getattr(func, "__name__", repr(func))
    for attempt in range(max_retries + 1):
        try:
            return await func()
        except exceptions as exc:
            if attempt == max_retries:
                raise
            delay = backoff_delay(attempt, base_delay, max_delay)
            logger.warning(
                "retry_attempt",
                func=name,
                attempt=attempt + 1,
                max_retries=max_retries,
                delay=delay,
                error=str(exc),
            )
            await sleep(delay)
    raise RuntimeError("unreachable")  # pragma: no cover

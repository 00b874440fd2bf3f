# src/hero_slider/retry.py
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

import structlog

from src.exceptions import RetriesExhaustedError, TransientNetworkError

logger = structlog.get_logger()
T = TypeVar("T")

RETRYABLE: tuple[type[BaseException], ...] = (TransientNetworkError,)


async def attempt(
    coro_factory: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = 3,
    delay: float = 1.0,
    retry_on: tuple[type[BaseException], ...] = RETRYABLE,
    operation: str = "",
) -> T:
    """Run an async call up to ``max_attempts`` times with a fixed delay.

    Only ``retry_on`` failures are retried; anything else propagates from
    the attempt that raised it. When every attempt fails the last error is
    wrapped in ``RetriesExhaustedError``.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")
    for n in range(1, max_attempts + 1):
        try:
            return await coro_factory()
        except retry_on as e:
            if n == max_attempts:
                logger.error("retry_exhausted", op=operation, error=str(e), attempts=n)
                raise RetriesExhaustedError(e, attempts=n, operation=operation) from e
            logger.warning("retry_scheduled", op=operation, attempt=n,
                           delay=delay, error=str(e))
            await asyncio.sleep(delay)
    raise AssertionError("unreachable")

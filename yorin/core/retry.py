"""yorin.core.retry

Retry with exponential backoff.

Attempt budget is strict: ``max_attempts`` is the number of calls, not the
number of *re*-tries. Delays between attempts are ``d, 2d, 4d, ...``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from yorin.core.exceptions import RetryExhaustedError

T = TypeVar("T")

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[object]]


def backoff_delays_ms(max_attempts: int, initial_delay_ms: int) -> list[int]:
    """Delays (ms) slept between consecutive attempts; one fewer than attempts."""

    return [initial_delay_ms * 2**i for i in range(max(max_attempts - 1, 0))]


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    initial_delay_ms: int = 1000,
    *,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    sleep: Sleep | None = None,
) -> T:
    """Await ``operation()`` up to ``max_attempts`` times.

    Returns the first successful result. When every attempt fails the most
    recent failure is re-raised unchanged; earlier ones are discarded.
    Exceptions outside ``retry_on`` propagate immediately.

    Raises:
        RetryExhaustedError: if ``max_attempts`` is 0 (no attempt is made).
    """

    sleep_ = sleep or asyncio.sleep
    delays_ms = backoff_delays_ms(max_attempts, initial_delay_ms)
    last_exc: BaseException | None = None

    for attempt in range(max_attempts):
        try:
            return await operation()
        except retry_on as e:
            last_exc = e
            if attempt >= len(delays_ms):
                break
            delay_ms = delays_ms[attempt]
            logger.debug(
                "retry_scheduled",
                extra={"attempt": attempt + 1, "max_attempts": max_attempts, "delay_ms": delay_ms, "error": str(e)},
            )
            await sleep_(delay_ms / 1000)

    if last_exc is None:
        raise RetryExhaustedError("No attempts succeeded")
    raise last_exc

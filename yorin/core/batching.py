"""yorin.core.batching

The in-memory queue and the chunker.

Queue discipline:
- enqueue appends to the tail
- drain swaps the live list for a fresh one and hands the old list to the caller

Neither operation awaits, so under asyncio an event is either in the drained
snapshot or in the live queue, never both and never neither.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from yorin.core.models import ServerEvent

T = TypeVar("T")

# Hard ceiling per HTTP request, independent of the configured batch size.
MAX_BATCH_EVENTS = 1000


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split ``items`` into ordered chunks of at most ``size``. The last may be shorter."""

    if size < 1:
        raise ValueError("chunk size must be >= 1")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


class BatchQueue:
    """Ordered, appendable buffer of events owned by one delivery client."""

    def __init__(self) -> None:
        self._events: list[ServerEvent] = []

    def enqueue(self, event: ServerEvent) -> int:
        """Append ``event``; return the new queue length."""

        self._events.append(event)
        return len(self._events)

    def drain(self) -> list[ServerEvent]:
        """Atomically take every queued event, leaving the queue empty."""

        if not self._events:
            return []
        drained, self._events = self._events, []
        return drained

    def __len__(self) -> int:
        return len(self._events)

    def __bool__(self) -> bool:
        return bool(self._events)

"""
Bounded work queue with an explicit poison-pill shutdown protocol.

The producer blocks on ``put`` whenever the queue is full, which bounds the
number of candidates in flight to the queue capacity regardless of how many
the generator yields. Shutdown is signalled by ``close(n)``, which enqueues
exactly one EndOfWork marker per worker.
"""

from __future__ import annotations

import asyncio

from namesweep.domain.models import Candidate, EndOfWork, WorkItem
from namesweep.errors import QueueClosedError

DEFAULT_CAPACITY = 100


class WorkQueue:
    """
    Single-producer / multi-consumer channel of work items.

    Attributes
    ----------
    capacity : int
        Maximum number of items buffered before ``put`` blocks.
    blocked_puts : int
        How many ``put`` calls found the queue full and had to wait.
    stops_sent : int
        EndOfWork markers enqueued by ``close``.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self.blocked_puts = 0
        self.stops_sent = 0
        self._closed = False
        self._queue: asyncio.Queue[WorkItem] = asyncio.Queue(maxsize=capacity)

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        return self._queue.qsize()

    async def put(self, candidate: Candidate) -> None:
        """Enqueue a candidate, waiting while the queue is full."""
        if self._closed:
            raise QueueClosedError(f"queue is closed, cannot enqueue '{candidate.name}'")
        if self._queue.full():
            self.blocked_puts += 1
        await self._queue.put(candidate)

    async def get(self) -> WorkItem:
        """Receive the next item; each item is delivered to exactly one caller."""
        return await self._queue.get()

    async def close(self, num_workers: int) -> None:
        """
        Enqueue one EndOfWork marker per worker.

        Candidates may no longer be enqueued afterwards.
        """
        self._closed = True
        for _ in range(num_workers):
            if self._queue.full():
                self.blocked_puts += 1
            await self._queue.put(EndOfWork())
            self.stops_sent += 1


__all__ = ["DEFAULT_CAPACITY", "WorkQueue"]

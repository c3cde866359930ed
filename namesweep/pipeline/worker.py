"""
Workers and the fixed-size worker pool.

Each worker loops: receive one work item; for a Candidate, check it and fold
the outcome into the aggregator; for EndOfWork, terminate. A terminated worker
never re-enters the loop.
"""

from __future__ import annotations

import asyncio
import enum
from typing import List

from namesweep.domain.models import Candidate, EndOfWork
from namesweep.errors import TransportError
from namesweep.pipeline.aggregator import ResultAggregator
from namesweep.pipeline.checker import AvailabilityChecker
from namesweep.pipeline.work_queue import WorkQueue
from namesweep.utils.logging import get_logger

log = get_logger(__name__)


class WorkerState(enum.Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


class Worker:
    """
    One consumer bound to the shared queue, checker and aggregator.

    Parameters
    ----------
    worker_id : int
        Position in the pool, used for logging only.
    fail_fast : bool
        When True a TransportError propagates out of ``run`` and aborts the
        sweep; otherwise the candidate is logged, counted as a failure and
        treated as unavailable.
    """

    def __init__(
        self,
        worker_id: int,
        queue: WorkQueue,
        checker: AvailabilityChecker,
        aggregator: ResultAggregator,
        fail_fast: bool = False,
    ) -> None:
        self.worker_id = worker_id
        self._queue = queue
        self._checker = checker
        self._aggregator = aggregator
        self._fail_fast = fail_fast
        self.state = WorkerState.RUNNING
        self.processed = 0
        self.stops_consumed = 0

    async def run(self) -> None:
        if self.state is WorkerState.TERMINATED:
            raise RuntimeError(f"worker {self.worker_id} has already terminated")
        while True:
            item = await self._queue.get()
            if isinstance(item, EndOfWork):
                self.stops_consumed += 1
                self.state = WorkerState.TERMINATED
                return
            await self._handle(item)

    async def _handle(self, candidate: Candidate) -> None:
        self.processed += 1
        try:
            available = await self._checker.is_available(candidate.name)
        except TransportError as exc:
            if self._fail_fast:
                raise
            log.warning(
                f"Request for '{candidate.name}' failed; counting it as unavailable",
                extra={"worker": self.worker_id, "candidate": candidate.name, "error": str(exc.cause)},
            )
            await self._aggregator.record_failure(candidate.name, exc)
            return

        if available:
            await self._aggregator.record_available(candidate.name)
        else:
            await self._aggregator.record_unavailable(candidate.name)


class WorkerPool:
    """
    Fixed number of workers sharing one queue.

    The pool is active while at least one worker is still running.
    """

    def __init__(
        self,
        size: int,
        queue: WorkQueue,
        checker: AvailabilityChecker,
        aggregator: ResultAggregator,
        fail_fast: bool = False,
    ) -> None:
        if size < 1:
            raise ValueError(f"pool size must be at least 1, got {size}")
        self.size = size
        self.workers: List[Worker] = [
            Worker(i, queue, checker, aggregator, fail_fast=fail_fast) for i in range(size)
        ]

    def start(self, group: asyncio.TaskGroup) -> List[asyncio.Task[None]]:
        """Spawn every worker as a task in ``group``."""
        return [
            group.create_task(worker.run(), name=f"sweep-worker-{worker.worker_id}")
            for worker in self.workers
        ]

    @property
    def active(self) -> bool:
        return any(w.state is WorkerState.RUNNING for w in self.workers)

    @property
    def stops_consumed(self) -> int:
        return sum(w.stops_consumed for w in self.workers)

    @property
    def processed(self) -> int:
        return sum(w.processed for w in self.workers)


__all__ = ["Worker", "WorkerPool", "WorkerState"]

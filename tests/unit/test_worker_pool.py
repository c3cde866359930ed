from __future__ import annotations

import asyncio
import io
from pathlib import Path
from typing import Iterator

import pytest

from namesweep.domain.models import Candidate, EndOfWork, WorkItem
from namesweep.errors import TransportError
from namesweep.pipeline.aggregator import OutputLog, ResultAggregator, ResultSet
from namesweep.pipeline.work_queue import WorkQueue
from namesweep.pipeline.worker import Worker, WorkerPool, WorkerState

POOL_SIZE = 5


class _ScriptedQueue:
    """Hands out a fixed sequence of items, leaving the rest untouched."""

    def __init__(self, items: list[WorkItem]) -> None:
        self._items: Iterator[WorkItem] = iter(items)
        self.remaining = list(items)

    async def get(self) -> WorkItem:
        item = next(self._items)
        self.remaining.pop(0)
        return item


@pytest.fixture()
def aggregator(output_path: Path) -> Iterator[ResultAggregator]:
    handle = output_path.open("a", encoding="utf-8")
    try:
        yield ResultAggregator(ResultSet(), OutputLog(handle), io.StringIO())
    finally:
        handle.close()


@pytest.mark.asyncio
async def test_worker_stops_at_its_marker_and_leaves_later_items(
    aggregator: ResultAggregator, checker_factory
) -> None:
    queue = _ScriptedQueue([Candidate("a"), EndOfWork(), Candidate("b")])
    checker = checker_factory(available={"a", "b"})
    worker = Worker(0, queue, checker, aggregator)  # type: ignore[arg-type]

    await worker.run()

    assert worker.state is WorkerState.TERMINATED
    assert worker.stops_consumed == 1
    assert worker.processed == 1
    assert checker.calls == ["a"]
    assert queue.remaining == [Candidate("b")]
    assert aggregator.available == ["a"]


@pytest.mark.asyncio
async def test_terminated_worker_cannot_be_restarted(
    aggregator: ResultAggregator, checker_factory
) -> None:
    worker = Worker(0, _ScriptedQueue([EndOfWork()]), checker_factory(()), aggregator)  # type: ignore[arg-type]
    await worker.run()

    with pytest.raises(RuntimeError, match="already terminated"):
        await worker.run()


@pytest.mark.asyncio
async def test_transport_failure_is_recorded_and_worker_continues(
    aggregator: ResultAggregator, checker_factory
) -> None:
    queue = _ScriptedQueue([Candidate("x"), Candidate("y"), EndOfWork()])
    checker = checker_factory(available={"y"}, failing={"x"})
    worker = Worker(0, queue, checker, aggregator, fail_fast=False)  # type: ignore[arg-type]

    await worker.run()

    assert worker.state is WorkerState.TERMINATED
    assert aggregator.failures == 1
    assert aggregator.available == ["y"]


@pytest.mark.asyncio
async def test_fail_fast_worker_propagates_transport_error(
    aggregator: ResultAggregator, checker_factory
) -> None:
    queue = _ScriptedQueue([Candidate("x"), Candidate("y"), EndOfWork()])
    checker = checker_factory(available=(), failing={"x"})
    worker = Worker(0, queue, checker, aggregator, fail_fast=True)  # type: ignore[arg-type]

    with pytest.raises(TransportError):
        await worker.run()

    assert checker.calls == ["x"]
    assert aggregator.failures == 0


@pytest.mark.asyncio
async def test_pool_consumes_exactly_one_marker_per_worker(
    aggregator: ResultAggregator, checker_factory
) -> None:
    queue = WorkQueue(capacity=4)
    checker = checker_factory(available={"c", "f"})
    pool = WorkerPool(POOL_SIZE, queue, checker, aggregator)
    assert pool.active is True

    async with asyncio.TaskGroup() as group:
        pool.start(group)
        for name in "abcdefgh":
            await queue.put(Candidate(name))
        await queue.close(POOL_SIZE)

    assert pool.active is False
    assert pool.stops_consumed == POOL_SIZE
    assert all(w.stops_consumed == 1 for w in pool.workers)
    assert pool.processed == 8
    assert sorted(checker.calls) == list("abcdefgh")
    assert sorted(aggregator.available) == ["c", "f"]
    assert queue.qsize() == 0


def test_pool_size_must_be_positive(aggregator: ResultAggregator, checker_factory) -> None:
    with pytest.raises(ValueError):
        WorkerPool(0, WorkQueue(), checker_factory(()), aggregator)

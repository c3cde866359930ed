"""
Orchestrator: the composition root of a sweep.

Builds the queue, opens the output file, starts the worker pool, feeds every
generated candidate into the queue, sends one stop marker per worker, waits
for the pool to drain and returns a RunSummary.

Usage (example from CLI):
    from namesweep.orchestrator import SweepConfig, run_sweep

    summary = run_sweep(SweepConfig.from_settings(get_settings(), word_length=2))
    print(summary.available)
"""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Optional, TextIO

from namesweep.config import Settings, get_settings
from namesweep.domain.models import Candidate, RunSummary
from namesweep.errors import OutputFileError, SweepAborted, TransportError
from namesweep.generator import ALPHABET, count_combinations, generate_combinations
from namesweep.pipeline.aggregator import OutputLog, ResultAggregator, ResultSet
from namesweep.pipeline.checker import AvailabilityChecker, HttpAvailabilityChecker, open_session
from namesweep.pipeline.work_queue import WorkQueue
from namesweep.pipeline.worker import WorkerPool
from namesweep.utils.logging import get_logger
from namesweep.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)


@dataclass(frozen=True)
class SweepConfig:
    """Per-run parameters, resolved from Settings and the CLI."""

    word_length: int
    num_workers: int = 1600
    queue_capacity: int = 100
    output_file: Path | str = "valid_combinations.txt"
    endpoint_url: str = "https://passport.twitch.tv/usernames"
    fail_fast: bool = False

    def __post_init__(self) -> None:
        if self.word_length < 0:
            raise ValueError(f"word_length must be non-negative, got {self.word_length}")
        if self.num_workers < 1:
            raise ValueError(f"num_workers must be at least 1, got {self.num_workers}")
        if self.queue_capacity < 1:
            raise ValueError(f"queue_capacity must be at least 1, got {self.queue_capacity}")

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, word_length: Optional[int] = None
    ) -> "SweepConfig":
        settings = settings or get_settings()
        return cls(
            word_length=settings.default_word_length if word_length is None else word_length,
            num_workers=settings.num_workers,
            queue_capacity=settings.queue_capacity,
            output_file=settings.output_file,
            endpoint_url=settings.endpoint_url,
            fail_fast=settings.fail_fast,
        )


def _open_output(path: Path | str) -> TextIO:
    try:
        return open(path, "a", encoding="utf-8")
    except OSError as exc:
        raise OutputFileError(str(path), exc) from exc


@contextlib.asynccontextmanager
async def _default_checker(config: SweepConfig) -> AsyncIterator[AvailabilityChecker]:
    async with open_session(config.num_workers) as session:
        yield HttpAvailabilityChecker(session, config.endpoint_url)


_EXACT_COUNT_LIMIT = 10**12


def _describe_count(word_length: int) -> str:
    """Candidate total for logs; astronomically large totals stay symbolic."""
    total = count_combinations(word_length)
    if total < _EXACT_COUNT_LIMIT:
        return str(total)
    return f"{len(ALPHABET)}^{word_length}"


async def _feed(queue: WorkQueue, word_length: int, num_workers: int) -> int:
    """Enqueue every candidate, then one stop marker per worker."""
    enqueued = 0
    for name in generate_combinations(word_length):
        await queue.put(Candidate(name))
        enqueued += 1
    await queue.close(num_workers)
    log.debug(
        "All candidates enqueued",
        extra={"enqueued": enqueued, "stops_sent": queue.stops_sent},
    )
    return enqueued


def _first_transport_error(group: BaseExceptionGroup) -> Optional[TransportError]:
    matched = group.subgroup(TransportError)
    if matched is None:
        return None
    exc = matched.exceptions[0]
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc  # type: ignore[return-value]


def _build_summary(
    config: SweepConfig,
    aggregator: ResultAggregator,
    pool: WorkerPool,
    queue: WorkQueue,
    stats: ProfileStats,
) -> RunSummary:
    duration = stats.duration_seconds
    return RunSummary(
        word_length=config.word_length,
        checked=aggregator.checked,
        available=aggregator.available,
        unavailable=aggregator.unavailable,
        failures=aggregator.failures,
        workers=pool.size,
        stops_consumed=pool.stops_consumed,
        blocked_puts=queue.blocked_puts,
        duration_seconds=round(duration, 3),
        throughput_per_sec=round(aggregator.checked / duration, 2) if duration else 0.0,
        peak_rss_bytes=stats.peak_rss_bytes,
    )


async def sweep(
    config: SweepConfig,
    checker: Optional[AvailabilityChecker] = None,
    progress: Optional[TextIO] = None,
) -> RunSummary:
    """
    Run one sweep inside the current event loop.

    Parameters
    ----------
    config : SweepConfig
        Word length, pool size, queue capacity, output path and endpoint.
    checker : AvailabilityChecker | None
        Checker shared by all workers. When None an aiohttp session is opened
        against ``config.endpoint_url`` for the duration of the run.
    progress : TextIO | None
        Stream for the ``+``/``.`` marks. Defaults to stdout.

    Raises
    ------
    OutputFileError
        The output file could not be opened. No worker has started.
    SweepAborted
        ``config.fail_fast`` is set and a request failed at transport level.
    """
    total = _describe_count(config.word_length)
    handle = _open_output(config.output_file)
    log.info(
        f"[SWEEP START] length={config.word_length} candidates={total}",
        extra={
            "word_length": config.word_length,
            "candidates": total,
            "workers": config.num_workers,
            "queue_capacity": config.queue_capacity,
            "output_file": str(config.output_file),
        },
    )

    try:
        async with contextlib.AsyncExitStack() as stack:
            if checker is None:
                checker = await stack.enter_async_context(_default_checker(config))

            queue = WorkQueue(config.queue_capacity)
            aggregator = ResultAggregator(ResultSet(), OutputLog(handle), progress)
            pool = WorkerPool(
                config.num_workers, queue, checker, aggregator, fail_fast=config.fail_fast
            )

            with profile_block(f"sweep-l{config.word_length}") as stats:
                try:
                    async with asyncio.TaskGroup() as group:
                        pool.start(group)
                        await _feed(queue, config.word_length, pool.size)
                except BaseExceptionGroup as group_exc:
                    cause = _first_transport_error(group_exc)
                    if cause is None:
                        raise
                    log.error(
                        f"[SWEEP ABORTED] {cause}",
                        extra={"candidate": cause.name, "checked": aggregator.checked},
                    )
                    raise SweepAborted(str(cause)) from cause
    finally:
        handle.close()

    summary = _build_summary(config, aggregator, pool, queue, stats)
    log.info(
        f"[SWEEP COMPLETE] {summary.available_count} available of {summary.checked}",
        extra={
            "available": summary.available_count,
            "unavailable": summary.unavailable,
            "failures": summary.failures,
            "duration": summary.duration_seconds,
            "throughput_per_sec": summary.throughput_per_sec,
            "blocked_puts": summary.blocked_puts,
        },
    )
    return summary


def run_sweep(
    config: SweepConfig,
    checker: Optional[AvailabilityChecker] = None,
    progress: Optional[TextIO] = None,
) -> RunSummary:
    """
    Synchronous entry point around ``sweep``.

    Raises RuntimeError when called from a running event loop; await
    ``sweep`` there instead.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(sweep(config, checker=checker, progress=progress))
    raise RuntimeError("run_sweep() cannot be called from an async context; await sweep()")


__all__ = [
    "SweepConfig",
    "run_sweep",
    "sweep",
]

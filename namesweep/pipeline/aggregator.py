"""
Result aggregation shared by all workers.

Two independently guarded resources live here: the in-memory Result Set and the
append-only Output Log. For every available candidate the log line is written
before the Result Set entry is appended, so both always hold the same names.
Neither lock is held while the other is acquired.
"""

from __future__ import annotations

import asyncio
import sys
from typing import List, Optional, TextIO

from namesweep.utils.logging import get_logger

log = get_logger(__name__)

AVAILABLE_MARK = "+"
UNAVAILABLE_MARK = "."


class ResultSet:
    """Insertion-ordered list of available names behind its own lock."""

    def __init__(self) -> None:
        self._names: List[str] = []
        self._lock = asyncio.Lock()

    async def append(self, name: str) -> None:
        async with self._lock:
            self._names.append(name)

    def snapshot(self) -> List[str]:
        return list(self._names)

    def __len__(self) -> int:
        return len(self._names)


class OutputLog:
    """
    Append-only text file shared by the workers.

    Each ``append`` writes one full line and flushes it while holding the lock,
    so lines from different workers never interleave.
    """

    def __init__(self, handle: TextIO) -> None:
        self._handle = handle
        self._lock = asyncio.Lock()
        self.lines_written = 0

    async def append(self, name: str) -> None:
        async with self._lock:
            self._handle.write(f"{name}\n")
            self._handle.flush()
            self.lines_written += 1


class ResultAggregator:
    """
    Fold check outcomes into the Result Set, the Output Log and the progress
    stream.
    """

    def __init__(
        self,
        result_set: ResultSet,
        output_log: OutputLog,
        progress: Optional[TextIO] = None,
    ) -> None:
        self.result_set = result_set
        self.output_log = output_log
        self._progress = progress if progress is not None else sys.stdout
        self.checked = 0
        self.unavailable = 0
        self.failures = 0

    def _mark(self, symbol: str) -> None:
        self._progress.write(symbol)
        self._progress.flush()

    async def record_available(self, name: str) -> None:
        self.checked += 1
        await self.output_log.append(name)
        await self.result_set.append(name)
        self._mark(AVAILABLE_MARK)

    async def record_unavailable(self, name: str) -> None:
        log.debug("Candidate unavailable", extra={"candidate": name})
        self.checked += 1
        self.unavailable += 1
        self._mark(UNAVAILABLE_MARK)

    async def record_failure(self, name: str, error: BaseException) -> None:
        """Count a transport failure and report it as unavailable."""
        self.checked += 1
        self.failures += 1
        log.debug("Transport failure recorded", extra={"candidate": name, "error": str(error)})
        self._mark(UNAVAILABLE_MARK)

    @property
    def available(self) -> List[str]:
        return self.result_set.snapshot()


__all__ = [
    "AVAILABLE_MARK",
    "UNAVAILABLE_MARK",
    "OutputLog",
    "ResultAggregator",
    "ResultSet",
]

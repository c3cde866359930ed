"""
Pipeline package for namesweep.

Re-exports the queue, checker, aggregator and worker pool so the orchestrator
and tests can import from `namesweep.pipeline` directly.
"""

from namesweep.pipeline.aggregator import OutputLog, ResultAggregator, ResultSet
from namesweep.pipeline.checker import (
    AvailabilityChecker,
    HttpAvailabilityChecker,
    is_available_status,
    open_session,
)
from namesweep.pipeline.work_queue import WorkQueue
from namesweep.pipeline.worker import Worker, WorkerPool, WorkerState

__all__ = [
    # Queue
    "WorkQueue",
    # Checking
    "AvailabilityChecker",
    "HttpAvailabilityChecker",
    "is_available_status",
    "open_session",
    # Aggregation
    "OutputLog",
    "ResultAggregator",
    "ResultSet",
    # Workers
    "Worker",
    "WorkerPool",
    "WorkerState",
]

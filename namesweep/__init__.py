"""
namesweep - exhaustive availability sweep over fixed-length lowercase names.

Every string of a given length over ``a``..``z`` is checked against a remote
username endpoint by a fixed-size pool of asyncio workers fed from a bounded
queue. Available names are appended to a flat text file, collected in memory
and reported at the end of the run.

The package is organized as:

- `namesweep.generator` - exhaustive combination generator
- `namesweep.pipeline` - work queue, availability checker, aggregator, workers
- `namesweep.orchestrator` - composition root and run summary
- `namesweep.main` - typer CLI
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from namesweep.config import Settings, get_settings
from namesweep.domain.models import Candidate, EndOfWork, RunSummary, WorkItem
from namesweep.errors import (
    NameSweepError,
    OutputFileError,
    QueueClosedError,
    SweepAborted,
    TransportError,
)
from namesweep.generator import count_combinations, generate_combinations
from namesweep.orchestrator import SweepConfig, run_sweep, sweep
from namesweep.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Candidate",
    "EndOfWork",
    "RunSummary",
    "WorkItem",
    # Errors
    "NameSweepError",
    "OutputFileError",
    "QueueClosedError",
    "SweepAborted",
    "TransportError",
    # Generation and orchestration
    "count_combinations",
    "generate_combinations",
    "SweepConfig",
    "run_sweep",
    "sweep",
    # Logging
    "configure_logging",
    "get_logger",
]

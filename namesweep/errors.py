"""
Exception hierarchy for namesweep.

Everything raised on purpose by the pipeline derives from NameSweepError so the
CLI can map failures to an exit status in one place.
"""

from __future__ import annotations


class NameSweepError(Exception):
    """Base class for namesweep failures."""


class OutputFileError(NameSweepError):
    """The output file could not be opened; raised before any worker starts."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"cannot open output file '{path}': {cause}")
        self.path = path
        self.cause = cause


class TransportError(NameSweepError):
    """The availability request for one candidate could not be completed."""

    def __init__(self, name: str, cause: BaseException) -> None:
        super().__init__(f"request for '{name}' failed: {cause!r}")
        self.name = name
        self.cause = cause


class QueueClosedError(NameSweepError):
    """A candidate was enqueued after the end-of-work markers were sent."""


class SweepAborted(NameSweepError):
    """A fail-fast run stopped early because a worker hit a transport error."""


__all__ = [
    "NameSweepError",
    "OutputFileError",
    "QueueClosedError",
    "SweepAborted",
    "TransportError",
]

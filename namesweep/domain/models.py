"""
Domain models for namesweep.

Work items travelling over the queue are small frozen dataclasses; the end of
run summary is a frozen Pydantic model so it can be validated and serialized
for logs and reports.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class Candidate:
    """One fixed-length name to check."""

    name: str


@dataclass(frozen=True)
class EndOfWork:
    """Stop marker; each worker consumes exactly one and exits."""


WorkItem = Union[Candidate, EndOfWork]


class RunSummary(BaseModel):
    """
    Outcome of a single sweep.
    """

    word_length: int = Field(..., ge=0, description="Length of every generated name.")
    checked: int = Field(0, description="Candidates taken off the queue and checked.")
    available: List[str] = Field(
        default_factory=list, description="Available names in Result Set order."
    )
    unavailable: int = Field(0, description="Candidates the endpoint reported as taken.")
    failures: int = Field(0, description="Candidates whose request failed at transport level.")
    workers: int = Field(..., ge=1, description="Worker pool size.")
    stops_consumed: int = Field(0, description="End-of-work markers consumed by workers.")
    blocked_puts: int = Field(0, description="Enqueues that had to wait on a full queue.")
    duration_seconds: float = Field(0.0, description="Wall-clock duration of the pipeline.")
    throughput_per_sec: float = Field(0.0, description="Candidates checked per second.")
    peak_rss_bytes: Optional[int] = Field(None, description="Peak resident memory.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    @property
    def available_count(self) -> int:
        return len(self.available)


__all__ = ["Candidate", "EndOfWork", "RunSummary", "WorkItem"]

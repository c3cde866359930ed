"""
Domain package for namesweep.

Exports the work items carried on the queue and the run summary model.
Keep this package focused on data definitions and validation concerns.
"""

from namesweep.domain.models import Candidate, EndOfWork, RunSummary, WorkItem

__all__ = [
    "Candidate",
    "EndOfWork",
    "RunSummary",
    "WorkItem",
]

from __future__ import annotations

from typing import List, Optional

from rich.console import Console

from namesweep.domain.models import RunSummary


def summary_lines(summary: RunSummary) -> List[str]:
    """
    Lines printed after the progress stream: a blank line, the count, an
    optional transport failure count, then one ``- name`` per available name.
    """
    lines = ["", f"Number of valid logins: {summary.available_count}"]
    if summary.failures:
        lines.append(f"Transport failures: {summary.failures}")
    lines.extend(f"- {name}" for name in summary.available)
    return lines


def print_summary(summary: RunSummary, console: Optional[Console] = None) -> None:
    """
    Render the end-of-run summary to stdout.

    Markup and highlighting are off so names print exactly as found.
    """
    console = console or Console()
    for line in summary_lines(summary):
        console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)


__all__ = ["print_summary", "summary_lines"]

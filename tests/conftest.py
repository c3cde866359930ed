"""
Pytest configuration for namesweep.

Provides fixtures for:
- Settings sized for tests (small pool, temp output file)
- In-memory availability checkers standing in for the HTTP endpoint
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable, List, Optional

import pytest

from namesweep.config import Settings
from namesweep.errors import TransportError
from namesweep.orchestrator import SweepConfig


class SubsetChecker:
    """Reports a name as available iff it belongs to a fixed subset."""

    def __init__(
        self,
        available: Iterable[str],
        failing: Iterable[str] = (),
        delay: float = 0.0,
    ) -> None:
        self.available = frozenset(available)
        self.failing = frozenset(failing)
        self.delay = delay
        self.calls: List[str] = []

    async def is_available(self, name: str) -> bool:
        self.calls.append(name)
        if self.delay:
            await asyncio.sleep(self.delay)
        else:
            await asyncio.sleep(0)
        if name in self.failing:
            raise TransportError(name, ConnectionResetError("connection reset by peer"))
        return name in self.available


@pytest.fixture()
def output_path(tmp_path: Path) -> Path:
    return tmp_path / "valid_combinations.txt"


@pytest.fixture()
def test_settings(output_path: Path) -> Settings:
    """
    Settings fixture with a small pool and a per-test output file.
    """
    return Settings(
        num_workers=4,
        queue_capacity=3,
        output_file=str(output_path),
        endpoint_url="http://127.0.0.1:9/usernames",
        log_level="DEBUG",
    )


@pytest.fixture()
def make_config(test_settings: Settings):
    """Build a SweepConfig from test settings with per-test overrides."""

    def _make(word_length: int = 1, **overrides) -> SweepConfig:
        base = SweepConfig.from_settings(test_settings, word_length=word_length)
        values = {
            "word_length": base.word_length,
            "num_workers": base.num_workers,
            "queue_capacity": base.queue_capacity,
            "output_file": base.output_file,
            "endpoint_url": base.endpoint_url,
            "fail_fast": base.fail_fast,
        }
        values.update(overrides)
        return SweepConfig(**values)

    return _make


@pytest.fixture()
def checker_factory():
    """Expose SubsetChecker to tests without importing conftest."""
    return SubsetChecker


@pytest.fixture()
def read_output(output_path: Path):
    """Return the output file lines, or None when the file was never created."""

    def _read() -> Optional[List[str]]:
        if not output_path.exists():
            return None
        return output_path.read_text(encoding="utf-8").splitlines()

    return _read

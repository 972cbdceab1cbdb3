"""Pytest fixtures shared across the dashboard tests."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from alerts import normalize_records, parse_records

SAMPLE_DATA = Path(__file__).resolve().parent.parent / "data" / "alerts.json"


def _make_rows(count: int) -> list[dict]:
    """Return `count` raw records with distinct, increasing ports."""

    return [
        {
            "timestamp": 1_700_000_000_000 + i * 1000,
            "src_port": 40000 + i,
            "dest_port": 1000 + i,
            "alert": {"severity": i % 4, "category": f"cat-{i % 3}"} if i % 2 else None,
        }
        for i in range(count)
    ]


@pytest.fixture
def sample_path() -> Path:
    """Path to the bundled sample dataset."""

    return SAMPLE_DATA


@pytest.fixture
def frame_from_rows():
    """Build a normalized frame from raw JSON-like rows."""

    def build(rows: list[dict]):
        return normalize_records(parse_records(rows))

    return build


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test carries exactly one of the `unit`/`integration` markers."""

    for item in items:
        speed = [name for name in ("unit", "integration") if item.get_closest_marker(name)]
        if len(speed) != 1:
            raise pytest.UsageError(f"{item.nodeid} must be marked with exactly one of unit/integration")


@pytest.fixture
def make_rows():
    """Factory for synthetic raw records."""

    return _make_rows

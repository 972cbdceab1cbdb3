"""Tests for the per-chart projections."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from alerts.models import BarPoint, LinePoint, PieSlice, ScatterPoint
from charts.projections import prepare_bar, prepare_line, prepare_pie, prepare_scatter

pytestmark = pytest.mark.unit

SCENARIO = [
    {"timestamp": 1, "alert": None},
    {"timestamp": 2, "alert": {"severity": 3, "category": "x"}},
]


def _ms(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def test_prepare_line_scenario(frame_from_rows) -> None:
    """An absent alert yields severity 0; a present one keeps its severity."""

    points = prepare_line(frame_from_rows(SCENARIO))

    assert points == (LinePoint(time=_ms(1), severity=0), LinePoint(time=_ms(2), severity=3))


def test_prepare_pie_scenario(frame_from_rows) -> None:
    """The empty-string category stands in for records with no alert."""

    slices = prepare_pie(frame_from_rows(SCENARIO))

    assert {s.category: s.count for s in slices} == {"": 1, "x": 1}
    assert sum(s.count for s in slices) == 2


def test_prepare_line_preserves_length_and_order(frame_from_rows) -> None:
    """One point per record, in input order even when timestamps are unsorted."""

    rows = [{"timestamp": t, "alert": {"severity": t, "category": "c"}} for t in (5, 1, 3)]
    points = prepare_line(frame_from_rows(rows))

    assert len(points) == 3
    assert [p.severity for p in points] == [5, 1, 3]


def test_prepare_bar_uses_destination_port(frame_from_rows) -> None:
    """The bar port is the destination port, never the source port."""

    rows = [
        {"timestamp": 1, "src_port": 5555, "dest_port": 22, "alert": {"severity": 2, "category": "a"}},
        {"timestamp": 2, "src_port": 6666, "dest_port": 80, "alert": None},
    ]

    assert prepare_bar(frame_from_rows(rows)) == (BarPoint(port=22, severity=2), BarPoint(port=80, severity=0))


def test_prepare_pie_first_seen_order(frame_from_rows) -> None:
    """Slices follow the order in which categories first appear, not sorted order."""

    rows = [
        {"timestamp": 1, "alert": {"severity": 1, "category": "zeta"}},
        {"timestamp": 2, "alert": None},
        {"timestamp": 3, "alert": {"severity": 1, "category": "alpha"}},
        {"timestamp": 4, "alert": {"severity": 1, "category": "zeta"}},
    ]

    assert prepare_pie(frame_from_rows(rows)) == (
        PieSlice(category="zeta", count=2),
        PieSlice(category="", count=1),
        PieSlice(category="alpha", count=1),
    )


def test_prepare_pie_counts_sum_to_record_count(frame_from_rows, make_rows) -> None:
    """Every record lands in exactly one slice."""

    rows = make_rows(57)
    assert sum(s.count for s in prepare_pie(frame_from_rows(rows))) == 57


def test_prepare_scatter_takes_first_hundred(frame_from_rows, make_rows) -> None:
    """150 records give exactly the first 100 (src, dest) pairs in order."""

    rows = make_rows(150)
    points = prepare_scatter(frame_from_rows(rows))

    assert len(points) == 100
    assert points == tuple(ScatterPoint(src_port=r["src_port"], dest_port=r["dest_port"]) for r in rows[:100])


def test_prepare_scatter_short_input_uses_all(frame_from_rows, make_rows) -> None:
    """Fewer than 100 records are all kept."""

    assert len(prepare_scatter(frame_from_rows(make_rows(7)))) == 7


def test_prepare_scatter_custom_limit(frame_from_rows, make_rows) -> None:
    """The prefix length is configurable."""

    assert len(prepare_scatter(frame_from_rows(make_rows(20)), limit=5)) == 5


def test_projections_of_empty_input_are_empty(frame_from_rows) -> None:
    """Every projection of an empty collection is empty."""

    frame = frame_from_rows([])

    assert prepare_line(frame) == ()
    assert prepare_bar(frame) == ()
    assert prepare_pie(frame) == ()
    assert prepare_scatter(frame) == ()


def test_projections_are_repeatable_and_do_not_mutate(frame_from_rows, make_rows) -> None:
    """Calling a projection twice yields equal output and leaves the frame intact."""

    frame = frame_from_rows(make_rows(30))
    before = frame.copy()

    for prepare in (prepare_line, prepare_bar, prepare_pie, prepare_scatter):
        assert prepare(frame) == prepare(frame)

    assert frame.equals(before)


def test_prepare_scatter_negative_limit_is_empty(frame_from_rows, make_rows) -> None:
    """A negative limit never turns into a suffix drop."""

    assert prepare_scatter(frame_from_rows(make_rows(10)), limit=-3) == ()

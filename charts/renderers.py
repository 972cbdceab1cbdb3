"""
Plotly renderers for the four dashboard charts.

A renderer receives a projection and a figure to draw into. It computes the
axis domains itself, so an empty projection still produces a valid figure
(linear domains fall back to [0, 1]). Drawing into a figure that already has
traces appends to it.
"""
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Sequence, Tuple
import math

import plotly.graph_objects as go

from alerts.models import BarPoint, LinePoint, PieSlice, ScatterPoint

# ================= GEOMETRY & COLORS =================
MARGIN = {"t": 20, "r": 30, "b": 30, "l": 40}
CHART_WIDTH = 600
CHART_HEIGHT = 300
PIE_SIZE = 500

ACCENT = "steelblue"
SCATTER_COLOR = "#8884d8"
PIE_PALETTE = ["#8884d8", "#82ca9d", "#ffc658"]

BAR_PADDING = 0.1
LINE_WIDTH = 1.5
MARKER_RADIUS = 5

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
HALF_DAY = timedelta(hours=12)


# ================= DOMAINS =================
def _tick_step(stop: float, count: int) -> float:
    raw = stop / count
    power = 10 ** math.floor(math.log10(raw))
    error = raw / power
    if error >= math.sqrt(50):
        return 10 * power
    if error >= math.sqrt(10):
        return 5 * power
    if error >= math.sqrt(2):
        return 2 * power
    return power


def nice_upper(value: float, count: int = 10) -> float:
    """Round a domain maximum up to a tick boundary, like d3's scale.nice()."""
    step = _tick_step(value, count)
    return round(math.ceil(round(value / step, 9)) * step, 10)


def linear_domain(values: Iterable) -> Tuple[float, float]:
    finite = [v for v in values if v is not None and math.isfinite(v)]
    top = max(finite, default=0)
    if top <= 0:
        return (0.0, 1.0)
    return (0.0, float(nice_upper(top)))


def time_domain(times: Iterable) -> Tuple[datetime, datetime]:
    present = [t for t in times if t is not None]
    if not present:
        return (EPOCH, EPOCH + timedelta(days=1))
    lo, hi = min(present), max(present)
    if lo == hi:
        return (lo - HALF_DAY, hi + HALF_DAY)
    return (lo, hi)


def band_domain(keys: Iterable) -> List[str]:
    seen = []
    for key in keys:
        label = str(key)
        if label not in seen:
            seen.append(label)
    return seen


def _naive_utc(t: datetime) -> datetime:
    # plotly.js date axes do not take UTC offsets
    return t.astimezone(timezone.utc).replace(tzinfo=None)


def _frame(fig: go.Figure, width: int = CHART_WIDTH, height: int = CHART_HEIGHT, margin=MARGIN):
    fig.update_layout(width=width, height=height, margin=margin, showlegend=False)


# ================= RENDERERS =================
def draw_line_chart(points: Sequence[LinePoint], fig: go.Figure) -> go.Figure:
    path = sorted((p for p in points if p.time is not None), key=lambda p: p.time)
    x0, x1 = time_domain(p.time for p in points)
    y0, y1 = linear_domain(p.severity for p in points)

    _frame(fig)
    fig.update_xaxes(type="date", range=[_naive_utc(x0), _naive_utc(x1)])
    fig.update_yaxes(type="linear", range=[y0, y1])
    fig.add_trace(go.Scatter(
        x=[_naive_utc(p.time) for p in path],
        y=[p.severity for p in path],
        mode="lines",
        name="severity",
        line=dict(color=ACCENT, width=LINE_WIDTH),
    ))
    return fig


def draw_bar_chart(points: Sequence[BarPoint], fig: go.Figure) -> go.Figure:
    ports = band_domain(p.port for p in points)
    y0, y1 = linear_domain(p.severity for p in points)

    _frame(fig)
    fig.update_layout(bargap=BAR_PADDING, barmode="overlay")
    fig.update_xaxes(type="category", categoryorder="array", categoryarray=ports)
    fig.update_yaxes(type="linear", range=[y0, y1])
    fig.add_trace(go.Bar(
        x=[str(p.port) for p in points],
        y=[p.severity for p in points],
        name="severity",
        marker_color=ACCENT,
    ))
    return fig


def pie_colors(slices: Sequence[PieSlice]) -> List[str]:
    # positional: the n-th category seen gets the n-th palette entry
    return [PIE_PALETTE[i % len(PIE_PALETTE)] for i in range(len(slices))]


def draw_pie_chart(slices: Sequence[PieSlice], fig: go.Figure) -> go.Figure:
    _frame(fig, width=PIE_SIZE, height=PIE_SIZE, margin={"t": 0, "r": 0, "b": 0, "l": 0})
    fig.update_layout(showlegend=True)
    fig.add_trace(go.Pie(
        labels=[s.category for s in slices],
        values=[s.count for s in slices],
        marker=dict(colors=pie_colors(slices)),
        sort=True,
        direction="clockwise",
        textinfo="none",
    ))
    return fig


def draw_scatter_plot(points: Sequence[ScatterPoint], fig: go.Figure) -> go.Figure:
    x0, x1 = linear_domain(p.src_port for p in points)
    y0, y1 = linear_domain(p.dest_port for p in points)

    _frame(fig)
    fig.update_xaxes(type="linear", range=[x0, x1])
    fig.update_yaxes(type="linear", range=[y0, y1])
    fig.add_trace(go.Scatter(
        x=[p.src_port for p in points],
        y=[p.dest_port for p in points],
        mode="markers",
        name="ports",
        marker=dict(color=SCATTER_COLOR, size=MARKER_RADIUS * 2),
    ))
    return fig

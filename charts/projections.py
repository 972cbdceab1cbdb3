"""Per-chart projections of the normalized alert frame.

Each function reads the frame built by alerts.normalize_records() and returns
a new tuple of points. The frame is never modified.
"""
from __future__ import annotations
from typing import Tuple

import pandas as pd

from alerts.models import BarPoint, LinePoint, PieSlice, ScatterPoint

SCATTER_LIMIT = 100


def _time(value):
    if pd.isna(value):
        return None
    return value.to_pydatetime()


def prepare_line(frame: pd.DataFrame) -> Tuple[LinePoint, ...]:
    return tuple(
        LinePoint(time=_time(ts), severity=severity)
        for ts, severity in zip(frame["timestamp"].tolist(), frame["severity"].tolist())
    )


def prepare_bar(frame: pd.DataFrame) -> Tuple[BarPoint, ...]:
    return tuple(
        BarPoint(port=port, severity=severity)
        for port, severity in zip(frame["dest_port"].tolist(), frame["severity"].tolist())
    )


def prepare_pie(frame: pd.DataFrame) -> Tuple[PieSlice, ...]:
    # sort=False keeps first-seen category order
    counts = frame.groupby("category", sort=False, dropna=False).size()
    return tuple(PieSlice(category=category, count=int(count)) for category, count in counts.items())


def prepare_scatter(frame: pd.DataFrame, limit: int = SCATTER_LIMIT) -> Tuple[ScatterPoint, ...]:
    head = frame.head(max(limit, 0))
    return tuple(
        ScatterPoint(src_port=src, dest_port=dst)
        for src, dst in zip(head["src_port"].tolist(), head["dest_port"].tolist())
    )

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Alert:
    severity: float = 0
    category: str = ""


@dataclass(frozen=True)
class AlertRecord:
    timestamp: Optional[datetime]
    src_port: Optional[int]
    dest_port: Optional[int]
    alert: Optional[Alert] = None


# ── Projection points ─────────────────────────────────────
@dataclass(frozen=True)
class LinePoint:
    time: Optional[datetime]
    severity: float


@dataclass(frozen=True)
class BarPoint:
    port: Optional[int]
    severity: float


@dataclass(frozen=True)
class PieSlice:
    category: str
    count: int


@dataclass(frozen=True)
class ScatterPoint:
    src_port: Optional[int]
    dest_port: Optional[int]

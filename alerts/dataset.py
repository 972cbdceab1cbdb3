"""
Loading and normalization of the static alert dataset.

Records are read once at startup. Every default for a missing alert
(severity 0, category "") is applied here, in normalize_records(), so the
chart projections never have to deal with absent alerts.
"""
from __future__ import annotations
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple
import json

import pandas as pd

from .models import Alert, AlertRecord

FRAME_COLUMNS = ["timestamp", "src_port", "dest_port", "severity", "category"]

DEFAULT_SEVERITY = 0
DEFAULT_CATEGORY = ""


class DatasetError(Exception):
    """The dataset resource could not be read or is not a list of records."""


# ================= PARSING =================
def parse_timestamp(value):
    """Numbers are epoch milliseconds, strings are ISO-8601. Unparseable -> None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        ts = pd.to_datetime(value, unit="ms", utc=True, errors="coerce")
    else:
        ts = pd.to_datetime(str(value), utc=True, errors="coerce")
    if pd.isna(ts):
        return None
    return ts.to_pydatetime()


def _parse_port(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _parse_severity(value):
    if isinstance(value, bool):
        return DEFAULT_SEVERITY
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return DEFAULT_SEVERITY


def _parse_alert(raw) -> Optional[Alert]:
    if not isinstance(raw, dict):
        return None
    category = raw.get("category")
    return Alert(
        severity=_parse_severity(raw.get("severity")),
        category=DEFAULT_CATEGORY if category is None else str(category),
    )


def parse_record(raw: dict) -> AlertRecord:
    return AlertRecord(
        timestamp=parse_timestamp(raw.get("timestamp")),
        src_port=_parse_port(raw.get("src_port")),
        dest_port=_parse_port(raw.get("dest_port")),
        alert=_parse_alert(raw.get("alert")),
    )


def parse_records(items: Sequence) -> Tuple[AlertRecord, ...]:
    if not isinstance(items, list):
        raise DatasetError(f"expected a JSON array of records, got {type(items).__name__}")
    records = []
    for index, raw in enumerate(items):
        if not isinstance(raw, dict):
            raise DatasetError(f"record {index} is not an object")
        records.append(parse_record(raw))
    return tuple(records)


def load_records(path) -> Tuple[AlertRecord, ...]:
    path = Path(path)
    try:
        items = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DatasetError(f"cannot read dataset {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DatasetError(f"dataset {path} is not valid JSON: {e}") from e
    return parse_records(items)


# ================= NORMALIZATION =================
def normalize_records(records: Iterable[AlertRecord]) -> pd.DataFrame:
    """Build the fully-defaulted frame every projection reads from."""
    records = list(records)
    severities = []
    categories = []
    for r in records:
        if r.alert is None:
            severities.append(DEFAULT_SEVERITY)
            categories.append(DEFAULT_CATEGORY)
        else:
            severities.append(r.alert.severity)
            categories.append(r.alert.category)

    timestamps = pd.Series([r.timestamp for r in records], dtype="object")
    return pd.DataFrame(
        {
            "timestamp": pd.to_datetime(timestamps, utc=True),
            "src_port": pd.Series([r.src_port for r in records], dtype="object"),
            "dest_port": pd.Series([r.dest_port for r in records], dtype="object"),
            "severity": pd.Series(severities, dtype="float64"),
            "category": pd.Series(categories, dtype="object"),
        },
        columns=FRAME_COLUMNS,
    )

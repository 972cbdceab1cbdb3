from __future__ import annotations
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Union
import json
import logging
import os

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"
DEFAULT_DATA_PATH = str(DATA_DIR / "alerts.json")

ENV_PREFIX = "ALERTS_DASHBOARD_"

logger = logging.getLogger("dashboard.config")


@dataclass(frozen=True)
class Theme:
    background: str = "#141414"
    text: str = "#ffffff"


DARK_THEME = Theme()


@dataclass
class DashboardConfig:
    data_path: str = DEFAULT_DATA_PATH
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False

    # Charts
    scatter_limit: int = 100
    include_plotlyjs: Union[str, bool] = "cdn"

    log_file: str = "dashboard.log"
    theme: Theme = field(default_factory=Theme)


def _known(cls, data: dict) -> dict:
    names = {f.name for f in fields(cls)}
    return {k: data[k] for k in data if k in names}


def _non_negative_int(key: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}")
    return value


def _from_dict(data: dict) -> DashboardConfig:
    known = _known(DashboardConfig, data)
    theme = known.pop("theme", None)
    for key in ("port", "scatter_limit"):
        if key in known:
            known[key] = _non_negative_int(key, known[key])
    cfg = DashboardConfig(**known)
    if isinstance(theme, dict):
        cfg.theme = Theme(**_known(Theme, theme))
    return cfg


def _apply_env(cfg: DashboardConfig) -> DashboardConfig:
    data_path = os.getenv(ENV_PREFIX + "DATA")
    host = os.getenv(ENV_PREFIX + "HOST")
    port = os.getenv(ENV_PREFIX + "PORT")
    debug = os.getenv(ENV_PREFIX + "DEBUG")

    if data_path:
        cfg.data_path = data_path
    if host:
        cfg.host = host
    if port:
        try:
            cfg.port = int(port)
        except ValueError:
            logger.warning("Ignoring invalid %sPORT=%r", ENV_PREFIX, port)
    if debug:
        cfg.debug = debug.strip().lower() in ("1", "true", "yes", "on")
    return cfg


def load_config(path: Optional[str] = None) -> DashboardConfig:
    """Read an optional JSON config file, then apply environment overrides.

    A missing, unreadable or malformed file falls back to the defaults.
    """
    cfg = DashboardConfig()
    if path:
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("config root must be an object")
            cfg = _from_dict(data)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Using default config, cannot load %s: %s", path, e)
            cfg = DashboardConfig()
    return _apply_env(cfg)

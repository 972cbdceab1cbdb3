from __future__ import annotations
from typing import Iterable, Optional

from flask import Flask, jsonify, render_template

from alerts import AlertRecord, normalize_records

from .config import DashboardConfig
from .page import PAGE_TITLE, DashboardPage


def create_app(records: Iterable[AlertRecord], cfg: Optional[DashboardConfig] = None) -> Flask:
    cfg = cfg or DashboardConfig()
    frame = normalize_records(records)

    page = DashboardPage(frame, theme=cfg.theme, scatter_limit=cfg.scatter_limit)
    page.mount()

    app = Flask(__name__)
    app.config["dashboard_page"] = page
    app.config["app_config"] = cfg

    @app.route("/")
    def dashboard():
        return render_dashboard(app)

    @app.route("/health")
    def health():
        return jsonify(status="ok", records=len(page.frame))

    return app


def render_dashboard(app: Flask) -> str:
    page = app.config["dashboard_page"]
    cfg = app.config["app_config"]
    return render_template(
        "dashboard.html",
        title=PAGE_TITLE,
        theme=page.theme,
        rows=page.rows(),
        charts=page.panel_html(include_plotlyjs=cfg.include_plotlyjs),
    )

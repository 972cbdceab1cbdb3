"""
Page composition: four chart panels drawn once from an injected dataset.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple
import logging

import pandas as pd
import plotly.graph_objects as go

from charts import projections, renderers

from .config import DARK_THEME, Theme

logger = logging.getLogger("dashboard.page")

PAGE_TITLE = "Network Alerts Dashboard"


@dataclass(frozen=True)
class Panel:
    key: str
    title: str
    figure: go.Figure


@dataclass(frozen=True)
class _Pipeline:
    key: str
    title: str
    prepare: Callable
    draw: Callable


class DashboardPage:
    """Owns the four drawing surfaces and renders into them.

    mount() is the post-construction hook. The first call runs the
    line, bar, pie and scatter pipelines in that order; every later call
    returns the panels from the first one without drawing again.
    """

    def __init__(self, frame: pd.DataFrame, theme: Theme = DARK_THEME,
                 scatter_limit: int = projections.SCATTER_LIMIT):
        self.frame = frame
        self.theme = theme
        self.scatter_limit = scatter_limit
        self.surfaces: Dict[str, go.Figure] = {}
        self._panels: Optional[Tuple[Panel, ...]] = None

        self._pipelines = [
            _Pipeline("line", "Number of Alerts Over Time",
                      projections.prepare_line, renderers.draw_line_chart),
            _Pipeline("bar", "Alerts by Port",
                      projections.prepare_bar, renderers.draw_bar_chart),
            _Pipeline("pie", "Alerts by Category",
                      projections.prepare_pie, renderers.draw_pie_chart),
            _Pipeline("scatter", "Scatter Plot of Ports",
                      self._prepare_scatter, renderers.draw_scatter_plot),
        ]
        for p in self._pipelines:
            self.surfaces[p.key] = go.Figure()

    def _prepare_scatter(self, frame):
        return projections.prepare_scatter(frame, limit=self.scatter_limit)

    @property
    def mounted(self) -> bool:
        return self._panels is not None

    def mount(self) -> Tuple[Panel, ...]:
        if self._panels is not None:
            return self._panels

        panels: List[Panel] = []
        for p in self._pipelines:
            fig = self.surfaces[p.key]
            p.draw(p.prepare(self.frame), fig)
            self._apply_theme(fig)
            panels.append(Panel(key=p.key, title=p.title, figure=fig))

        self._panels = tuple(panels)
        logger.info("Dashboard mounted: %d records, %d panels", len(self.frame), len(panels))
        return self._panels

    def _apply_theme(self, fig: go.Figure):
        fig.update_layout(
            template="plotly_dark",
            paper_bgcolor=self.theme.background,
            plot_bgcolor=self.theme.background,
            font=dict(color=self.theme.text),
        )

    def rows(self) -> List[Tuple[Panel, ...]]:
        panels = self.mount()
        return [panels[i:i + 2] for i in range(0, len(panels), 2)]

    def panel_html(self, include_plotlyjs="cdn") -> Dict[str, str]:
        """HTML fragment per panel. Only the first one carries the plotly.js bundle."""
        html = {}
        for i, panel in enumerate(self.mount()):
            html[panel.key] = panel.figure.to_html(
                full_html=False,
                include_plotlyjs=include_plotlyjs if i == 0 else False,
                div_id=f"{panel.key}-chart",
                config={"displaylogo": False, "responsive": True},
            )
        return html

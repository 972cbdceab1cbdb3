from .projections import prepare_bar, prepare_line, prepare_pie, prepare_scatter
from .renderers import draw_bar_chart, draw_line_chart, draw_pie_chart, draw_scatter_plot

__all__ = [
    "draw_bar_chart",
    "draw_line_chart",
    "draw_pie_chart",
    "draw_scatter_plot",
    "prepare_bar",
    "prepare_line",
    "prepare_pie",
    "prepare_scatter",
]

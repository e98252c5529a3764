"""Expense chart projection and rendering."""

from budget_planner.services.chart.projection import (
    NO_EXPENSES_LABEL,
    PLACEHOLDER_VALUE,
    ChartProjection,
    project,
)
from budget_planner.services.chart.renderer import (
    CHART_ERROR_MESSAGE,
    ChartRenderer,
    ChartRenderResult,
    PlotlyPieRenderer,
    render_chart,
)

__all__ = [
    "CHART_ERROR_MESSAGE",
    "NO_EXPENSES_LABEL",
    "PLACEHOLDER_VALUE",
    "ChartProjection",
    "ChartRenderResult",
    "ChartRenderer",
    "PlotlyPieRenderer",
    "project",
    "render_chart",
]

"""
Chart Rendering

DESIGN DECISION: Rendering is a replaceable sink. The engine produces a
ChartProjection; a ChartRenderer turns it into whatever the display needs.
render_chart() is the boundary: a failing renderer is caught here, logged,
and reported as a display message. Ledger state is never touched.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

import plotly.graph_objects as go
from pydantic import BaseModel, ConfigDict

from budget_planner.audit import AuditLogger
from budget_planner.config import get_settings
from budget_planner.services.chart.projection import ChartProjection


CHART_ERROR_MESSAGE = "Chart failed to load. Please refresh the page."


class ChartRenderer(ABC):
    """A rendering backend for the expense chart."""

    name: str = "renderer"

    @abstractmethod
    def render(self, projection: ChartProjection, palette: Sequence[str]) -> Any:
        """
        Build a displayable figure.

        Args:
            projection: Labels and values to draw
            palette: Slice colours, applied in order

        Returns:
            Backend-specific figure object
        """
        pass


class PlotlyPieRenderer(ChartRenderer):
    """Renders the breakdown as a plotly pie chart with the legend on top."""

    name = "plotly_pie"

    def __init__(self, title: Optional[str] = None):
        self._title = title

    def render(self, projection: ChartProjection, palette: Sequence[str]) -> go.Figure:
        fig = go.Figure(
            data=[
                go.Pie(
                    labels=list(projection.labels),
                    values=list(projection.values),
                    marker=dict(colors=list(palette)),
                    sort=False,
                    textinfo="none" if projection.is_placeholder else "percent",
                    hoverinfo="skip" if projection.is_placeholder else "label+value+percent",
                )
            ]
        )
        fig.update_layout(
            title=self._title,
            legend=dict(orientation="h", yanchor="bottom", y=1.02, x=0),
            margin=dict(t=60, b=20, l=20, r=20),
        )
        return fig


class ChartRenderResult(BaseModel):
    """What the display receives: a figure, or an error message."""
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    figure: Optional[Any] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_message is None


def render_chart(
    projection: ChartProjection,
    renderer: ChartRenderer,
    palette: Optional[Sequence[str]] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> ChartRenderResult:
    """
    Render a projection, degrading to an error message on failure.

    Never raises for renderer errors.
    """
    if palette is None:
        palette = get_settings().app.chart_palette_list

    try:
        figure = renderer.render(projection, palette)
    except Exception as e:
        if audit_logger:
            audit_logger.log_chart_render_failed(renderer.name, str(e))
        return ChartRenderResult(error_message=CHART_ERROR_MESSAGE)

    return ChartRenderResult(figure=figure)

"""
Chart Projection

Turns the expense breakdown into a renderable series: index-aligned
labels and values. The projection knows nothing about any charting
library; renderers consume it.

An empty expense list still projects one slice ("No Expenses Yet", 1),
so the chart draws a full circle rather than nothing.
"""

from typing import Iterable

from pydantic import BaseModel, ConfigDict, model_validator

from budget_planner.aggregation import category_breakdown
from budget_planner.models.entry import Entry


NO_EXPENSES_LABEL = "No Expenses Yet"
PLACEHOLDER_VALUE = 1.0


class ChartProjection(BaseModel):
    """Labels and values for the expense chart."""
    model_config = ConfigDict(frozen=True)

    labels: tuple[str, ...]
    values: tuple[float, ...]

    @model_validator(mode='after')
    def validate_alignment(self) -> 'ChartProjection':
        if len(self.labels) != len(self.values):
            raise ValueError("Chart labels and values must have the same length")
        return self

    @property
    def is_placeholder(self) -> bool:
        """True when this is the synthetic empty-ledger slice."""
        return self.labels == (NO_EXPENSES_LABEL,) and self.values == (PLACEHOLDER_VALUE,)


def project(expense_entries: Iterable[Entry]) -> ChartProjection:
    """Project expenses onto chart labels and values."""
    breakdown = category_breakdown(expense_entries)

    if not breakdown:
        return ChartProjection(
            labels=(NO_EXPENSES_LABEL,),
            values=(PLACEHOLDER_VALUE,),
        )

    return ChartProjection(
        labels=tuple(item.category for item in breakdown),
        values=tuple(float(item.total) for item in breakdown),
    )

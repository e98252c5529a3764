"""Ledger aggregation package."""

from budget_planner.aggregation.aggregator import (
    balance,
    category_breakdown,
    is_over_budget,
    summarize,
    total,
)

__all__ = [
    "balance",
    "category_breakdown",
    "is_over_budget",
    "summarize",
    "total",
]

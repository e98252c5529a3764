"""Input validation package."""

from budget_planner.validation.validator import (
    is_valid_amount,
    is_valid_category,
    parse_amount,
    parse_budget_goal,
)

__all__ = [
    "is_valid_amount",
    "is_valid_category",
    "parse_amount",
    "parse_budget_goal",
]

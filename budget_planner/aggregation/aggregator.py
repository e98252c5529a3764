"""
Ledger Aggregation

DESIGN DECISION: Aggregation is PURE.
Every function here takes a ledger snapshot (or a sequence of entries)
and returns derived values. Nothing is cached and nothing is mutated,
so the store can recompute everything after each mutation and tests
can call these functions directly.
"""

from decimal import Decimal
from typing import Iterable

from budget_planner.models.entry import (
    CategoryTotal,
    Entry,
    Ledger,
    LedgerSummary,
)


def total(entries: Iterable[Entry]) -> Decimal:
    """Sum of entry amounts (0 for an empty sequence)."""
    return sum((entry.amount for entry in entries), Decimal("0"))


def balance(ledger: Ledger) -> Decimal:
    """Total income minus total expenses. May be negative."""
    return total(ledger.income_entries) - total(ledger.expense_entries)


def is_over_budget(ledger: Ledger) -> bool:
    """
    True when a budget goal is set and expenses exceed it.

    A goal of 0 means "no goal", so it never reports over budget.
    """
    if ledger.budget_goal <= 0:
        return False
    return total(ledger.expense_entries) > ledger.budget_goal


def category_breakdown(expense_entries: Iterable[Entry]) -> tuple[CategoryTotal, ...]:
    """
    Group expenses by category and sum each group.

    Categories appear in the order they were first seen.
    """
    groups: dict[str, Decimal] = {}

    for entry in expense_entries:
        if entry.category not in groups:
            groups[entry.category] = Decimal("0")
        groups[entry.category] += entry.amount

    return tuple(
        CategoryTotal(category=category, total=amount)
        for category, amount in groups.items()
    )


def summarize(ledger: Ledger) -> LedgerSummary:
    """Compute every aggregate for a ledger snapshot."""
    total_income = total(ledger.income_entries)
    total_expenses = total(ledger.expense_entries)

    return LedgerSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        budget_goal=ledger.budget_goal,
        is_over_budget=is_over_budget(ledger),
        category_breakdown=category_breakdown(ledger.expense_entries),
    )

"""Tests for the pure aggregation functions."""

import pytest
from decimal import Decimal

from budget_planner.aggregation import (
    balance,
    category_breakdown,
    is_over_budget,
    summarize,
    total,
)
from budget_planner.models.entry import Entry, Ledger


def _expense(entry_id, amount, category):
    return Entry(id=entry_id, amount=Decimal(amount), category=category)


def _income(entry_id, amount, category="Salary"):
    return Entry(id=entry_id, amount=Decimal(amount), category=category)


class TestTotal:
    """Tests for total()."""

    def test_empty(self):
        assert total([]) == Decimal("0")

    def test_sums_amounts(self):
        entries = [_expense(1, "10.10", "Food"), _expense(2, "0.20", "Food")]
        assert total(entries) == Decimal("10.30")


class TestBalance:
    """Tests for balance()."""

    def test_income_minus_expenses(self):
        ledger = Ledger(
            income_entries=(_income(1, "500"),),
            expense_entries=(_expense(2, "200", "Food"),),
        )
        assert balance(ledger) == Decimal("300")

    def test_may_be_negative(self):
        ledger = Ledger(expense_entries=(_expense(1, "75", "Housing"),))
        assert balance(ledger) == Decimal("-75")


class TestIsOverBudget:
    """Tests for is_over_budget()."""

    def test_no_goal_never_over_budget(self):
        """A goal of 0 means no goal, whatever the expenses."""
        ledger = Ledger(expense_entries=(_expense(1, "999999", "Food"),))
        assert is_over_budget(ledger) is False

    def test_over_goal(self):
        ledger = Ledger(
            expense_entries=(_expense(1, "150", "Food"),),
            budget_goal=Decimal("100"),
        )
        assert is_over_budget(ledger) is True

    def test_exactly_at_goal_is_not_over(self):
        ledger = Ledger(
            expense_entries=(_expense(1, "100", "Food"),),
            budget_goal=Decimal("100"),
        )
        assert is_over_budget(ledger) is False

    def test_under_goal(self):
        ledger = Ledger(
            expense_entries=(_expense(1, "40", "Food"),),
            budget_goal=Decimal("100"),
        )
        assert is_over_budget(ledger) is False


class TestCategoryBreakdown:
    """Tests for category_breakdown()."""

    def test_groups_in_first_seen_order(self):
        """Food first, then Transport, with summed amounts."""
        entries = [
            _expense(1, "100", "Food"),
            _expense(2, "50", "Food"),
            _expense(3, "30", "Transport"),
        ]
        breakdown = category_breakdown(entries)

        assert [item.category for item in breakdown] == ["Food", "Transport"]
        assert [item.total for item in breakdown] == [Decimal("150"), Decimal("30")]

    def test_order_follows_first_appearance_not_size(self):
        entries = [
            _expense(1, "5", "Entertainment"),
            _expense(2, "500", "Housing"),
            _expense(3, "5", "Entertainment"),
        ]
        breakdown = category_breakdown(entries)
        assert [item.category for item in breakdown] == ["Entertainment", "Housing"]

    def test_empty(self):
        assert category_breakdown([]) == ()


class TestSummarize:
    """Tests for summarize()."""

    def test_summary_values(self):
        ledger = Ledger(
            income_entries=(_income(1, "500"),),
            expense_entries=(_expense(2, "200", "Food"),),
            budget_goal=Decimal("150"),
        )
        summary = summarize(ledger)

        assert summary.total_income == Decimal("500")
        assert summary.total_expenses == Decimal("200")
        assert summary.balance == Decimal("300")
        assert summary.budget_goal == Decimal("150")
        assert summary.is_over_budget is True
        assert len(summary.category_breakdown) == 1

    def test_empty_ledger(self):
        summary = summarize(Ledger())
        assert summary.total_income == Decimal("0")
        assert summary.balance == Decimal("0")
        assert summary.is_over_budget is False
        assert summary.category_breakdown == ()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

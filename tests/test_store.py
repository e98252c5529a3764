"""
Tests for the LedgerStore

Integration tests for the mutation flow, run against in-memory storage.
"""

import json
import random

import pytest
from decimal import Decimal

from budget_planner.models.audit import AuditEventType
from budget_planner.models.entry import EntryKind, Ledger
from budget_planner.services.storage import (
    BUDGET_GOAL_KEY,
    EXPENSES_KEY,
    INCOME_KEY,
    InMemoryKeyValueStorage,
    StorageError,
)
from budget_planner.store import EntryIdGenerator, create_ledger_store


class FailingStorage(InMemoryKeyValueStorage):
    """In-memory storage that can be told to fail writes."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_writes = False

    def set(self, key, value):
        if self.fail_writes:
            raise StorageError("disk full")
        super().set(key, value)


def _event_types(audit_logger):
    return [event.event_type for event in audit_logger.events]


class TestAddEntries:
    """Tests for add_income / add_expense."""

    def test_income_and_expense_totals(self, store):
        """Income 500 and expense 200 give a balance of 300."""
        store.add_income("500", "Salary")
        result = store.add_expense("200", "Food")

        assert result.accepted is True
        assert store.total_income == Decimal("500")
        assert store.total_expenses == Decimal("200")
        assert store.balance == Decimal("300")
        assert result.summary.balance == Decimal("300")

    def test_add_returns_entry(self, store):
        result = store.add_expense("12.75", "Transport")
        assert result.entry is not None
        assert result.entry.amount == Decimal("12.75")
        assert result.entry.category == "Transport"
        assert store.expense_entries == (result.entry,)

    def test_default_categories(self, store):
        assert store.add_income("1").entry.category == "Salary"
        assert store.add_expense("1").entry.category == "Food"

    @pytest.mark.parametrize("raw", ["", "abc", "0", "-5", "1000001"])
    def test_invalid_amount_rejected(self, store, storage, raw):
        """Rejected input changes nothing and writes nothing."""
        result = store.add_expense(raw, "Food")

        assert result.accepted is False
        assert not result
        assert store.expense_entries == ()
        assert storage.snapshot() == {}

    def test_unknown_category_rejected(self, store):
        assert store.add_income("10", "Food").accepted is False
        assert store.add_expense("10", "Lottery").accepted is False
        assert store.ledger == Ledger()

    def test_rejection_is_audited(self, store, audit_logger):
        store.add_income("abc")
        assert _event_types(audit_logger)[-1] == AuditEventType.INPUT_REJECTED

    def test_entries_keep_insertion_order(self, store):
        for amount in ("3", "1", "2"):
            store.add_expense(amount, "Food")
        assert [e.amount for e in store.expense_entries] == [
            Decimal("3"), Decimal("1"), Decimal("2"),
        ]

    def test_long_precision_amount_accepted_and_audited(self, store, storage, audit_logger):
        """A valid amount with many decimal places is saved and audited."""
        amount = "1." + "0" * 600
        result = store.add_income(amount, "Salary")

        assert result.accepted is True
        assert store.total_income == Decimal("1")
        assert len(json.loads(storage.get(INCOME_KEY))) == 1
        event = audit_logger.events[-1]
        assert event.event_type == AuditEventType.ENTRY_ADDED
        assert event.details["amount"] == amount


class TestIdGeneration:
    """Ids stay unique under rapid successive adds."""

    def test_frozen_clock_still_unique(self, frozen_clock_store):
        ids = [frozen_clock_store.add_expense("1", "Food").entry.id for _ in range(50)]
        assert len(set(ids)) == 50
        assert ids == sorted(ids)

    def test_clock_going_backwards(self):
        ticks = iter([100, 90, 90, 200])
        generator = EntryIdGenerator(clock=lambda: next(ticks))
        assert [generator.next_id() for _ in range(4)] == [100, 101, 102, 200]

    def test_seeded_from_loaded_ledger(self):
        """A far-future id on disk is never reissued."""
        far_future = 9_999_999_999_999
        storage = InMemoryKeyValueStorage({
            INCOME_KEY: json.dumps([{"id": far_future, "amount": "1", "category": "Salary"}]),
        })
        store = create_ledger_store(storage=storage)

        assert store.add_income("2").entry.id == far_future + 1


class TestBudgetGoal:
    """Tests for set_budget_goal and the over-budget flag."""

    def test_set_goal(self, store, storage):
        assert store.set_budget_goal("150").accepted is True
        assert store.budget_goal == Decimal("150")
        assert storage.get(BUDGET_GOAL_KEY) == "150"

    @pytest.mark.parametrize("raw", ["", "abc", "-1", "1000000.5"])
    def test_invalid_goal_rejected(self, store, raw):
        store.set_budget_goal("100")
        assert store.set_budget_goal(raw).accepted is False
        assert store.budget_goal == Decimal("100")

    def test_zero_clears_goal(self, store):
        store.set_budget_goal("100")
        store.add_expense("500", "Housing")
        assert store.is_over_budget is True

        assert store.set_budget_goal("0").accepted is True
        assert store.is_over_budget is False

    def test_over_budget_follows_expenses(self, store):
        store.set_budget_goal("100")
        assert store.is_over_budget is False

        result = store.add_expense("100", "Food")
        assert result.summary.is_over_budget is False

        result = store.add_expense("0.01", "Food")
        assert result.summary.is_over_budget is True

        store.delete_entry(EntryKind.EXPENSE, result.entry.id)
        assert store.is_over_budget is False

    def test_goal_change_is_audited(self, store, audit_logger):
        store.set_budget_goal("75")
        event = audit_logger.events[-1]
        assert event.event_type == AuditEventType.BUDGET_GOAL_SET
        assert event.details == {"previous": "0", "current": "75"}

    def test_long_precision_goal_accepted_and_audited(self, store, audit_logger):
        goal = "250." + "5" * 600
        assert store.set_budget_goal(goal).accepted is True
        assert store.budget_goal == Decimal(goal)
        assert _event_types(audit_logger)[-1] == AuditEventType.BUDGET_GOAL_SET

    def test_exponent_goal_stored_as_plain_text(self, store, storage):
        """Goals entered in exponent form are written without an exponent."""
        store.set_budget_goal("1e3")
        assert storage.get(BUDGET_GOAL_KEY) == "1000"

        store.set_budget_goal("0.0000001")
        assert storage.get(BUDGET_GOAL_KEY) == "0.0000001"


class TestDeleteEntry:
    """Tests for delete_entry."""

    def test_delete_existing(self, store, storage):
        keep = store.add_expense("10", "Food").entry
        drop = store.add_expense("20", "Transport").entry

        result = store.delete_entry(EntryKind.EXPENSE, drop.id)

        assert result.accepted is True
        assert result.entry == drop
        assert store.expense_entries == (keep,)
        assert [r["id"] for r in json.loads(storage.get(EXPENSES_KEY))] == [keep.id]

    def test_delete_missing_is_noop(self, store, storage):
        store.add_expense("10", "Food")
        before = store.ledger
        snapshot = storage.snapshot()

        result = store.delete_entry(EntryKind.EXPENSE, 123456)

        assert result.accepted is False
        assert store.ledger == before
        assert storage.snapshot() == snapshot

    def test_delete_targets_the_named_collection(self, store):
        income = store.add_income("10").entry
        assert store.delete_entry(EntryKind.EXPENSE, income.id).accepted is False
        assert store.delete_entry("income", income.id).accepted is True
        assert store.income_entries == ()

    def test_unknown_kind_rejected(self, store, storage, audit_logger):
        """A kind that is neither income nor expense changes nothing."""
        entry = store.add_expense("10", "Food").entry
        before = store.ledger
        snapshot = storage.snapshot()

        result = store.delete_entry("expenses", entry.id)

        assert result.accepted is False
        assert store.ledger == before
        assert storage.snapshot() == snapshot
        assert _event_types(audit_logger)[-1] == AuditEventType.INPUT_REJECTED

    def test_totals_match_remaining_entries(self, store):
        """After random adds and deletes, totals equal the sum of what remains."""
        rng = random.Random(1234)
        for _ in range(60):
            if store.expense_entries and rng.random() < 0.35:
                victim = rng.choice(store.expense_entries)
                store.delete_entry(EntryKind.EXPENSE, victim.id)
            else:
                amount = f"{rng.randint(1, 100000)}.{rng.randint(0, 99):02d}"
                store.add_expense(amount, rng.choice(["Food", "Transport", "Other"]))

        expected = sum((e.amount for e in store.expense_entries), Decimal("0"))
        assert store.total_expenses == expected
        assert sum(
            (item.total for item in store.category_breakdown), Decimal("0")
        ) == expected


class TestWriteThrough:
    """Every accepted mutation is persisted before it becomes visible."""

    def test_reload_sees_mutations(self, store, storage):
        store.add_income("500", "Salary")
        store.add_expense("200", "Food")
        store.set_budget_goal("300")

        reloaded = create_ledger_store(storage=storage)

        assert reloaded.ledger == store.ledger
        assert reloaded.summary == store.summary

    def test_failed_write_rolls_back(self, audit_logger):
        storage = FailingStorage()
        store = create_ledger_store(storage=storage, audit_logger=audit_logger)
        store.add_income("100")

        storage.fail_writes = True
        with pytest.raises(StorageError):
            store.add_expense("40", "Food")

        assert store.expense_entries == ()
        assert store.total_expenses == Decimal("0")
        assert AuditEventType.SAVE_FAILED in _event_types(audit_logger)

        storage.fail_writes = False
        assert store.add_expense("40", "Food").accepted is True
        assert len(store.expense_entries) == 1


class TestChartProjectionFromStore:
    """The store exposes the chart projection of its expenses."""

    def test_empty_store_projects_placeholder(self, store):
        projection = store.chart_projection()
        assert list(projection.labels) == ["No Expenses Yet"]
        assert list(projection.values) == [1]

    def test_projection_follows_breakdown(self, store):
        store.add_expense("100", "Food")
        store.add_expense("30", "Transport")
        store.add_expense("50", "Food")

        projection = store.chart_projection()
        assert list(projection.labels) == ["Food", "Transport"]
        assert list(projection.values) == [150.0, 30.0]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

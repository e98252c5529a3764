"""
Ledger Store

This module owns the ledger and defines the mutation flow:

    raw input -> validate -> new ledger snapshot -> write-through -> recompute

DESIGN DECISION: The store is an explicit object handed to the UI.
Every mutator returns a MutationResult carrying the freshly recomputed
summary, so the UI never has to infer when aggregates changed.

The store enforces the boundaries:
- Invalid input never reaches the ledger (accepted=False, no exception)
- Nothing is kept in memory that failed to persist
- Every mutation, accepted or rejected, is audited
"""

import time
from decimal import Decimal
from typing import Any, Callable, Optional

from budget_planner.aggregation import summarize
from budget_planner.audit import AuditLogger
from budget_planner.config import get_settings
from budget_planner.models.entry import (
    DEFAULT_CATEGORY,
    CategoryTotal,
    Entry,
    EntryKind,
    Ledger,
    LedgerSummary,
    MutationResult,
)
from budget_planner.services.chart import ChartProjection, project
from budget_planner.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
    LedgerPersistence,
    StorageError,
)
from budget_planner.validation import (
    is_valid_category,
    parse_amount,
    parse_budget_goal,
)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class EntryIdGenerator:
    """
    Creation-time derived entry ids.

    Ids are milliseconds since the epoch, bumped past the last issued id
    when two entries land in the same millisecond (or the clock steps back).
    """

    def __init__(
        self,
        last_id: Optional[int] = None,
        clock: Callable[[], int] = _now_ms,
    ):
        self._last_id = last_id if last_id is not None else -1
        self._clock = clock

    def next_id(self) -> int:
        candidate = self._clock()
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate


class LedgerStore:
    """
    Owns the ledger, validates mutations and keeps storage in sync.

    Read access goes through immutable snapshots (ledger, summary).
    """

    def __init__(
        self,
        persistence: LedgerPersistence,
        audit_logger: Optional[AuditLogger] = None,
        id_generator: Optional[EntryIdGenerator] = None,
    ):
        self._persistence = persistence
        self._audit_logger = audit_logger or AuditLogger()

        # Loaded once at startup
        self._ledger = self._persistence.load()
        self._summary = summarize(self._ledger)
        self._id_generator = id_generator or EntryIdGenerator(
            last_id=self._ledger.max_entry_id
        )

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def summary(self) -> LedgerSummary:
        return self._summary

    @property
    def income_entries(self) -> tuple[Entry, ...]:
        return self._ledger.income_entries

    @property
    def expense_entries(self) -> tuple[Entry, ...]:
        return self._ledger.expense_entries

    @property
    def budget_goal(self) -> Decimal:
        return self._ledger.budget_goal

    @property
    def total_income(self) -> Decimal:
        return self._summary.total_income

    @property
    def total_expenses(self) -> Decimal:
        return self._summary.total_expenses

    @property
    def balance(self) -> Decimal:
        return self._summary.balance

    @property
    def is_over_budget(self) -> bool:
        return self._summary.is_over_budget

    @property
    def category_breakdown(self) -> tuple[CategoryTotal, ...]:
        return self._summary.category_breakdown

    def chart_projection(self) -> ChartProjection:
        """Project the current expenses for the chart."""
        return project(self._ledger.expense_entries)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def add_income(
        self,
        amount: Any,
        category: str = DEFAULT_CATEGORY[EntryKind.INCOME],
    ) -> MutationResult:
        """Record an income entry. Invalid input is ignored."""
        return self._add_entry(EntryKind.INCOME, amount, category)

    def add_expense(
        self,
        amount: Any,
        category: str = DEFAULT_CATEGORY[EntryKind.EXPENSE],
    ) -> MutationResult:
        """Record an expense entry. Invalid input is ignored."""
        return self._add_entry(EntryKind.EXPENSE, amount, category)

    def set_budget_goal(self, raw: Any) -> MutationResult:
        """
        Replace the monthly budget goal.

        0 clears the goal. Unparseable, negative or over-ceiling input
        is ignored.
        """
        goal = parse_budget_goal(raw)
        if goal is None:
            return self._reject("set_budget_goal", raw, "invalid budget goal")

        previous = self._ledger.budget_goal
        self._commit(self._ledger.with_budget_goal(goal), "set_budget_goal")
        self._audit_logger.log_budget_goal_set(str(previous), str(goal))

        return MutationResult(accepted=True, summary=self._summary)

    def delete_entry(self, kind: EntryKind, entry_id: int) -> MutationResult:
        """
        Remove an entry by id.

        Unknown ids are a no-op: nothing changes and nothing is written.
        An unknown kind is rejected the same way.
        Asking the user for confirmation is the caller's job.
        """
        try:
            kind = EntryKind(kind)
        except ValueError:
            return self._reject("delete_entry", kind, "unknown entry kind")
        entries = self._ledger.entries_for(kind)

        removed: Optional[Entry] = None
        remaining = []
        for entry in entries:
            if removed is None and entry.id == entry_id:
                removed = entry
            else:
                remaining.append(entry)

        if removed is None:
            return MutationResult(accepted=False, summary=self._summary)

        self._commit(
            self._ledger.with_entries(kind, tuple(remaining)),
            f"delete_{kind.value}",
        )
        self._audit_logger.log_entry_deleted(
            kind=kind.value,
            entry_id=removed.id,
            amount=str(removed.amount),
            category=removed.category,
        )

        return MutationResult(accepted=True, summary=self._summary, entry=removed)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _add_entry(self, kind: EntryKind, amount: Any, category: Any) -> MutationResult:
        operation = f"add_{kind.value}"

        parsed = parse_amount(amount)
        if parsed is None:
            return self._reject(operation, amount, "invalid amount")

        if not is_valid_category(kind, category):
            return self._reject(operation, category, f"unknown {kind.value} category")

        entry = Entry(
            id=self._id_generator.next_id(),
            amount=parsed,
            category=category.strip(),
        )
        entries = self._ledger.entries_for(kind) + (entry,)

        self._commit(self._ledger.with_entries(kind, entries), operation)
        self._audit_logger.log_entry_added(
            kind=kind.value,
            entry_id=entry.id,
            amount=str(entry.amount),
            category=entry.category,
        )

        return MutationResult(accepted=True, summary=self._summary, entry=entry)

    def _reject(self, operation: str, raw_value: Any, reason: str) -> MutationResult:
        self._audit_logger.log_input_rejected(operation, raw_value, reason)
        return MutationResult(accepted=False, summary=self._summary)

    def _commit(self, ledger: Ledger, operation: str) -> None:
        """
        Write the new snapshot through to storage, then adopt it.

        On a failed write the previous snapshot stays current and
        StorageError propagates.
        """
        try:
            self._persistence.save(ledger)
        except StorageError as e:
            self._audit_logger.log_save_failed(operation, str(e))
            # Storage may hold a partial write; restore the last good snapshot
            try:
                self._persistence.save(self._ledger)
            except StorageError as restore_error:
                self._audit_logger.log_save_failed(f"restore after {operation}", str(restore_error))
            raise

        self._ledger = ledger
        self._summary = summarize(ledger)


def create_storage() -> KeyValueStorageInterface:
    """Build the storage backend named in settings."""
    settings = get_settings().storage
    if settings.backend == "memory":
        return InMemoryKeyValueStorage()
    return JsonFileKeyValueStorage(
        path=settings.path,
        retry_attempts=settings.retry_attempts,
    )


def create_ledger_store(
    storage: Optional[KeyValueStorageInterface] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> LedgerStore:
    """
    Factory function to create a ready-to-use store.

    Args:
        storage: Storage backend. Defaults to the configured one.
        audit_logger: Audit logger. Defaults to a local-only logger.

    Returns:
        A LedgerStore loaded from storage
    """
    audit_logger = audit_logger or AuditLogger()
    if storage is None:
        storage = create_storage()
    persistence = LedgerPersistence(
        storage=storage,
        audit_logger=audit_logger,
    )
    return LedgerStore(persistence=persistence, audit_logger=audit_logger)

"""
Ledger Persistence Adapter

Maps a Ledger onto three independently keyed values:

    income      JSON array of {id, amount, category}
    expenses    JSON array of {id, amount, category}
    budgetGoal  plain decimal text

DESIGN DECISION: Each key is loaded on its own. A corrupt or unreadable
value falls back to that key's default (empty list or zero) and is logged;
it never stops the other keys from loading.

Saving is write-through: the store calls save() after every successful
mutation, and a failed write raises StorageError instead of being dropped.
"""

import json
from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from budget_planner.audit import AuditLogger
from budget_planner.models.entry import (
    CATEGORIES_BY_KIND,
    MAX_AMOUNT,
    Entry,
    EntryKind,
    Ledger,
)
from budget_planner.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
)


INCOME_KEY = "income"
EXPENSES_KEY = "expenses"
BUDGET_GOAL_KEY = "budgetGoal"

STORAGE_KEYS = {
    EntryKind.INCOME: INCOME_KEY,
    EntryKind.EXPENSE: EXPENSES_KEY,
}

_entry_list_adapter = TypeAdapter(list[Entry])


class CorruptValueError(ValueError):
    """A stored value could not be turned back into ledger data."""
    pass


def serialize_entries(entries: tuple[Entry, ...]) -> str:
    """Serialize an entry collection to a JSON array of records."""
    return json.dumps([
        {
            "id": entry.id,
            "amount": format(entry.amount, "f"),
            "category": entry.category,
        }
        for entry in entries
    ])


def deserialize_entries(raw: str, kind: EntryKind) -> tuple[Entry, ...]:
    """
    Parse a stored entry collection.

    Raises:
        CorruptValueError: On malformed JSON, invalid records, unknown
            categories or duplicate ids
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptValueError(f"invalid JSON: {e}")

    if not isinstance(data, list):
        raise CorruptValueError("expected a JSON array of entries")

    try:
        entries = _entry_list_adapter.validate_python(data)
    except ValidationError as e:
        raise CorruptValueError(f"invalid entry record: {e.error_count()} error(s)")

    allowed = CATEGORIES_BY_KIND[kind]
    seen: set[int] = set()
    for entry in entries:
        if entry.category not in allowed:
            raise CorruptValueError(f"unknown {kind.value} category: {entry.category}")
        if entry.id in seen:
            raise CorruptValueError(f"duplicate entry id: {entry.id}")
        seen.add(entry.id)

    return tuple(entries)


def serialize_budget_goal(budget_goal: Decimal) -> str:
    """Budget goal as plain decimal text."""
    return format(budget_goal, "f")


def deserialize_budget_goal(raw: str) -> Decimal:
    """
    Parse a stored budget goal.

    Raises:
        CorruptValueError: If the text is not a decimal in [0, 1,000,000]
    """
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise CorruptValueError(f"not a decimal: {raw!r}")

    if not value.is_finite() or value < 0 or value > MAX_AMOUNT:
        raise CorruptValueError(f"budget goal out of range: {raw!r}")

    return value


class LedgerPersistence:
    """
    Loads and saves the ledger through a key-value storage backend.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger

    def _read(self, key: str) -> Optional[str]:
        """Read one key; an unreadable backend counts as a corrupt value."""
        try:
            return self._storage.get(key)
        except StorageError as e:
            self._report_corrupt(key, str(e))
            return None

    def _report_corrupt(self, key: str, error_message: str) -> None:
        if self._audit_logger:
            self._audit_logger.log_storage_key_corrupt(key, error_message)

    def _load_entries(self, kind: EntryKind) -> tuple[Entry, ...]:
        key = STORAGE_KEYS[kind]
        raw = self._read(key)
        if raw is None:
            return ()

        try:
            return deserialize_entries(raw, kind)
        except CorruptValueError as e:
            self._report_corrupt(key, str(e))
            return ()

    def _load_budget_goal(self) -> Decimal:
        raw = self._read(BUDGET_GOAL_KEY)
        if raw is None:
            return Decimal("0")

        try:
            return deserialize_budget_goal(raw)
        except CorruptValueError as e:
            self._report_corrupt(BUDGET_GOAL_KEY, str(e))
            return Decimal("0")

    def load(self) -> Ledger:
        """
        Build the ledger from storage.

        Absent keys yield defaults; corrupt keys yield defaults and a
        storage_key_corrupt audit event.
        """
        ledger = Ledger(
            income_entries=self._load_entries(EntryKind.INCOME),
            expense_entries=self._load_entries(EntryKind.EXPENSE),
            budget_goal=self._load_budget_goal(),
        )

        if self._audit_logger:
            self._audit_logger.log_ledger_loaded(
                income_count=len(ledger.income_entries),
                expense_count=len(ledger.expense_entries),
                budget_goal=str(ledger.budget_goal),
            )

        return ledger

    def save(self, ledger: Ledger) -> None:
        """
        Write all three keys.

        Raises:
            StorageError: If any write fails
        """
        self._storage.set(INCOME_KEY, serialize_entries(ledger.income_entries))
        self._storage.set(EXPENSES_KEY, serialize_entries(ledger.expense_entries))
        self._storage.set(BUDGET_GOAL_KEY, serialize_budget_goal(ledger.budget_goal))

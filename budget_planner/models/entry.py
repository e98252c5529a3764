"""
Core Data Models for the Budget Planner

These models define the schemas for everything the engine stores or derives.
They are designed to:
1. Enforce the ledger invariants at construction time
2. Be immutable, so every reader works on a snapshot
3. Be serializable for the key-value snapshot

DESIGN DECISION: A Ledger is never edited in place. Every mutation builds a
new Ledger, which keeps aggregate recomputation trivially consistent.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


MAX_AMOUNT = Decimal("1000000")


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class EntryKind(str, Enum):
    """Which collection of the ledger an entry belongs to."""
    INCOME = "income"
    EXPENSE = "expense"


class IncomeCategory(str, Enum):
    """Supported income categories."""
    SALARY = "Salary"
    FREELANCE = "Freelance"
    INVESTMENTS = "Investments"
    OTHER = "Other"


class ExpenseCategory(str, Enum):
    """Supported expense categories."""
    FOOD = "Food"
    TRANSPORT = "Transport"
    HOUSING = "Housing"
    ENTERTAINMENT = "Entertainment"
    OTHER = "Other"


CATEGORIES_BY_KIND: dict[EntryKind, tuple[str, ...]] = {
    EntryKind.INCOME: tuple(c.value for c in IncomeCategory),
    EntryKind.EXPENSE: tuple(c.value for c in ExpenseCategory),
}

DEFAULT_CATEGORY: dict[EntryKind, str] = {
    EntryKind.INCOME: IncomeCategory.SALARY.value,
    EntryKind.EXPENSE: ExpenseCategory.FOOD.value,
}


# =============================================================================
# LEDGER MODELS
# =============================================================================

class Entry(BaseModel):
    """
    A single recorded income or expense transaction.

    Entries are frozen: they can be removed from the ledger but never edited.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: int = Field(
        ...,
        ge=0,
        description="Creation-time derived identifier, unique within its collection"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_AMOUNT,
        description="Transaction amount"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category name from the fixed set for the entry's kind"
    )


def _check_unique_ids(entries: tuple[Entry, ...], label: str) -> None:
    seen: set[int] = set()
    for entry in entries:
        if entry.id in seen:
            raise ValueError(f"Duplicate entry id {entry.id} in {label}")
        seen.add(entry.id)


class Ledger(BaseModel):
    """
    The full set of entries plus the monthly budget goal.

    Collections keep insertion order. A budget goal of 0 means "no goal".
    """
    model_config = ConfigDict(frozen=True)

    income_entries: tuple[Entry, ...] = Field(default_factory=tuple)
    expense_entries: tuple[Entry, ...] = Field(default_factory=tuple)
    budget_goal: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        le=MAX_AMOUNT,
        description="Monthly budget goal, 0 when unset"
    )

    @model_validator(mode='after')
    def validate_unique_ids(self) -> 'Ledger':
        """Ids must be unique within each collection."""
        _check_unique_ids(self.income_entries, "income")
        _check_unique_ids(self.expense_entries, "expenses")
        return self

    def entries_for(self, kind: EntryKind) -> tuple[Entry, ...]:
        """Return the collection for an entry kind."""
        if kind == EntryKind.INCOME:
            return self.income_entries
        return self.expense_entries

    def with_entries(self, kind: EntryKind, entries: tuple[Entry, ...]) -> 'Ledger':
        """Return a new ledger with one collection replaced."""
        if kind == EntryKind.INCOME:
            return Ledger(
                income_entries=entries,
                expense_entries=self.expense_entries,
                budget_goal=self.budget_goal,
            )
        return Ledger(
            income_entries=self.income_entries,
            expense_entries=entries,
            budget_goal=self.budget_goal,
        )

    def with_budget_goal(self, budget_goal: Decimal) -> 'Ledger':
        """Return a new ledger with the budget goal replaced."""
        return Ledger(
            income_entries=self.income_entries,
            expense_entries=self.expense_entries,
            budget_goal=budget_goal,
        )

    @property
    def max_entry_id(self) -> Optional[int]:
        """Largest id across both collections, or None for an empty ledger."""
        ids = [e.id for e in self.income_entries] + [e.id for e in self.expense_entries]
        return max(ids) if ids else None


# =============================================================================
# DERIVED MODELS
# =============================================================================

class CategoryTotal(BaseModel):
    """Summed expense amount for one category."""
    model_config = ConfigDict(frozen=True)

    category: str
    total: Decimal


class LedgerSummary(BaseModel):
    """
    Aggregates derived from a ledger snapshot.

    This is what the presentation layer reads after every mutation.
    """
    model_config = ConfigDict(frozen=True)

    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    budget_goal: Decimal
    is_over_budget: bool
    category_breakdown: tuple[CategoryTotal, ...] = Field(default_factory=tuple)


class MutationResult(BaseModel):
    """
    Outcome of a store mutation.

    Rejected input is reported with accepted=False, never with an exception.
    """
    model_config = ConfigDict(frozen=True)

    accepted: bool
    summary: LedgerSummary
    entry: Optional[Entry] = Field(
        default=None,
        description="The entry that was added or removed, if any"
    )

    def __bool__(self) -> bool:
        return self.accepted

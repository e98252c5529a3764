"""
Data Models Package

This package contains all Pydantic models used by the Budget Planner.
Everything the engine stores or derives conforms to these schemas.
"""

from budget_planner.models.entry import (
    CATEGORIES_BY_KIND,
    DEFAULT_CATEGORY,
    MAX_AMOUNT,
    CategoryTotal,
    Entry,
    EntryKind,
    ExpenseCategory,
    IncomeCategory,
    Ledger,
    LedgerSummary,
    MutationResult,
)
from budget_planner.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "CATEGORIES_BY_KIND",
    "DEFAULT_CATEGORY",
    "MAX_AMOUNT",
    "CategoryTotal",
    "Entry",
    "EntryKind",
    "ExpenseCategory",
    "IncomeCategory",
    "Ledger",
    "LedgerSummary",
    "MutationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

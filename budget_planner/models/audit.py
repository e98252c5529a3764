"""
Audit Models for the Budget Planner

Every mutation of the ledger, accepted or rejected, produces an audit event.
This provides:
1. Traceability of what the user changed
2. Debugging information when storage or rendering fails

DESIGN DECISION: Audit events are emitted to the structured log only.
They are not persisted next to the ledger snapshot, which stays a single
flat snapshot rather than a history.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger mutations
    ENTRY_ADDED = "entry_added"
    ENTRY_DELETED = "entry_deleted"
    BUDGET_GOAL_SET = "budget_goal_set"
    INPUT_REJECTED = "input_rejected"

    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    STORAGE_KEY_CORRUPT = "storage_key_corrupt"
    SAVE_FAILED = "save_failed"

    # Display
    CHART_RENDER_FAILED = "chart_render_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'income', 'expense', 'budget_goal')"
    )
    entity_id: Optional[int] = Field(
        default=None,
        description="Entry id this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.entry_added("income", entry_id, "500", "Salary")
        event = AuditEventBuilder.input_rejected("add_expense", "abc", "invalid amount")
    """

    @staticmethod
    def entry_added(
        kind: str,
        entry_id: int,
        amount: str,
        category: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_ADDED,
            entity_type=kind,
            entity_id=entry_id,
            description=f"Added {kind} entry in {category}",
            details={
                "amount": amount,
                "category": category,
            },
            is_user_action=True,
        )

    @staticmethod
    def entry_deleted(
        kind: str,
        entry_id: int,
        amount: str,
        category: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_DELETED,
            entity_type=kind,
            entity_id=entry_id,
            description=f"Deleted {kind} entry from {category}",
            details={
                "amount": amount,
                "category": category,
            },
            is_user_action=True,
        )

    @staticmethod
    def budget_goal_set(
        previous: str,
        current: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_GOAL_SET,
            entity_type="budget_goal",
            description="Budget goal changed",
            details={
                "previous": previous,
                "current": current,
            },
            is_user_action=True,
        )

    @staticmethod
    def input_rejected(
        operation: str,
        raw_value: Any,
        reason: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"{operation} rejected: {reason}",
            details={
                "operation": operation,
                "raw_value": repr(raw_value),
                "reason": reason,
            },
            is_user_action=True,
        )

    @staticmethod
    def ledger_loaded(
        income_count: int,
        expense_count: int,
        budget_goal: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            entity_type="ledger",
            description=(
                f"Ledger loaded with {income_count} income and "
                f"{expense_count} expense entries"
            ),
            details={
                "income_count": income_count,
                "expense_count": expense_count,
                "budget_goal": budget_goal,
            },
        )

    @staticmethod
    def storage_key_corrupt(
        key: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_KEY_CORRUPT,
            severity=AuditSeverity.WARNING,
            entity_type="storage_key",
            description=f"Stored value for '{key}' is unreadable, using default",
            error_message=error_message,
            details={
                "key": key,
            },
        )

    @staticmethod
    def save_failed(
        operation: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            description=f"Could not persist ledger after {operation}",
            error_message=error_message,
            details={
                "operation": operation,
            },
        )

    @staticmethod
    def chart_render_failed(
        renderer: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CHART_RENDER_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="chart",
            description=f"Chart rendering failed in {renderer}",
            error_message=error_message,
            details={
                "renderer": renderer,
            },
        )

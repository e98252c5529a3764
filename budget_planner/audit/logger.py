"""
Audit Logger

DESIGN DECISION: Every ledger mutation and every degraded path
(corrupt stored value, failed write, failed chart) is logged.
This provides:
1. Traceability of user actions
2. Debugging capability when storage or rendering misbehaves

The audit logger:
- Is synchronous, like the rest of the engine
- Optionally retains the session's events for the UI and tests
"""

from typing import Any, Callable, Optional

import structlog
from pydantic import ValidationError

from budget_planner.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditSeverity,
)


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Events go to the structured local log. An optional in-memory sink
    keeps the events of the current session (used by the UI and tests).
    """

    def __init__(self, keep_events: bool = False):
        """
        Initialize audit logger.

        Args:
            keep_events: Also retain events in memory for inspection.
        """
        self._logger = structlog.get_logger("budget_planner.audit")
        self._events: Optional[list[AuditEvent]] = [] if keep_events else None

    @property
    def events(self) -> list[AuditEvent]:
        """Events retained in this session (empty unless keep_events)."""
        return list(self._events or [])

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at a level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._events is not None:
            self._events.append(event)

    def _build_and_log(self, build: Callable[..., AuditEvent], *args: Any) -> None:
        """Build an event and log it. An event that fails validation is
        reported on the log instead of interrupting the caller."""
        try:
            event = build(*args)
        except ValidationError as e:
            self._logger.error(
                "audit_event_invalid",
                builder=build.__name__,
                error=str(e),
            )
            return
        self.log(event)

    def log_entry_added(
        self,
        kind: str,
        entry_id: int,
        amount: str,
        category: str,
    ) -> None:
        """Log a new income or expense entry."""
        self._build_and_log(AuditEventBuilder.entry_added, kind, entry_id, amount, category)

    def log_entry_deleted(
        self,
        kind: str,
        entry_id: int,
        amount: str,
        category: str,
    ) -> None:
        """Log an entry removal."""
        self._build_and_log(AuditEventBuilder.entry_deleted, kind, entry_id, amount, category)

    def log_budget_goal_set(self, previous: str, current: str) -> None:
        """Log a budget goal change."""
        self._build_and_log(AuditEventBuilder.budget_goal_set, previous, current)

    def log_input_rejected(
        self,
        operation: str,
        raw_value: Any,
        reason: str,
    ) -> None:
        """Log input that was silently rejected."""
        self._build_and_log(AuditEventBuilder.input_rejected, operation, raw_value, reason)

    def log_ledger_loaded(
        self,
        income_count: int,
        expense_count: int,
        budget_goal: str,
    ) -> None:
        """Log the startup load."""
        self._build_and_log(AuditEventBuilder.ledger_loaded, income_count, expense_count, budget_goal)

    def log_storage_key_corrupt(self, key: str, error_message: str) -> None:
        """Log a stored value that fell back to its default."""
        self._build_and_log(AuditEventBuilder.storage_key_corrupt, key, error_message)

    def log_save_failed(self, operation: str, error_message: str) -> None:
        """Log a write-through failure."""
        self._build_and_log(AuditEventBuilder.save_failed, operation, error_message)

    def log_chart_render_failed(self, renderer: str, error_message: str) -> None:
        """Log a rendering backend failure."""
        self._build_and_log(AuditEventBuilder.chart_render_failed, renderer, error_message)

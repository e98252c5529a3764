"""Audit logging package."""

from budget_planner.audit.logger import AuditLogger

__all__ = ["AuditLogger"]

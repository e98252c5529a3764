"""
Input Validation

Raw values arrive from form fields as strings (or occasionally numbers).
This module turns them into Decimals and decides whether they are
acceptable ledger values.

IMPORTANT: Validation never raises and never corrects input.
Callers get a Decimal or None, or a plain bool.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from budget_planner.models.entry import CATEGORIES_BY_KIND, MAX_AMOUNT, EntryKind


def _to_decimal(raw: Any) -> Optional[Decimal]:
    """Parse a raw form value into a finite Decimal, or None."""
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, (int, float)):
        # str() keeps the float's shortest repr, so 999.99 stays 999.99
        text = str(raw)
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not value.is_finite():
        return None
    return value


def parse_amount(raw: Any) -> Optional[Decimal]:
    """
    Parse an entry amount.

    Returns the Decimal if it is strictly positive and does not exceed
    MAX_AMOUNT, None otherwise.
    """
    value = _to_decimal(raw)
    if value is None or value <= 0 or value > MAX_AMOUNT:
        return None
    return value


def is_valid_amount(raw: Any) -> bool:
    """True iff raw parses to a decimal in (0, 1,000,000]."""
    return parse_amount(raw) is not None


def parse_budget_goal(raw: Any) -> Optional[Decimal]:
    """
    Parse a budget goal.

    Unlike entry amounts, 0 is allowed: it clears the goal.
    """
    value = _to_decimal(raw)
    if value is None or value < 0 or value > MAX_AMOUNT:
        return None
    return value


def is_valid_category(kind: EntryKind, category: Any) -> bool:
    """Check a category against the fixed set for an entry kind."""
    if not isinstance(category, str):
        return False
    return category.strip() in CATEGORIES_BY_KIND[EntryKind(kind)]

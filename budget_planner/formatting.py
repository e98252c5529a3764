"""Display helpers shared by the UI: currency text and entry descriptions."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from budget_planner.config import get_settings
from budget_planner.models.entry import Entry, EntryKind


CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
}


def format_currency(
    amount: Union[Decimal, float, int],
    currency: Optional[str] = None,
) -> str:
    """
    Format an amount for display, e.g. $1,234.50 or -$300.00.

    Unknown currency codes are shown as a prefix ("CHF 10.00").
    """
    currency = (currency or get_settings().app.currency_code).upper()
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    sign = "-" if value < 0 else ""
    digits = f"{abs(value):,.2f}"
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol is None:
        return f"{sign}{currency} {digits}"
    return f"{sign}{symbol}{digits}"


def describe_entry(
    kind: EntryKind,
    entry: Entry,
    currency: Optional[str] = None,
) -> str:
    """Short description used in delete confirmations."""
    return f"{EntryKind(kind).value} of {format_currency(entry.amount, currency)} for {entry.category}"

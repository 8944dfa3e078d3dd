"""Currency and date presentation helpers."""
from __future__ import annotations

from datetime import date, datetime

DEFAULT_CURRENCY = "₹"


def format_price(amount: int | float, symbol: str = DEFAULT_CURRENCY) -> str:
    """Render ``amount`` the way service cards show it, e.g. ``"₹500"``."""
    if float(amount).is_integer():
        return f"{symbol}{int(amount)}"
    return f"{symbol}{amount}"


def parse_price(text: str, symbol: str = DEFAULT_CURRENCY) -> float:
    return float(text.replace(symbol, "").strip())


def format_long_date(value: str) -> str:
    """``"2026-10-19"`` -> ``"October 19, 2026"``; other input is returned as is."""
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return value
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def format_short_date(value: datetime) -> str:
    return f"{value.month}/{value.day}/{value.year}"

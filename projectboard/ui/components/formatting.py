"""
Display formatting for budgets, counts, rates, and due dates.

Budgets are whole currency units everywhere else; scaling to K/M/B happens only here.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

MISSING = "–"

BUDGET_SUFFIXES = (
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
)


def format_count(value: Optional[int]) -> str:
    return MISSING if value is None else f"{int(value):,}"


def format_currency(
    value: Optional[float],
    currency: str = "UGX",
    decimals: int = 0,
    compact: bool = True,
) -> str:
    """Budget as "UGX 4.6M" when compact, otherwise "UGX 4,550,000"."""
    if value is None:
        return MISSING
    amount = float(value)
    if compact:
        for factor, suffix in BUDGET_SUFFIXES:
            if abs(amount) >= factor:
                return f"{currency} {amount / factor:,.{decimals}f}{suffix}"
    return f"{currency} {amount:,.{decimals}f}"


def format_percent(value: Optional[float], decimals: int = 1) -> str:
    return MISSING if value is None else f"{value:.{decimals}f}%"


def format_short_date(value: Optional[dt.date]) -> str:
    """Month abbreviation and day, e.g. "Feb 15"."""
    if value is None:
        return MISSING
    return f"{value:%b} {value.day}"

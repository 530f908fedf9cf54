"""General utilities for FinTrack

Contents
--------
- Validation helpers
- Rate conversions (annual percent → monthly fraction)
- Month helpers (add_months, month_label)
- Formatting helpers (format_currency, compact_amount)
"""

from __future__ import annotations

from datetime import date

import pandas as pd

from .constants import MONTHS_PER_YEAR

__all__ = [
    # Validation
    "check_non_negative",
    # Rates
    "annual_percent_to_monthly",
    # Months
    "add_months",
    "month_label",
    # Formatting
    "format_currency",
    "compact_amount",
]

# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def check_non_negative(name: str, value: float) -> None:
    """Raise if *value* is negative (strict)."""
    if value < 0:
        raise ValueError(f"{name} must be non-negative (got {value}).")


# ---------------------------------------------------------------------------
# Rate conversions
# ---------------------------------------------------------------------------

def annual_percent_to_monthly(rate_percent: float) -> float:
    """Convert a nominal annual rate in percent to a monthly fraction.

    Uses simple division, 12% -> 0.01, which is how installment loans and
    SIP calculators quote their monthly rate. This is *not* the compounded
    equivalent monthly rate.
    """
    return float(rate_percent) / 100.0 / MONTHS_PER_YEAR


# ---------------------------------------------------------------------------
# Month helpers
# ---------------------------------------------------------------------------

def add_months(start: date, months: int) -> date:
    """Return the first day of the month *months* after *start*."""
    ts = pd.Timestamp(start.year, start.month, 1) + pd.DateOffset(months=int(months))
    return ts.date()


def month_label(month: int) -> str:
    """Human label for a month offset: 0 -> 'Now', 5 -> '5m', 15 -> '1y 3m'."""
    if month <= 0:
        return "Now"
    years, rem = divmod(int(month), MONTHS_PER_YEAR)
    return f"{years}y {rem}m" if years > 0 else f"{rem}m"


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_currency(value: float, symbol: str = "₹", decimals: int = 0) -> str:
    """
    Format a monetary value with thousands separators.

    Parameters
    ----------
    value : float
        Monetary value in raw units.
    symbol : str, default '₹'
        Currency symbol prefix.
    decimals : int, default 0
        Number of decimal places to display.

    Returns
    -------
    str
        Formatted currency string. Negative values keep their sign in front
        of the symbol.

    Examples
    --------
    >>> format_currency(1234567)
    '₹1,234,567'
    >>> format_currency(-50.5, symbol='$', decimals=2)
    '-$50.50'
    """
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"


def compact_amount(value: float) -> str:
    """
    Compact amount for axis ticks and tight tables.

    Uses the Indian numbering units: crore (1e7), lakh (1e5) and thousand.

    Examples
    --------
    >>> compact_amount(25_000_000)
    '2.5Cr'
    >>> compact_amount(150_000)
    '1.5L'
    >>> compact_amount(2_500)
    '2.5K'
    >>> compact_amount(999)
    '999'
    """
    if value >= 10_000_000:
        return f"{value / 10_000_000:.1f}Cr"
    if value >= 100_000:
        return f"{value / 100_000:.1f}L"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return f"{value:.0f}"

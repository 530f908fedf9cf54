"""
Growth projection module for FinTrack.

Purpose
-------
Compound-growth math for investments: maturity of a systematic monthly
investment (SIP), future value of a lump sum, and the compound annual growth
rate (CAGR) between two observed values. Also builds the year-by-year
projection tables used by calculator views.

Key Mathematical Framework
--------------------------
- SIP (annuity-due): FV = M * ((1 + r)^n - 1) / r * (1 + r),
  r = annual_return_percent / 100 / 12, n = years * 12
- Lump sum:          FV = P * (1 + R)^years, R = annual_return_percent / 100
- CAGR:              ((final / initial)^(1 / years) - 1) * 100

The SIP formula assumes each contribution is made at the *start* of its
month, so every installment earns one extra month of return compared to an
ordinary annuity.

Example
-------
>>> sip_maturity(5000, 10, 12)
>>> lump_sum(100_000, 2.5, 10)
>>> cagr(100_000, 300_000, 5)   # ~24.57
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

from .constants import (
    DEFAULT_SCENARIO_RATES,
    MONTHS_PER_YEAR,
    SCENARIO_MAX_RATE,
    SCENARIO_MIN_RATE,
    SCENARIO_SPREAD,
)
from .utils import annual_percent_to_monthly

__all__ = [
    "SipProjection",
    "sip_maturity",
    "lump_sum",
    "cagr",
    "sip_projection",
    "total_gain",
    "compare_sip_lump_sum",
    "project_lump_sum",
    "cagr_scenarios",
]


# ---------------------------------------------------------------------------
# Scalar projections
# ---------------------------------------------------------------------------

def sip_maturity(monthly_amount: float, years: float, annual_return_percent: float) -> float:
    """Maturity value of a monthly investment made at the start of each month."""
    r = annual_percent_to_monthly(annual_return_percent)
    n = years * MONTHS_PER_YEAR
    if r == 0:
        return monthly_amount * n
    return monthly_amount * ((1.0 + r) ** n - 1.0) / r * (1.0 + r)


def lump_sum(principal: float, years: float, annual_return_percent: float) -> float:
    """Future value of a single investment compounded annually. *years* may be fractional."""
    return principal * (1.0 + annual_return_percent / 100.0) ** years


def cagr(initial_value: float, final_value: float, years: float) -> float:
    """
    Compound annual growth rate in percent.

    Returns 0.0 when the rate is undefined (``initial_value <= 0`` or
    ``years <= 0``); callers show that as "N/A".
    """
    if initial_value <= 0 or years <= 0:
        return 0.0
    return ((final_value / initial_value) ** (1.0 / years) - 1.0) * 100.0


# ---------------------------------------------------------------------------
# Breakdowns
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SipProjection:
    total_invested: float
    maturity_value: float
    total_returns: float


def sip_projection(monthly_amount: float, years: float, annual_return_percent: float) -> SipProjection:
    """Split a SIP maturity into the amount contributed and the returns earned."""
    invested = monthly_amount * years * MONTHS_PER_YEAR
    maturity = sip_maturity(monthly_amount, years, annual_return_percent)
    return SipProjection(
        total_invested=invested,
        maturity_value=maturity,
        total_returns=maturity - invested,
    )


def total_gain(initial_value: float, final_value: float) -> Tuple[float, float]:
    """Return ``(gain_amount, gain_percent)``; the percent is 0.0 when ``initial_value <= 0``."""
    amount = final_value - initial_value
    percent = amount / initial_value * 100.0 if initial_value > 0 else 0.0
    return amount, percent


# ---------------------------------------------------------------------------
# Year-by-year tables
# ---------------------------------------------------------------------------

def compare_sip_lump_sum(
    sip_monthly: float,
    lump_sum_amount: float,
    years: int,
    annual_return_percent: float,
) -> pd.DataFrame:
    """
    Value of a SIP and of a lump sum at the end of each year.

    Returns
    -------
    pd.DataFrame
        Indexed by ``year`` (0..years) with columns ``sip`` and ``lump_sum``.
        The SIP is worth 0 at year 0 since nothing has been contributed yet.
    """
    year_grid = np.arange(int(years) + 1)
    sip_values = [
        0.0 if y == 0 else sip_maturity(sip_monthly, int(y), annual_return_percent)
        for y in year_grid
    ]
    lump_values = lump_sum_amount * (1.0 + annual_return_percent / 100.0) ** year_grid
    return pd.DataFrame(
        {"sip": np.asarray(sip_values, dtype=float), "lump_sum": lump_values.astype(float)},
        index=pd.Index(year_grid, name="year"),
    )


def project_lump_sum(initial_amount: float, years: int, rates: Sequence[float]) -> pd.DataFrame:
    """
    Lump-sum growth under several annual return scenarios.

    Returns
    -------
    pd.DataFrame
        Indexed by ``year`` (0..years), one column per rate labelled ``"<rate>%"``.
    """
    year_grid = np.arange(int(years) + 1)
    columns = {
        f"{rate:g}%": initial_amount * (1.0 + rate / 100.0) ** year_grid
        for rate in rates
    }
    return pd.DataFrame(columns, index=pd.Index(year_grid, name="year"), dtype=float)


def cagr_scenarios(cagr_percent: float) -> List[int]:
    """
    Low/base/high return scenarios around an observed CAGR.

    The base is the rounded CAGR, the others sit ``SCENARIO_SPREAD`` points
    away, bounded to ``[SCENARIO_MIN_RATE, SCENARIO_MAX_RATE]``. A CAGR that is
    zero or negative falls back to ``DEFAULT_SCENARIO_RATES``.
    """
    if cagr_percent <= 0:
        return list(DEFAULT_SCENARIO_RATES)
    base = int(np.floor(cagr_percent + 0.5))  # half-up, not banker's rounding
    return [
        max(SCENARIO_MIN_RATE, base - SCENARIO_SPREAD),
        base,
        min(SCENARIO_MAX_RATE, base + SCENARIO_SPREAD),
    ]

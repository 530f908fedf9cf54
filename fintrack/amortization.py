"""
Amortization module for FinTrack.

Purpose
-------
Equated monthly installment (EMI) math for fixed-rate loans. Computes the
fixed installment that fully amortizes a principal over a tenure, the total
interest paid over that tenure, the principal still owed after a number of
installments, and the month-by-month amortization table.

Key Mathematical Framework
--------------------------
- Monthly rate: r = annual_rate_percent / 100 / 12
- Installment: E = P * r * (1 + r)^n / ((1 + r)^n - 1), E = P / n when r = 0
- Total interest: E * n - P
- Outstanding after k installments: B_k = P(1 + r)^k - E((1 + r)^k - 1) / r

Inputs are expected to be validated by the caller (see ``config.LoanConfig``).
The only guard is ``tenure_months >= 1``, which would otherwise divide by zero.

Example
-------
>>> emi = compute_installment(500_000, 9.5, 60)
>>> interest = compute_total_interest(500_000, 9.5, 60)
>>> table = amortization_schedule(500_000, 9.5, 60)
>>> table[["payment", "interest", "balance"]].tail(1)
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from .exceptions import ValidationError
from .utils import annual_percent_to_monthly

__all__ = [
    "compute_installment",
    "compute_total_interest",
    "outstanding_balance",
    "remaining_payable",
    "amortization_schedule",
]


def _check_tenure(tenure_months: int) -> None:
    if tenure_months < 1:
        raise ValidationError(
            f"tenure_months must be >= 1, got {tenure_months}. "
            f"An installment cannot be spread over zero months."
        )


# ---------------------------------------------------------------------------
# Installment and interest
# ---------------------------------------------------------------------------

def compute_installment(principal: float, annual_rate_percent: float, tenure_months: int) -> float:
    """
    Fixed monthly installment that repays *principal* over *tenure_months*.

    Parameters
    ----------
    principal : float
        Amount borrowed (> 0).
    annual_rate_percent : float
        Nominal annual interest rate in percent (12.0 for 12%).
    tenure_months : int
        Number of monthly installments (>= 1).

    Returns
    -------
    float
        Monthly installment. With a zero rate this is the straight-line
        ``principal / tenure_months``.

    Raises
    ------
    ValidationError
        If ``tenure_months < 1``.
    """
    _check_tenure(tenure_months)
    r = annual_percent_to_monthly(annual_rate_percent)
    if r == 0:
        return principal / tenure_months
    factor = (1.0 + r) ** tenure_months
    return principal * r * factor / (factor - 1.0)


def compute_total_interest(principal: float, annual_rate_percent: float, tenure_months: int) -> float:
    """
    Interest paid over the full tenure: ``installment * tenure - principal``.

    The raw value is returned. It can come out as a tiny negative number from
    floating-point rounding at a zero rate; round or clamp for display only.
    """
    installment = compute_installment(principal, annual_rate_percent, tenure_months)
    return installment * tenure_months - principal


# ---------------------------------------------------------------------------
# Remaining principal
# ---------------------------------------------------------------------------

def outstanding_balance(
    principal: float,
    annual_rate_percent: float,
    tenure_months: int,
    paid_installments: int,
) -> float:
    """
    Principal still owed after *paid_installments* regular installments.

    Used to derive a loan's remaining amount from its paid-installment count
    before handing it to the payoff simulator. Returns ``principal`` when no
    installment has been paid and 0.0 once the tenure has been fully paid.
    """
    _check_tenure(tenure_months)
    k = max(int(paid_installments), 0)
    if k >= tenure_months:
        return 0.0
    if k == 0:
        return float(principal)

    r = annual_percent_to_monthly(annual_rate_percent)
    installment = compute_installment(principal, annual_rate_percent, tenure_months)
    if r == 0:
        balance = principal - installment * k
    else:
        growth = (1.0 + r) ** k
        balance = principal * growth - installment * (growth - 1.0) / r
    return max(float(balance), 0.0)


def remaining_payable(emi_amount: float, tenure_months: int, paid_installments: int) -> float:
    """Undiscounted sum of the installments still due (``remaining EMIs * EMI``)."""
    remaining = max(int(tenure_months) - int(paid_installments), 0)
    return remaining * float(emi_amount)


# ---------------------------------------------------------------------------
# Schedule
# ---------------------------------------------------------------------------

def amortization_schedule(principal: float, annual_rate_percent: float, tenure_months: int) -> pd.DataFrame:
    """
    Month-by-month amortization table.

    Returns
    -------
    pd.DataFrame
        Indexed by ``month`` (1..tenure_months) with columns:

        - payment   : installment paid that month
        - interest  : interest portion
        - principal : principal portion
        - balance   : principal owed after the payment

        The last row absorbs accumulated rounding so ``balance`` ends at
        exactly 0 and ``principal`` sums to the original principal.
    """
    _check_tenure(tenure_months)
    r = annual_percent_to_monthly(annual_rate_percent)
    installment = compute_installment(principal, annual_rate_percent, tenure_months)

    payments = np.full(tenure_months, installment, dtype=float)
    interest = np.zeros(tenure_months, dtype=float)
    principal_part = np.zeros(tenure_months, dtype=float)
    balances = np.zeros(tenure_months, dtype=float)

    balance = float(principal)
    for t in range(tenure_months):
        interest[t] = balance * r
        if t == tenure_months - 1:
            principal_part[t] = balance
            payments[t] = balance + interest[t]
            balance = 0.0
        else:
            principal_part[t] = installment - interest[t]
            balance -= principal_part[t]
        balances[t] = balance

    index = pd.RangeIndex(1, tenure_months + 1, name="month")
    return pd.DataFrame(
        {
            "payment": payments,
            "interest": interest,
            "principal": principal_part,
            "balance": balances,
        },
        index=index,
    )

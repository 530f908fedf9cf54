"""
Strategy comparison and debt reporting for FinTrack.

Purpose
-------
Turns payoff simulations into the numbers a debt-optimizer view shows:

- compare_strategies   : avalanche vs snowball, recommended strategy and savings
- extra_payment_impact : how much an extra monthly budget saves vs minimums only
- summarize_debts      : totals for summary cards and an estimated payoff date
- payoff_timeline      : both schedules aligned on one month axis for charting
- balance_timeline     : the same alignment from plain per-month totals (saved files)

Each simulation receives the loan records and builds its own balances, so
the avalanche and snowball runs are independent of each other and of the
order they are evaluated in.

Example
-------
>>> loans = [
...     Loan(id="A", remaining_amount=100_000, interest_rate=18, emi_amount=5_000),
...     Loan(id="B", remaining_amount=20_000, interest_rate=12, emi_amount=2_000),
... ]
>>> comparison = compare_strategies(loans, extra_monthly=1_000)
>>> comparison.recommended
'avalanche'
>>> timeline = payoff_timeline(comparison, loans)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional, Sequence, Tuple

import pandas as pd

from .constants import AVALANCHE, MAX_SIMULATION_MONTHS, SNOWBALL
from .exceptions import ConfigurationError
from .payoff import Loan, SimulationResult, simulate_payoff
from .strategies import avalanche_order, snowball_order
from .utils import add_months, month_label

__all__ = [
    "ComparisonResult",
    "ExtraPaymentImpact",
    "DebtSummary",
    "compare_strategies",
    "extra_payment_impact",
    "summarize_debts",
    "balance_timeline",
    "payoff_timeline",
]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ComparisonResult:
    """
    Avalanche and snowball outcomes for the same loans and extra budget.

    ``interest_saved`` and ``months_saved`` are absolute differences between
    the two runs and belong to the recommended strategy only; use
    ``savings_for`` to get the per-strategy view.
    """

    avalanche: SimulationResult
    snowball: SimulationResult
    recommended: str
    interest_saved: float
    months_saved: int

    @property
    def best(self) -> SimulationResult:
        return self.result_for(self.recommended)

    def result_for(self, strategy: str) -> SimulationResult:
        if strategy == AVALANCHE:
            return self.avalanche
        if strategy == SNOWBALL:
            return self.snowball
        raise ConfigurationError(f"Unknown strategy '{strategy}'.")

    def savings_for(self, strategy: str) -> Tuple[float, int]:
        """``(interest_saved, months_saved)`` for *strategy*; zeros unless it is recommended."""
        self.result_for(strategy)
        if strategy == self.recommended:
            return self.interest_saved, self.months_saved
        return 0.0, 0


@dataclass(frozen=True)
class ExtraPaymentImpact:
    baseline: SimulationResult
    accelerated: SimulationResult
    interest_saved: float
    months_saved: int


@dataclass(frozen=True)
class DebtSummary:
    total_debt: float
    monthly_emi: float
    total_interest: float
    payoff_months: int
    payoff_date: Optional[date]


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

def compare_strategies(
    loans: Sequence[Loan],
    extra_monthly: float,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> ComparisonResult:
    """
    Run both strategies and pick the one with the lower total interest.

    Avalanche is recommended when total interest is equal, since it is
    evaluated first and is never worse for the same interest.
    """
    avalanche = simulate_payoff(
        loans, extra_monthly, avalanche_order, max_months=max_months, strategy=AVALANCHE
    )
    snowball = simulate_payoff(
        loans, extra_monthly, snowball_order, max_months=max_months, strategy=SNOWBALL
    )

    recommended = AVALANCHE if avalanche.total_interest <= snowball.total_interest else SNOWBALL
    return ComparisonResult(
        avalanche=avalanche,
        snowball=snowball,
        recommended=recommended,
        interest_saved=abs(avalanche.total_interest - snowball.total_interest),
        months_saved=abs(avalanche.months - snowball.months),
    )


def extra_payment_impact(
    loans: Sequence[Loan],
    extra_monthly: float,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> ExtraPaymentImpact:
    """Interest and months saved by *extra_monthly* (avalanche order) vs minimum payments only."""
    baseline = simulate_payoff(loans, 0.0, avalanche_order, max_months=max_months, strategy=AVALANCHE)
    accelerated = simulate_payoff(
        loans, extra_monthly, avalanche_order, max_months=max_months, strategy=AVALANCHE
    )
    return ExtraPaymentImpact(
        baseline=baseline,
        accelerated=accelerated,
        interest_saved=max(0.0, baseline.total_interest - accelerated.total_interest),
        months_saved=max(0, baseline.months - accelerated.months),
    )


# ---------------------------------------------------------------------------
# Summary and timeline
# ---------------------------------------------------------------------------

def summarize_debts(
    loans: Sequence[Loan],
    comparison: ComparisonResult,
    *,
    start: Optional[date] = None,
) -> DebtSummary:
    """
    Totals over *loans* plus the recommended strategy's outcome.

    ``payoff_date`` is the first of the month ``payoff_months`` after *start*
    (default: the current month), or None when nothing is owed.
    """
    best = comparison.best
    payoff_date = None
    if best.months > 0:
        payoff_date = add_months(start or date.today(), best.months)
    return DebtSummary(
        total_debt=float(sum(max(loan.remaining_amount, 0.0) for loan in loans)),
        monthly_emi=float(sum(loan.emi_amount for loan in loans)),
        total_interest=best.total_interest,
        payoff_months=best.months,
        payoff_date=payoff_date,
    )


def balance_timeline(start_total: float, totals: Mapping[str, Mapping[int, float]]) -> pd.DataFrame:
    """
    Align per-strategy total balances on one month axis.

    Parameters
    ----------
    start_total : float
        Total debt before month 1, recorded at month 0 in every column.
    totals : mapping
        Strategy name to ``{month: total balance}``.

    Returns
    -------
    pd.DataFrame
        Indexed by ``month``: 0 plus every month that appears in any column.
        A column is carried forward across months it did not record, so a
        settled strategy stays at 0 and a strategy whose first snapshot comes
        later stays at the starting total. ``label`` holds "Now", "5m",
        "1y 3m"...
    """
    columns = {}
    for name, points in totals.items():
        data = {0: float(start_total)}
        data.update({int(month): max(0.0, float(total)) for month, total in points.items()})
        columns[name] = pd.Series(data, dtype=float)

    frame = pd.DataFrame(columns).sort_index().ffill()
    frame.index.name = "month"
    frame["label"] = [month_label(m) for m in frame.index]
    return frame


def payoff_timeline(comparison: ComparisonResult, loans: Sequence[Loan]) -> pd.DataFrame:
    """
    Total outstanding balance per strategy on a shared month axis.

    Month 0 holds the total debt of *loans*; see ``balance_timeline``.
    """
    start_total = float(sum(max(loan.remaining_amount, 0.0) for loan in loans))
    return balance_timeline(start_total, {
        AVALANCHE: {snap.month: snap.total_balance for snap in comparison.avalanche.schedule},
        SNOWBALL: {snap.month: snap.total_balance for snap in comparison.snowball.schedule},
    })

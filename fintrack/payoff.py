"""
Multi-loan payoff simulation for FinTrack.

Purpose
-------
Advances a set of loans month by month until every balance is repaid (or a
hard month ceiling is hit), paying each loan's minimum installment and
directing an optional extra monthly budget according to an injected ordering
policy (see ``strategies.py``).

Monthly transition
------------------
1. Accrue:    interest = balance * annual_rate / 100 / 12 on every open loan,
              capitalised into the balance and added to total_interest.
2. Minimums:  every open loan pays min(emi_amount, balance).
3. Extra:     the extra budget is applied, in the policy's order, as
              min(remaining_extra, balance) per loan until it runs out.
4. Snapshot:  balances are recorded when month % 3 == 0 or all are settled.
5. Stop:      all balances <= 0 (settled) or month >= max_months (exhausted).

Only step 3 depends on the strategy. Every run builds its own balance map
from the loan records, so two runs over the same loans never share state.

Example
-------
>>> from fintrack.strategies import avalanche_order
>>> loans = [
...     Loan(id="A", remaining_amount=100_000, interest_rate=18, emi_amount=5_000),
...     Loan(id="B", remaining_amount=20_000, interest_rate=12, emi_amount=2_000),
... ]
>>> result = simulate_payoff(loans, extra_monthly=1_000, order_for_extra=avalanche_order)
>>> result.months, round(result.total_interest, 2)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Hashable, Iterable, List, Optional, Tuple

import pandas as pd

from .constants import MAX_SIMULATION_MONTHS, SNAPSHOT_INTERVAL
from .exceptions import ConfigurationError, ValidationError
from .strategies import OrderPolicy
from .utils import annual_percent_to_monthly, check_non_negative

__all__ = [
    "Loan",
    "ScheduleSnapshot",
    "PayoffStatus",
    "SimulationResult",
    "simulate_payoff",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Loan:
    """
    A loan as seen by the simulator.

    Attributes
    ----------
    id : hashable
        Identifier, unique within one simulation run. Ids of a run must be
        mutually comparable since they break ordering ties.
    remaining_amount : float
        Principal still owed. A value <= 0 means the loan is already settled.
    interest_rate : float
        Nominal annual interest rate in percent.
    emi_amount : float
        Minimum monthly installment (> 0).
    name : str, optional
        Display name; ignored by the math.
    """

    id: Hashable
    remaining_amount: float
    interest_rate: float
    emi_amount: float
    name: Optional[str] = None

    @property
    def is_settled(self) -> bool:
        return self.remaining_amount <= 0


@dataclass(frozen=True)
class ScheduleSnapshot:
    month: int
    balances: Dict[Hashable, float]

    @property
    def total_balance(self) -> float:
        return float(sum(self.balances.values()))


class PayoffStatus(str, Enum):
    SETTLED = "settled"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class SimulationResult:
    """
    Outcome of one payoff simulation.

    ``months`` equals the month ceiling when the loans could not be repaid
    in time; check ``status`` (or ``settled``) to tell the two apart.
    """

    total_interest: float
    months: int
    schedule: Tuple[ScheduleSnapshot, ...]
    status: PayoffStatus = PayoffStatus.SETTLED
    strategy: Optional[str] = None

    @property
    def settled(self) -> bool:
        return self.status is PayoffStatus.SETTLED

    def schedule_frame(self) -> pd.DataFrame:
        """Snapshots as a DataFrame indexed by month, one column per loan id."""
        if not self.schedule:
            return pd.DataFrame(index=pd.Index([], name="month", dtype=int))
        frame = pd.DataFrame(
            [snap.balances for snap in self.schedule],
            index=pd.Index([snap.month for snap in self.schedule], name="month"),
        )
        return frame.astype(float)


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------

def _index_loans(loans: Iterable[Loan]) -> Tuple[Dict[Hashable, float], Dict[Hashable, float], Dict[Hashable, float]]:
    """Fresh balance, rate and minimum maps for one run."""
    balances: Dict[Hashable, float] = {}
    rates: Dict[Hashable, float] = {}
    minimums: Dict[Hashable, float] = {}
    for loan in loans:
        if loan.id in balances:
            raise ValidationError(
                f"Duplicate loan id {loan.id!r}. Loan ids must be unique within a simulation."
            )
        # Settled loans enter at zero so they never accrue or show a negative balance.
        balances[loan.id] = max(float(loan.remaining_amount), 0.0)
        rates[loan.id] = float(loan.interest_rate)
        minimums[loan.id] = float(loan.emi_amount)
    return balances, rates, minimums


def simulate_payoff(
    loans: Iterable[Loan],
    extra_monthly: float,
    order_for_extra: OrderPolicy,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
    strategy: Optional[str] = None,
) -> SimulationResult:
    """
    Simulate repaying *loans* with minimum installments plus *extra_monthly*.

    Parameters
    ----------
    loans : iterable of Loan
        Loan records. They are read, never modified.
    extra_monthly : float
        Budget on top of the minimums, spent each month in the order given
        by *order_for_extra*. Unspent extra does not carry over.
    order_for_extra : OrderPolicy
        ``(balances, annual_rates) -> ids``; see ``strategies.py``.
    max_months : int, default 600
        Month ceiling. Reaching it stops the run with status ``exhausted``.
    strategy : str, optional
        Label stored on the result.

    Returns
    -------
    SimulationResult
        ``months`` is 0 when nothing is owed to begin with.

    Raises
    ------
    ConfigurationError
        If max_months < 1
    ValueError
        If extra_monthly is negative
    ValidationError
        If two loans share an id
    """
    if max_months < 1:
        raise ConfigurationError(f"max_months must be >= 1, got {max_months}.")
    check_non_negative("extra_monthly", extra_monthly)

    balances, annual_rates, minimums = _index_loans(loans)
    monthly_rates = {loan_id: annual_percent_to_monthly(rate) for loan_id, rate in annual_rates.items()}

    total_interest = 0.0
    month = 0
    schedule: List[ScheduleSnapshot] = []

    logger.debug(
        "Starting payoff simulation: %d loans, extra=%.2f, strategy=%s",
        len(balances), extra_monthly, strategy,
    )

    while any(b > 0 for b in balances.values()) and month < max_months:
        month += 1

        for loan_id, balance in balances.items():
            if balance > 0:
                interest = balance * monthly_rates[loan_id]
                total_interest += interest
                balances[loan_id] = balance + interest

        for loan_id, balance in balances.items():
            if balance > 0:
                balances[loan_id] = balance - min(minimums[loan_id], balance)

        extra = float(extra_monthly)
        for loan_id in order_for_extra(balances, annual_rates):
            if extra <= 0:
                break
            payment = min(extra, balances[loan_id])
            balances[loan_id] -= payment
            extra -= payment

        all_settled = all(b <= 0 for b in balances.values())
        if month % SNAPSHOT_INTERVAL == 0 or all_settled:
            schedule.append(ScheduleSnapshot(month=month, balances=dict(balances)))

    status = PayoffStatus.SETTLED
    if any(b > 0 for b in balances.values()):
        status = PayoffStatus.EXHAUSTED
        logger.warning(
            "Payoff did not converge within %d months (strategy=%s, remaining=%.2f)",
            max_months, strategy, sum(balances.values()),
        )
    else:
        logger.debug(
            "Payoff settled in %d months, total interest %.2f (strategy=%s)",
            month, total_interest, strategy,
        )

    return SimulationResult(
        total_interest=total_interest,
        months=month,
        schedule=tuple(schedule),
        status=status,
        strategy=strategy,
    )

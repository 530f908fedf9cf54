"""
Type definitions for FinTrack.

Purpose
-------
Provides TypedDict definitions for the JSON-ready dictionaries produced by
``serialization.py``. Using TypedDicts documents the exact shape handed to
presentation code and enables IDE autocompletion.

Type Definitions
----------------
SnapshotDict
    One schedule point: {"month", "balances"}

SimulationResultDict
    One strategy run: {"total_interest", "months", "status", "schedule", ...}

ComparisonDict
    Strategy comparison: {"avalanche", "snowball", "recommended", ...}

DebtSummaryDict
    Summary cards: {"total_debt", "monthly_emi", "total_interest", ...}
"""

from typing import Dict, List, Optional, Union
from typing_extensions import TypedDict, NotRequired

__all__ = [
    "SnapshotDict",
    "SimulationResultDict",
    "ComparisonDict",
    "DebtSummaryDict",
    "ExtraPaymentImpactDict",
]


class SnapshotDict(TypedDict):
    """
    Balances at a given month.

    Attributes
    ----------
    month : int
        1-based month number.
    balances : dict
        Loan id (as string) -> outstanding balance (>= 0).

    Examples
    --------
    >>> snap: SnapshotDict = {"month": 3, "balances": {"A": 88_210.4, "B": 11_872.9}}
    """

    month: int
    balances: Dict[str, float]


class SimulationResultDict(TypedDict):
    """
    Outcome of one strategy run.

    Attributes
    ----------
    total_interest : float
        Interest accrued over the whole run.
    months : int
        Months simulated (600 when the run did not settle).
    status : str
        "settled" or "exhausted".
    schedule : list of SnapshotDict
        Snapshots every 3rd month plus the terminal month.
    strategy : str, optional
        Strategy label.
    """

    total_interest: float
    months: int
    status: str
    schedule: List[SnapshotDict]
    strategy: NotRequired[Optional[str]]


class ComparisonDict(TypedDict):
    """
    Avalanche vs snowball.

    Attributes
    ----------
    avalanche, snowball : SimulationResultDict
        Both runs.
    recommended : str
        "avalanche" or "snowball".
    interest_saved : float
        Interest saved by the recommended strategy.
    months_saved : int
        Months difference attributed to the recommended strategy.
    """

    schema_version: str
    extra_monthly: float
    avalanche: SimulationResultDict
    snowball: SimulationResultDict
    recommended: str
    interest_saved: float
    months_saved: int


class DebtSummaryDict(TypedDict):
    total_debt: float
    monthly_emi: float
    total_interest: float
    payoff_months: int
    payoff_date: Union[str, None]


class ExtraPaymentImpactDict(TypedDict):
    extra_monthly: float
    baseline: SimulationResultDict
    accelerated: SimulationResultDict
    interest_saved: float
    months_saved: int

"""
Serialization module for FinTrack.

Purpose
-------
Reads loan portfolios from JSON and turns payoff results into JSON-ready
dictionaries for presentation code, the CLI and result files.

Supports:
- Loan portfolios (loans + extra monthly budget)
- SimulationResult (single strategy run)
- ComparisonResult (avalanche vs snowball)
- ExtraPaymentImpact and DebtSummary

Design Principles
-----------------
- Type-safe: Uses Pydantic configs for validation on load
- Human-readable: Indented JSON
- Stable shape: Loan ids become string keys in ``balances`` maps
- Backward compatible: Warns on schema version mismatch

Example
-------
>>> from pathlib import Path
>>> from fintrack.comparison import compare_strategies
>>> from fintrack.serialization import load_portfolio, save_comparison
>>>
>>> portfolio = load_portfolio(Path("loans.json"))
>>> comparison = compare_strategies(portfolio.to_loans(), portfolio.extra_monthly)
>>> save_comparison(comparison, Path("results/comparison.json"),
...                 extra_monthly=portfolio.extra_monthly)
"""

from __future__ import annotations
from typing import Any, Dict
from pathlib import Path
import json
import warnings

from .comparison import ComparisonResult, DebtSummary, ExtraPaymentImpact
from .config import PortfolioConfig
from .exceptions import SerializationError
from .payoff import ScheduleSnapshot, SimulationResult
from .types import (
    ComparisonDict,
    DebtSummaryDict,
    ExtraPaymentImpactDict,
    SimulationResultDict,
    SnapshotDict,
)

__all__ = [
    "SCHEMA_VERSION",
    "load_portfolio",
    "portfolio_from_dict",
    "save_portfolio",
    "snapshot_to_dict",
    "result_to_dict",
    "comparison_to_dict",
    "impact_to_dict",
    "summary_to_dict",
    "save_comparison",
    "load_result_file",
]


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# Portfolio Serialization
# ---------------------------------------------------------------------------

def portfolio_from_dict(data: Dict[str, Any]) -> PortfolioConfig:
    """
    Create a validated PortfolioConfig from its dictionary representation.

    Parameters
    ----------
    data : dict
        ``{"schema_version", "extra_monthly", "loans": [...]}``

    Returns
    -------
    PortfolioConfig
        Validated portfolio

    Raises
    ------
    pydantic.ValidationError
        If any loan record is invalid
    """
    schema_version = data.get("schema_version")
    if schema_version is None:
        warnings.warn(
            f"Portfolio has no schema_version; assuming {SCHEMA_VERSION}.",
            UserWarning,
        )
    elif schema_version != SCHEMA_VERSION:
        warnings.warn(
            f"Portfolio schema version {schema_version} differs from current "
            f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
            UserWarning,
        )
    return PortfolioConfig.model_validate(data)


def load_portfolio(path: Path) -> PortfolioConfig:
    """
    Load a loan portfolio from a JSON file.

    Examples
    --------
    >>> from pathlib import Path
    >>> portfolio = load_portfolio(Path("loans.json"))
    >>> loans = portfolio.to_loans()
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SerializationError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SerializationError(
            f"{path} must contain a JSON object with a 'loans' list, got {type(data).__name__}."
        )
    return portfolio_from_dict(data)


def save_portfolio(portfolio: PortfolioConfig, path: Path) -> None:
    """Write *portfolio* to JSON, stamping the current schema version."""
    data = portfolio.model_dump(mode="json", exclude_none=True)
    data["schema_version"] = SCHEMA_VERSION

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


# ---------------------------------------------------------------------------
# Result Serialization
# ---------------------------------------------------------------------------

def snapshot_to_dict(snapshot: ScheduleSnapshot) -> SnapshotDict:
    return {
        "month": snapshot.month,
        "balances": {str(loan_id): float(b) for loan_id, b in snapshot.balances.items()},
    }


def result_to_dict(result: SimulationResult, include_schedule: bool = True) -> SimulationResultDict:
    """
    Convert a SimulationResult to a JSON-ready dictionary.

    Parameters
    ----------
    result : SimulationResult
        Result to serialize
    include_schedule : bool
        Whether to include the balance snapshots

    Returns
    -------
    dict
        ``{"strategy", "total_interest", "months", "status", "schedule"}``
    """
    return {
        "strategy": result.strategy,
        "total_interest": float(result.total_interest),
        "months": int(result.months),
        "status": result.status.value,
        "schedule": [snapshot_to_dict(s) for s in result.schedule] if include_schedule else [],
    }


def comparison_to_dict(
    comparison: ComparisonResult,
    extra_monthly: float = 0.0,
    include_schedule: bool = True,
) -> ComparisonDict:
    """Convert a ComparisonResult to the ``{avalanche, snowball, recommended, ...}`` shape."""
    return {
        "schema_version": SCHEMA_VERSION,
        "extra_monthly": float(extra_monthly),
        "avalanche": result_to_dict(comparison.avalanche, include_schedule),
        "snowball": result_to_dict(comparison.snowball, include_schedule),
        "recommended": comparison.recommended,
        "interest_saved": float(comparison.interest_saved),
        "months_saved": int(comparison.months_saved),
    }


def impact_to_dict(impact: ExtraPaymentImpact, extra_monthly: float) -> ExtraPaymentImpactDict:
    return {
        "extra_monthly": float(extra_monthly),
        "baseline": result_to_dict(impact.baseline, include_schedule=False),
        "accelerated": result_to_dict(impact.accelerated, include_schedule=False),
        "interest_saved": float(impact.interest_saved),
        "months_saved": int(impact.months_saved),
    }


def summary_to_dict(summary: DebtSummary) -> DebtSummaryDict:
    return {
        "total_debt": float(summary.total_debt),
        "monthly_emi": float(summary.monthly_emi),
        "total_interest": float(summary.total_interest),
        "payoff_months": int(summary.payoff_months),
        "payoff_date": summary.payoff_date.isoformat() if summary.payoff_date else None,
    }


def save_comparison(
    comparison: ComparisonResult,
    path: Path,
    extra_monthly: float = 0.0,
    include_schedule: bool = True,
) -> None:
    """
    Save a ComparisonResult to a JSON file.

    Examples
    --------
    >>> from pathlib import Path
    >>> save_comparison(comparison, Path("results/comparison.json"), extra_monthly=1000)
    """
    data = comparison_to_dict(comparison, extra_monthly, include_schedule)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_result_file(path: Path) -> Dict[str, Any]:
    """Read back a file written by ``save_comparison``; returns the raw dictionary."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise SerializationError(f"{path} must contain a JSON object, got {type(data).__name__}.")

    schema_version = data.get("schema_version", "0.0.0")
    if schema_version != SCHEMA_VERSION:
        warnings.warn(
            f"Result schema version {schema_version} differs from current "
            f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
            UserWarning,
        )
    return data

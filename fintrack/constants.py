"""
Global constants for FinTrack.

Purpose
-------
Centralizes default values and magic numbers used throughout the FinTrack
codebase. Using constants instead of hardcoded values improves maintainability,
ensures consistency, and makes configuration intentions explicit.

Usage
-----
>>> from fintrack.constants import MAX_SIMULATION_MONTHS, SNAPSHOT_INTERVAL
>>>
>>> result = simulate_payoff(loans, 1000, avalanche_order, max_months=MAX_SIMULATION_MONTHS)

Categories
----------
- Time: months per year, simulation ceiling
- Payoff: snapshot cadence, strategy names
- Growth: scenario bounds for CAGR projections
"""

from typing import Tuple

__all__ = [
    # Time
    "MONTHS_PER_YEAR",
    "MAX_SIMULATION_MONTHS",
    # Payoff
    "SNAPSHOT_INTERVAL",
    "AVALANCHE",
    "SNOWBALL",
    "STRATEGY_NAMES",
    # Growth
    "DEFAULT_SCENARIO_RATES",
    "SCENARIO_SPREAD",
    "SCENARIO_MIN_RATE",
    "SCENARIO_MAX_RATE",
]


# =============================================================================
# Time
# =============================================================================

MONTHS_PER_YEAR: int = 12
"""Number of months in a year (used for rate and horizon conversions)."""

MAX_SIMULATION_MONTHS: int = 600
"""Hard ceiling for payoff simulations (50 years).

A simulation that has not settled every loan by this month stops and is
reported with ``months == MAX_SIMULATION_MONTHS``.
"""


# =============================================================================
# Payoff
# =============================================================================

SNAPSHOT_INTERVAL: int = 3
"""Balances are recorded every ``SNAPSHOT_INTERVAL`` months plus the terminal month."""

AVALANCHE: str = "avalanche"
"""Highest interest rate first."""

SNOWBALL: str = "snowball"
"""Smallest remaining balance first."""

STRATEGY_NAMES: Tuple[str, ...] = (AVALANCHE, SNOWBALL)
"""Strategies in evaluation order. Ties in comparisons go to the first one."""


# =============================================================================
# Growth scenarios
# =============================================================================

DEFAULT_SCENARIO_RATES: Tuple[int, ...] = (8, 12, 15)
"""Annual return scenarios (percent) used when no positive CAGR is available."""

SCENARIO_SPREAD: int = 4
"""Distance in percentage points between the CAGR and its low/high scenarios."""

SCENARIO_MIN_RATE: int = 1
"""Lowest scenario rate (percent)."""

SCENARIO_MAX_RATE: int = 30
"""Highest scenario rate (percent)."""

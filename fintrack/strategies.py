"""
Repayment ordering policies for FinTrack.

An ordering policy decides which loans receive the discretionary extra
payment in a given month, and in what order. It is called once per month by
``payoff.simulate_payoff`` with the current balances and the annual rates and
returns the ids of the loans that still owe money, highest priority first.

Policies are pure functions: they keep no state between calls, so the order
always reflects the balances of the month being simulated.

Policies
--------
- avalanche_order : highest annual rate first
- snowball_order  : smallest current balance first

Both break ties on the string form of the loan id, so the order stays
deterministic for equal rates or balances even when ids mix ints and strings.
"""

from __future__ import annotations

from typing import Callable, Dict, Hashable, List, Mapping

from .constants import AVALANCHE, SNOWBALL
from .exceptions import ConfigurationError

__all__ = [
    "OrderPolicy",
    "avalanche_order",
    "snowball_order",
    "STRATEGIES",
    "get_strategy",
]

OrderPolicy = Callable[[Mapping[Hashable, float], Mapping[Hashable, float]], List[Hashable]]
"""``(balances, annual_rates) -> loan ids in priority order``."""


def _active(balances: Mapping[Hashable, float]) -> List[Hashable]:
    return [loan_id for loan_id, balance in balances.items() if balance > 0]


def avalanche_order(
    balances: Mapping[Hashable, float],
    rates: Mapping[Hashable, float],
) -> List[Hashable]:
    """Loans with a positive balance, highest annual rate first."""
    return sorted(_active(balances), key=lambda loan_id: (-rates[loan_id], str(loan_id)))


def snowball_order(
    balances: Mapping[Hashable, float],
    rates: Mapping[Hashable, float],
) -> List[Hashable]:
    """Loans with a positive balance, smallest current balance first."""
    return sorted(_active(balances), key=lambda loan_id: (balances[loan_id], str(loan_id)))


STRATEGIES: Dict[str, OrderPolicy] = {
    AVALANCHE: avalanche_order,
    SNOWBALL: snowball_order,
}


def get_strategy(name: str) -> OrderPolicy:
    """Look up an ordering policy by name (case-insensitive)."""
    try:
        return STRATEGIES[name.lower()]
    except KeyError:
        available = ", ".join(STRATEGIES)
        raise ConfigurationError(
            f"Unknown strategy '{name}'. Available: {available}."
        ) from None

"""
Pytest configuration and fixtures for the FinTrack test suite.

This module provides reusable loan and portfolio fixtures for all FinTrack
components. Fixtures follow the principle of "arrange-act-assert" with
clear separation.
"""

import json
import logging
from datetime import date
from typing import List

import pytest

from fintrack.payoff import Loan


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def reset_fintrack_logger():
    """Drop handlers installed by setup_logging (CLI runs) after each test."""
    yield
    logger = logging.getLogger("fintrack")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Date Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def start_date() -> date:
    """Standard start date for tests."""
    return date(2025, 1, 15)


# ---------------------------------------------------------------------------
# Loan Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def loan_a() -> Loan:
    """
    Larger, more expensive loan.

    Remaining: 100,000
    Rate: 18% annual (1.5% monthly)
    EMI: 5,000
    """
    return Loan(id="A", remaining_amount=100_000, interest_rate=18, emi_amount=5_000)


@pytest.fixture
def loan_b() -> Loan:
    """
    Smaller, cheaper loan.

    Remaining: 20,000
    Rate: 12% annual (1% monthly)
    EMI: 2,000
    """
    return Loan(id="B", remaining_amount=20_000, interest_rate=12, emi_amount=2_000)


@pytest.fixture
def two_loans(loan_a, loan_b) -> List[Loan]:
    """A high-rate large loan and a low-rate small loan."""
    return [loan_a, loan_b]


@pytest.fixture
def three_loans() -> List[Loan]:
    """Three loans with distinct rates and balances."""
    return [
        Loan(id="card", remaining_amount=60_000, interest_rate=36, emi_amount=3_000, name="Credit card"),
        Loan(id="car", remaining_amount=350_000, interest_rate=9.5, emi_amount=9_000, name="Car loan"),
        Loan(id="personal", remaining_amount=150_000, interest_rate=14, emi_amount=5_500),
    ]


@pytest.fixture
def extra_monthly() -> float:
    """Standard extra monthly budget."""
    return 1_000.0


# ---------------------------------------------------------------------------
# File Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def portfolio_data() -> dict:
    """Portfolio file contents matching ``two_loans`` plus the extra budget."""
    return {
        "schema_version": "0.1.0",
        "extra_monthly": 1000,
        "loans": [
            {"id": "A", "remaining_amount": 100000, "interest_rate": 18, "emi_amount": 5000},
            {"id": "B", "remaining_amount": 20000, "interest_rate": 12, "emi_amount": 2000},
        ],
    }


@pytest.fixture
def portfolio_file(tmp_path, portfolio_data):
    """Portfolio JSON written to a temporary file."""
    path = tmp_path / "loans.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(portfolio_data, f)
    return path

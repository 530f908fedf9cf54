"""
FinTrack: loan amortization, growth projections and debt payoff planning.

Modules
-------
- amortization : EMI, total interest, outstanding balance, schedules
- growth       : SIP, lump sum, CAGR and year-by-year projection tables
- payoff       : Month-by-month multi-loan payoff simulation
- strategies   : Avalanche and snowball ordering policies
- comparison   : Strategy comparison, extra-payment impact, summaries
- config       : Pydantic input models and environment settings
- serialization: Portfolio files and JSON-ready result dictionaries
"""

from .amortization import (
    amortization_schedule,
    compute_installment,
    compute_total_interest,
    outstanding_balance,
    remaining_payable,
)
from .comparison import (
    ComparisonResult,
    DebtSummary,
    ExtraPaymentImpact,
    balance_timeline,
    compare_strategies,
    extra_payment_impact,
    payoff_timeline,
    summarize_debts,
)
from .config import AppSettings, LoanConfig, PortfolioConfig
from .exceptions import ConfigurationError, FinTrackError, SerializationError, ValidationError
from .growth import cagr, lump_sum, sip_maturity, sip_projection
from .payoff import Loan, PayoffStatus, ScheduleSnapshot, SimulationResult, simulate_payoff
from .strategies import avalanche_order, get_strategy, snowball_order

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Amortization
    "compute_installment",
    "compute_total_interest",
    "outstanding_balance",
    "remaining_payable",
    "amortization_schedule",
    # Growth
    "sip_maturity",
    "sip_projection",
    "lump_sum",
    "cagr",
    # Payoff
    "Loan",
    "ScheduleSnapshot",
    "PayoffStatus",
    "SimulationResult",
    "simulate_payoff",
    "avalanche_order",
    "snowball_order",
    "get_strategy",
    # Comparison
    "ComparisonResult",
    "ExtraPaymentImpact",
    "DebtSummary",
    "compare_strategies",
    "extra_payment_impact",
    "summarize_debts",
    "payoff_timeline",
    "balance_timeline",
    # Config
    "LoanConfig",
    "PortfolioConfig",
    "AppSettings",
    # Errors
    "FinTrackError",
    "ConfigurationError",
    "ValidationError",
    "SerializationError",
]

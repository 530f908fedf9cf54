"""
Configuration management module for FinTrack.

Purpose
-------
Centralized input validation using Pydantic models for type-safe parameter
management and serialization. The calculation modules trust their inputs;
these models are where loan records and calculator parameters coming from
files, the CLI or an HTTP layer get checked.

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Serializable: Easy conversion to/from JSON for portfolio files
- Environment-aware: AppSettings reads FINTRACK_* variables and .env files

Example
-------
>>> from fintrack.config import LoanConfig, PortfolioConfig
>>> loan = LoanConfig(id="car", principal_amount=600_000, interest_rate=9.0,
...                   tenure_months=60, paid_installments=12)
>>> loan.to_loan().remaining_amount  # derived from the amortization balance
>>>
>>> portfolio = PortfolioConfig(extra_monthly=2_000, loans=[loan])
>>> portfolio.model_dump_json()
"""

from __future__ import annotations
from typing import Optional, Literal, List, Union
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from .amortization import compute_installment, outstanding_balance
from .constants import MAX_SIMULATION_MONTHS
from .payoff import Loan

__all__ = [
    "LoanConfig",
    "PortfolioConfig",
    "EmiConfig",
    "SipConfig",
    "LumpSumConfig",
    "CagrConfig",
    "AppSettings",
]


# ---------------------------------------------------------------------------
# Loan Configuration
# ---------------------------------------------------------------------------

class LoanConfig(BaseModel):
    """
    Configuration for a single loan.

    A loan is described either by what is still owed (``remaining_amount``
    and ``emi_amount``) or by its original terms (``principal_amount``,
    ``tenure_months`` and ``paid_installments``), from which the remaining
    amount and, if missing, the EMI are derived.

    Attributes
    ----------
    id : str or int
        Identifier, unique within a portfolio.
    name : str, optional
        Display name.
    remaining_amount : float, optional
        Principal still owed (>= 0; 0 means settled).
    interest_rate : float
        Annual interest rate in percent (0-100).
    emi_amount : float, optional
        Minimum monthly installment (> 0).
    principal_amount : float, optional
        Original amount borrowed (> 0).
    tenure_months : int, optional
        Original number of installments (1-600).
    paid_installments : int
        Installments already paid (>= 0).

    Examples
    --------
    >>> LoanConfig(id="A", remaining_amount=100_000, interest_rate=18, emi_amount=5_000)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: Union[str, int] = Field(description="Loan identifier")
    name: Optional[str] = Field(default=None, max_length=100, description="Display name")
    remaining_amount: Optional[float] = Field(
        default=None,
        ge=0,
        description="Principal still owed"
    )
    interest_rate: float = Field(
        ge=0,
        le=100,
        description="Annual interest rate (percent)"
    )
    emi_amount: Optional[float] = Field(
        default=None,
        gt=0,
        description="Minimum monthly installment"
    )
    principal_amount: Optional[float] = Field(
        default=None,
        gt=0,
        description="Original principal"
    )
    tenure_months: Optional[int] = Field(
        default=None,
        ge=1,
        le=MAX_SIMULATION_MONTHS,
        description="Original tenure (months)"
    )
    paid_installments: int = Field(
        default=0,
        ge=0,
        description="Installments already paid"
    )

    @model_validator(mode="after")
    def validate_terms(self):
        """Require enough information to know the balance and the installment."""
        has_terms = self.principal_amount is not None and self.tenure_months is not None
        if self.remaining_amount is None and not has_terms:
            raise ValueError(
                f"Loan {self.id!r}: give remaining_amount, or principal_amount "
                f"and tenure_months to derive it"
            )
        if self.emi_amount is None and not has_terms:
            raise ValueError(
                f"Loan {self.id!r}: give emi_amount, or principal_amount "
                f"and tenure_months to derive it"
            )
        return self

    def resolved_emi(self) -> float:
        if self.emi_amount is not None:
            return self.emi_amount
        return compute_installment(self.principal_amount, self.interest_rate, self.tenure_months)

    def resolved_remaining(self) -> float:
        if self.remaining_amount is not None:
            return self.remaining_amount
        return outstanding_balance(
            self.principal_amount,
            self.interest_rate,
            self.tenure_months,
            self.paid_installments,
        )

    def to_loan(self) -> Loan:
        """Build the simulator's Loan record."""
        return Loan(
            id=self.id,
            remaining_amount=self.resolved_remaining(),
            interest_rate=self.interest_rate,
            emi_amount=self.resolved_emi(),
            name=self.name,
        )


class PortfolioConfig(BaseModel):
    """
    A set of loans and the extra monthly budget shared by all of them.

    Attributes
    ----------
    schema_version : str
        File format version (see ``serialization.SCHEMA_VERSION``).
    extra_monthly : float
        Extra payment available each month on top of the minimums (>= 0).
    loans : list of LoanConfig
        Loans with unique ids.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    schema_version: Optional[str] = Field(default=None, description="File format version")
    extra_monthly: float = Field(
        default=0.0,
        ge=0,
        description="Extra monthly payment budget"
    )
    loans: List[LoanConfig] = Field(
        default_factory=list,
        description="Loans to repay"
    )

    @field_validator("loans")
    @classmethod
    def validate_unique_ids(cls, v):
        """Ensure loan ids are unique."""
        seen = set()
        for loan in v:
            if loan.id in seen:
                raise ValueError(f"Duplicate loan id {loan.id!r}")
            seen.add(loan.id)
        return v

    def to_loans(self) -> List[Loan]:
        return [loan.to_loan() for loan in self.loans]


# ---------------------------------------------------------------------------
# Calculator Configuration
# ---------------------------------------------------------------------------

class EmiConfig(BaseModel):
    """Inputs of the EMI calculator."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    principal: float = Field(gt=0, description="Amount borrowed")
    annual_rate: float = Field(ge=0, le=100, description="Annual interest rate (percent)")
    tenure_months: int = Field(ge=1, le=MAX_SIMULATION_MONTHS, description="Tenure (months)")


class SipConfig(BaseModel):
    """Inputs of the SIP calculator."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    monthly_amount: float = Field(ge=0, description="Monthly investment")
    years: float = Field(gt=0, le=50, description="Investment period (years)")
    annual_return: float = Field(ge=0, le=100, description="Expected annual return (percent)")
    lump_sum_amount: Optional[float] = Field(
        default=None,
        ge=0,
        description="Lump sum to compare against year by year (no comparison when omitted)"
    )


class LumpSumConfig(BaseModel):
    """Inputs of the lump-sum projection."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    principal: float = Field(ge=0, description="Amount invested")
    years: float = Field(ge=0, le=50, description="Holding period (years)")
    annual_return: float = Field(ge=-100, le=100, description="Annual return (percent)")


class CagrConfig(BaseModel):
    """Inputs of the CAGR calculator. Degenerate values are allowed and yield 0."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    initial_value: float = Field(description="Starting value")
    final_value: float = Field(ge=0, description="Ending value")
    years: float = Field(description="Elapsed time (years)")


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    should be prefixed with FINTRACK_ (e.g., FINTRACK_DEBUG=true).

    Attributes
    ----------
    debug : bool
        Enable debug mode with verbose logging
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR"
    log_file : Path, optional
        Write JSON log lines to this file (rotated) in addition to the console
    max_months : int
        Month ceiling for payoff simulations
    currency_symbol : str
        Symbol used when printing amounts

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.max_months
    600

    # With .env file:
    # FINTRACK_LOG_LEVEL=DEBUG
    >>> settings = AppSettings(_env_file=".env")
    """

    model_config = SettingsConfigDict(
        env_prefix="FINTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Rotating JSON log file"
    )
    max_months: int = Field(
        default=MAX_SIMULATION_MONTHS,
        ge=1,
        le=1200,
        description="Payoff simulation month ceiling"
    )
    currency_symbol: str = Field(
        default="₹",
        max_length=5,
        description="Currency symbol for display"
    )

"""
Unit tests for config.py Pydantic models.

Tests validation, defaults, derived loan values and settings.
"""

import pytest
from pathlib import Path

from fintrack.amortization import compute_installment, outstanding_balance
from fintrack.config import (
    AppSettings,
    CagrConfig,
    EmiConfig,
    LoanConfig,
    LumpSumConfig,
    PortfolioConfig,
    SipConfig,
)
from fintrack.payoff import Loan


class TestLoanConfig:
    """Tests for LoanConfig validation and resolution."""

    def test_direct_values(self):
        config = LoanConfig(id="A", remaining_amount=100_000, interest_rate=18, emi_amount=5_000)
        loan = config.to_loan()

        assert loan == Loan(id="A", remaining_amount=100_000, interest_rate=18, emi_amount=5_000)

    def test_derived_from_terms(self):
        config = LoanConfig(
            id="car",
            name="Car loan",
            principal_amount=120_000,
            interest_rate=0,
            tenure_months=12,
            paid_installments=3,
        )
        loan = config.to_loan()

        assert loan.remaining_amount == pytest.approx(90_000)
        assert loan.emi_amount == pytest.approx(10_000)
        assert loan.name == "Car loan"

    def test_derived_with_interest(self):
        config = LoanConfig(
            id=7, principal_amount=600_000, interest_rate=9, tenure_months=60, paid_installments=12
        )

        assert config.resolved_emi() == pytest.approx(compute_installment(600_000, 9, 60))
        assert config.resolved_remaining() == pytest.approx(outstanding_balance(600_000, 9, 60, 12))

    def test_explicit_values_win_over_terms(self):
        config = LoanConfig(
            id="A",
            remaining_amount=50_000,
            emi_amount=4_000,
            principal_amount=120_000,
            interest_rate=10,
            tenure_months=36,
        )

        assert config.resolved_remaining() == 50_000
        assert config.resolved_emi() == 4_000

    def test_requires_balance_information(self):
        with pytest.raises(ValueError, match="remaining_amount"):
            LoanConfig(id="A", interest_rate=10, emi_amount=1_000)

    def test_requires_installment_information(self):
        with pytest.raises(ValueError, match="emi_amount"):
            LoanConfig(id="A", remaining_amount=10_000, interest_rate=10)

    @pytest.mark.parametrize(
        "field, value",
        [("interest_rate", -1), ("interest_rate", 101), ("emi_amount", 0), ("remaining_amount", -5)],
    )
    def test_range_validation(self, field, value):
        data = {"id": "A", "remaining_amount": 10_000, "interest_rate": 10, "emi_amount": 1_000}
        data[field] = value
        with pytest.raises(ValueError):
            LoanConfig(**data)

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValueError):
            LoanConfig(id="A", remaining_amount=1, interest_rate=1, emi_amount=1, color="red")

    def test_immutable(self):
        config = LoanConfig(id="A", remaining_amount=1, interest_rate=1, emi_amount=1)
        with pytest.raises(Exception):  # Pydantic raises ValidationError
            config.interest_rate = 5


class TestPortfolioConfig:
    """Tests for PortfolioConfig."""

    def test_defaults(self):
        config = PortfolioConfig()

        assert config.extra_monthly == 0.0
        assert config.loans == []
        assert config.schema_version is None

    def test_from_dict(self, portfolio_data):
        config = PortfolioConfig.model_validate(portfolio_data)

        assert config.extra_monthly == 1_000
        assert [loan.id for loan in config.to_loans()] == ["A", "B"]

    def test_duplicate_ids_rejected(self):
        loan = {"id": "A", "remaining_amount": 1, "interest_rate": 1, "emi_amount": 1}
        with pytest.raises(ValueError, match="Duplicate loan id"):
            PortfolioConfig(loans=[loan, loan])

    def test_negative_extra_rejected(self):
        with pytest.raises(ValueError):
            PortfolioConfig(extra_monthly=-100)


class TestCalculatorConfigs:

    def test_emi_config(self):
        config = EmiConfig(principal=500_000, annual_rate=9.5, tenure_months=60)
        assert config.tenure_months == 60

    def test_emi_config_rejects_zero_tenure(self):
        with pytest.raises(ValueError):
            EmiConfig(principal=500_000, annual_rate=9.5, tenure_months=0)

    def test_sip_config_optional_lump_sum(self):
        config = SipConfig(monthly_amount=5_000, years=10, annual_return=12)
        assert config.lump_sum_amount is None

    def test_sip_config_rejects_zero_years(self):
        with pytest.raises(ValueError):
            SipConfig(monthly_amount=5_000, years=0, annual_return=12)

    def test_lump_sum_config(self):
        config = LumpSumConfig(principal=100_000, years=2.5, annual_return=10)
        assert config.years == 2.5

    def test_cagr_config_allows_degenerate_values(self):
        config = CagrConfig(initial_value=0, final_value=100, years=0)
        assert config.initial_value == 0


class TestAppSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for var in ("FINTRACK_DEBUG", "FINTRACK_LOG_LEVEL", "FINTRACK_LOG_FILE",
                    "FINTRACK_MAX_MONTHS", "FINTRACK_CURRENCY_SYMBOL"):
            monkeypatch.delenv(var, raising=False)
        settings = AppSettings(_env_file=None)

        assert settings.debug is False
        assert settings.log_level == "WARNING"
        assert settings.log_file is None
        assert settings.max_months == 600
        assert settings.currency_symbol == "₹"

    def test_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FINTRACK_MAX_MONTHS", "120")
        monkeypatch.setenv("FINTRACK_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("FINTRACK_LOG_FILE", str(tmp_path / "fintrack.log"))
        settings = AppSettings(_env_file=None)

        assert settings.max_months == 120
        assert settings.log_level == "DEBUG"
        assert settings.log_file == Path(tmp_path / "fintrack.log")

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("FINTRACK_LOG_LEVEL", "VERBOSE")
        with pytest.raises(ValueError):
            AppSettings(_env_file=None)

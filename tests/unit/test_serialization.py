"""
Unit tests for serialization.py.

Tests portfolio file loading/saving and the JSON-ready result dictionaries.
"""

import json
import warnings

import pytest

from fintrack.comparison import compare_strategies, extra_payment_impact, summarize_debts
from fintrack.config import LoanConfig, PortfolioConfig
from fintrack.exceptions import SerializationError
from fintrack.payoff import Loan, simulate_payoff
from fintrack.serialization import (
    SCHEMA_VERSION,
    comparison_to_dict,
    impact_to_dict,
    load_portfolio,
    load_result_file,
    portfolio_from_dict,
    result_to_dict,
    save_comparison,
    save_portfolio,
    summary_to_dict,
)
from fintrack.strategies import avalanche_order


# ---------------------------------------------------------------------------
# Portfolio files
# ---------------------------------------------------------------------------

class TestPortfolioFiles:
    """Tests for reading and writing loan portfolios."""

    def test_load_portfolio(self, portfolio_file):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            portfolio = load_portfolio(portfolio_file)

        assert portfolio.extra_monthly == 1_000
        assert len(portfolio.loans) == 2
        assert portfolio.to_loans()[0].emi_amount == 5_000

    def test_missing_schema_version_warns(self, portfolio_data):
        del portfolio_data["schema_version"]
        with pytest.warns(UserWarning, match="no schema_version"):
            portfolio = portfolio_from_dict(portfolio_data)
        assert len(portfolio.loans) == 2

    def test_schema_mismatch_warns(self, portfolio_data):
        portfolio_data["schema_version"] = "0.0.1"
        with pytest.warns(UserWarning, match="differs from current"):
            portfolio_from_dict(portfolio_data)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SerializationError, match="not valid JSON"):
            load_portfolio(path)

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(SerializationError, match="JSON object"):
            load_portfolio(path)

    def test_invalid_loan_record(self, portfolio_data):
        portfolio_data["loans"][0]["interest_rate"] = 250
        with pytest.raises(ValueError):
            portfolio_from_dict(portfolio_data)

    def test_save_and_reload(self, tmp_path):
        portfolio = PortfolioConfig(
            extra_monthly=2_500,
            loans=[
                LoanConfig(id="home", principal_amount=2_500_000, interest_rate=8.5,
                           tenure_months=240, paid_installments=24),
                LoanConfig(id=3, remaining_amount=40_000, interest_rate=16, emi_amount=2_500),
            ],
        )
        path = tmp_path / "out" / "loans.json"
        save_portfolio(portfolio, path)

        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        assert raw["schema_version"] == SCHEMA_VERSION
        assert "remaining_amount" not in raw["loans"][0]

        reloaded = load_portfolio(path)
        assert reloaded.loans == portfolio.loans
        assert reloaded.extra_monthly == 2_500


# ---------------------------------------------------------------------------
# Result dictionaries
# ---------------------------------------------------------------------------

class TestResultDicts:
    """Tests for the presentation-facing dictionary shapes."""

    def test_result_to_dict(self, two_loans):
        result = simulate_payoff(two_loans, 1_000, avalanche_order, strategy="avalanche")
        data = result_to_dict(result)

        assert data["strategy"] == "avalanche"
        assert data["months"] == result.months
        assert data["status"] == "settled"
        assert data["total_interest"] == pytest.approx(result.total_interest)
        assert data["schedule"][0] == {
            "month": 3,
            "balances": {"A": result.schedule[0].balances["A"], "B": result.schedule[0].balances["B"]},
        }

    def test_result_without_schedule(self, two_loans):
        result = simulate_payoff(two_loans, 1_000, avalanche_order)
        assert result_to_dict(result, include_schedule=False)["schedule"] == []

    def test_integer_ids_become_strings(self):
        loans = [Loan(id=1, remaining_amount=3_000, interest_rate=0, emi_amount=1_000)]
        data = result_to_dict(simulate_payoff(loans, 0, avalanche_order))

        assert data["schedule"] == [{"month": 3, "balances": {"1": 0.0}}]
        json.dumps(data)

    def test_comparison_to_dict(self, two_loans, extra_monthly):
        comparison = compare_strategies(two_loans, extra_monthly)
        data = comparison_to_dict(comparison, extra_monthly)

        assert data["schema_version"] == SCHEMA_VERSION
        assert data["extra_monthly"] == 1_000.0
        assert data["recommended"] == comparison.recommended
        assert data["avalanche"]["strategy"] == "avalanche"
        assert data["snowball"]["strategy"] == "snowball"
        assert data["months_saved"] == comparison.months_saved
        json.dumps(data)

    def test_impact_to_dict(self, two_loans, extra_monthly):
        impact = extra_payment_impact(two_loans, extra_monthly)
        data = impact_to_dict(impact, extra_monthly)

        assert data["baseline"]["schedule"] == []
        assert data["interest_saved"] == pytest.approx(impact.interest_saved)
        assert data["months_saved"] == impact.months_saved

    def test_summary_to_dict(self, two_loans, extra_monthly, start_date):
        comparison = compare_strategies(two_loans, extra_monthly)
        summary = summarize_debts(two_loans, comparison, start=start_date)
        data = summary_to_dict(summary)

        assert data["total_debt"] == 120_000.0
        assert data["payoff_date"] == summary.payoff_date.isoformat()
        assert data["payoff_date"].endswith("-01")


class TestResultFiles:

    def test_save_and_load_comparison(self, tmp_path, two_loans, extra_monthly):
        comparison = compare_strategies(two_loans, extra_monthly)
        path = tmp_path / "results" / "comparison.json"
        save_comparison(comparison, path, extra_monthly=extra_monthly)

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            data = load_result_file(path)

        assert data == json.loads(json.dumps(comparison_to_dict(comparison, extra_monthly)))

    def test_old_result_file_warns(self, tmp_path):
        path = tmp_path / "old.json"
        path.write_text(json.dumps({"avalanche": {}, "snowball": {}}), encoding="utf-8")

        with pytest.warns(UserWarning, match="Result schema version"):
            load_result_file(path)

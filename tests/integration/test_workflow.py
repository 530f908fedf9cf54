"""
Integration test for the full FinTrack workflow.

Tests the pipeline from a portfolio file through strategy comparison,
reporting and serialization to verify all components work together.
"""

import json
from datetime import date

import pytest

from fintrack import (
    PortfolioConfig,
    compare_strategies,
    extra_payment_impact,
    payoff_timeline,
    simulate_payoff,
    summarize_debts,
)
from fintrack.config import LoanConfig
from fintrack.serialization import load_portfolio, load_result_file, save_comparison, save_portfolio
from fintrack.strategies import get_strategy


@pytest.mark.integration
class TestFullWorkflow:
    """Integration tests for the debt payoff workflow."""

    def test_portfolio_file_to_report(self, portfolio_file, tmp_path):
        """
        Load a portfolio, compare strategies, summarize and save the result.

        This is a smoke test to ensure all components integrate properly.
        """
        # 1. Load loans
        portfolio = load_portfolio(portfolio_file)
        loans = portfolio.to_loans()

        # 2. Compare strategies
        comparison = compare_strategies(loans, portfolio.extra_monthly)
        assert comparison.avalanche.settled
        assert comparison.snowball.settled

        # 3. Extra payment impact and summary
        impact = extra_payment_impact(loans, portfolio.extra_monthly)
        summary = summarize_debts(loans, comparison, start=date(2025, 1, 1))
        assert impact.accelerated == comparison.avalanche
        assert impact.interest_saved > 0
        assert summary.payoff_months == comparison.best.months

        # 4. Timeline for charting
        timeline = payoff_timeline(comparison, loans)
        assert timeline.loc[0, "avalanche"] == summary.total_debt
        assert timeline["avalanche"].iloc[-1] == 0.0

        # 5. Persist and read back
        path = tmp_path / "comparison.json"
        save_comparison(comparison, path, extra_monthly=portfolio.extra_monthly)
        data = load_result_file(path)
        assert data["recommended"] == comparison.recommended
        assert data["avalanche"]["months"] == comparison.avalanche.months

    def test_loans_described_by_terms(self, tmp_path):
        """Loans given by original terms resolve to balances and installments."""
        portfolio = PortfolioConfig(
            extra_monthly=5_000,
            loans=[
                LoanConfig(id="home", name="Home loan", principal_amount=3_000_000,
                           interest_rate=8.5, tenure_months=240, paid_installments=36),
                LoanConfig(id="car", principal_amount=800_000, interest_rate=9.5,
                           tenure_months=60, paid_installments=20),
                LoanConfig(id="card", remaining_amount=75_000, interest_rate=36, emi_amount=4_000),
            ],
        )
        path = tmp_path / "loans.json"
        save_portfolio(portfolio, path)
        loans = load_portfolio(path).to_loans()

        comparison = compare_strategies(loans, portfolio.extra_monthly)
        minimums_only = compare_strategies(loans, 0)

        assert comparison.avalanche.settled
        assert comparison.best.total_interest < minimums_only.best.total_interest
        assert comparison.best.months <= minimums_only.best.months
        # Remaining tenure (plus one month of float residue) bounds the minimum-only payoff
        assert minimums_only.avalanche.months <= 240 - 36 + 1

    def test_strategies_by_name_match_comparison(self, two_loans):
        comparison = compare_strategies(two_loans, 2_000)

        for name in ("avalanche", "snowball"):
            result = simulate_payoff(two_loans, 2_000, get_strategy(name), strategy=name)
            assert result == comparison.result_for(name)

    def test_cli_round_trip(self, portfolio_file, tmp_path):
        from click.testing import CliRunner
        from fintrack.cli import main

        runner = CliRunner()
        out_dir = tmp_path / "out"
        result = runner.invoke(main, ["-q", "payoff", "compare", "-c", str(portfolio_file), "-o", str(out_dir)])
        assert result.exit_code == 0, result.output

        with open(out_dir / "comparison.json", encoding="utf-8") as f:
            data = json.load(f)

        loans = load_portfolio(portfolio_file).to_loans()
        comparison = compare_strategies(loans, 1_000)
        assert data["avalanche"]["total_interest"] == pytest.approx(comparison.avalanche.total_interest)
        assert data["snowball"]["months"] == comparison.snowball.months

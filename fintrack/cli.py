"""
Command-Line Interface for FinTrack.

Purpose
-------
Runs the EMI, growth and debt-payoff calculators from the shell without
writing Python code.

Commands
--------
- emi: Monthly installment and total interest for a loan
- sip: SIP maturity, with a year-by-year comparison against a lump sum
- lumpsum: Lump-sum growth under one or more return scenarios
- cagr: Compound annual growth rate between two values
- payoff compare: Avalanche vs snowball for a loan portfolio file
- payoff simulate: One strategy's payoff schedule
- report: Summarize a saved comparison file
- info: Version and dependency information

Example Usage
-------------
    # Installment for 5 lakh at 9.5% over 5 years
    $ fintrack emi --principal 500000 --rate 9.5 --tenure 60

    # Compare strategies and save the result
    $ fintrack payoff compare --config loans.json --extra 2000 --output results/

    # Show version
    $ fintrack --version
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import List, Optional

import click
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.table import Table

from .constants import STRATEGY_NAMES
from .exceptions import FinTrackError
from .logging_config import get_logger, setup_logging
from .utils import compact_amount, format_currency

# Version
__version__ = "0.1.0"

logger = get_logger("cli")


def _fail(message: str) -> None:
    logger.debug("Command failed: %s", message)
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _money(ctx: click.Context, value: float) -> str:
    return format_currency(value, symbol=ctx.obj["settings"].currency_symbol, decimals=2)


def _print_rows(ctx: click.Context, title: str, rows: List[tuple]) -> None:
    """Render (label, value) rows as a rich table, or as plain lines when quiet."""
    if ctx.obj["quiet"]:
        for label, value in rows:
            if label:
                click.echo(f"{label}: {value}")
        return

    table = Table(title=title, show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for label, value in rows:
        table.add_row(label, str(value))
    ctx.obj["console"].print(table)


def _write_json(ctx: click.Context, data: dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    if not ctx.obj["quiet"]:
        click.echo(f"Results saved to {path}")


@click.group()
@click.version_option(version=__version__, prog_name="fintrack")
@click.option("--quiet", "-q", is_flag=True, help="Plain key: value output, no tables")
@click.pass_context
def main(ctx: click.Context, quiet: bool) -> None:
    """
    FinTrack - loan amortization, growth projections and debt payoff planning.

    Use 'fintrack COMMAND --help' for command-specific help.
    """
    from .config import AppSettings

    ctx.ensure_object(dict)
    settings = AppSettings()
    setup_logging(settings)
    ctx.obj["settings"] = settings
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = Console()


# ---------------------------------------------------------------------------
# Calculators
# ---------------------------------------------------------------------------

@main.command()
@click.option("--principal", "-p", type=float, required=True, help="Amount borrowed")
@click.option("--rate", "-r", type=float, required=True, help="Annual interest rate (percent)")
@click.option("--tenure", "-n", type=int, required=True, help="Tenure in months")
@click.option("--schedule", is_flag=True, help="Also print the yearly amortization summary")
@click.pass_context
def emi(ctx: click.Context, principal: float, rate: float, tenure: int, schedule: bool) -> None:
    """
    Compute the monthly installment (EMI) for a loan.

    Example:
        fintrack emi -p 500000 -r 9.5 -n 60 --schedule
    """
    from .amortization import amortization_schedule, compute_installment, compute_total_interest
    from .config import EmiConfig

    try:
        cfg = EmiConfig(principal=principal, annual_rate=rate, tenure_months=tenure)
    except PydanticValidationError as e:
        _fail(str(e))

    installment = compute_installment(cfg.principal, cfg.annual_rate, cfg.tenure_months)
    interest = compute_total_interest(cfg.principal, cfg.annual_rate, cfg.tenure_months)

    _print_rows(ctx, "EMI", [
        ("Monthly EMI", _money(ctx, installment)),
        ("Total Interest", _money(ctx, max(interest, 0.0))),
        ("Total Payment", _money(ctx, installment * cfg.tenure_months)),
    ])

    if schedule:
        table = amortization_schedule(cfg.principal, cfg.annual_rate, cfg.tenure_months)
        yearly = table.groupby((table.index - 1) // 12 + 1).agg(
            {"interest": "sum", "principal": "sum", "balance": "last"}
        )
        rows = [
            (f"Year {year}", f"interest {_money(ctx, r.interest)}, balance {_money(ctx, r.balance)}")
            for year, r in yearly.iterrows()
        ]
        _print_rows(ctx, "Amortization by Year", rows)


@main.command()
@click.option("--monthly", "-m", type=float, required=True, help="Monthly investment")
@click.option("--years", "-y", type=float, required=True, help="Investment period in years")
@click.option("--rate", "-r", type=float, required=True, help="Expected annual return (percent)")
@click.option("--lump-sum", type=float, default=None, help="Lump sum to compare against")
@click.pass_context
def sip(ctx: click.Context, monthly: float, years: float, rate: float, lump_sum: Optional[float]) -> None:
    """
    Project the maturity value of a monthly SIP.

    Example:
        fintrack sip -m 5000 -y 10 -r 12 --lump-sum 600000
    """
    from .config import SipConfig
    from .growth import compare_sip_lump_sum, sip_projection

    try:
        cfg = SipConfig(monthly_amount=monthly, years=years, annual_return=rate, lump_sum_amount=lump_sum)
    except PydanticValidationError as e:
        _fail(str(e))

    projection = sip_projection(cfg.monthly_amount, cfg.years, cfg.annual_return)
    _print_rows(ctx, "SIP Projection", [
        ("Total Invested", _money(ctx, projection.total_invested)),
        ("Maturity Value", _money(ctx, projection.maturity_value)),
        ("Total Returns", _money(ctx, projection.total_returns)),
    ])

    if cfg.lump_sum_amount is not None:
        table = compare_sip_lump_sum(
            cfg.monthly_amount, cfg.lump_sum_amount, int(cfg.years), cfg.annual_return
        )
        rows = [
            (f"Year {year}", f"SIP {_money(ctx, r.sip)} | Lump Sum {_money(ctx, r.lump_sum)}")
            for year, r in table.iterrows()
        ]
        _print_rows(ctx, "SIP vs Lump Sum", rows)


@main.command()
@click.option("--principal", "-p", type=float, required=True, help="Amount invested")
@click.option("--years", "-y", type=float, required=True, help="Holding period in years")
@click.option("--rate", "-r", type=float, default=None, help="Annual return (percent)")
@click.option(
    "--scenarios", "-s",
    type=str,
    default=None,
    help="Comma-separated annual returns for a year-by-year table (e.g. '8,12,15')",
)
@click.pass_context
def lumpsum(
    ctx: click.Context,
    principal: float,
    years: float,
    rate: Optional[float],
    scenarios: Optional[str],
) -> None:
    """
    Project the future value of a lump-sum investment.

    Example:
        fintrack lumpsum -p 100000 -y 10 -r 12
        fintrack lumpsum -p 100000 -y 10 --scenarios 8,12,15
    """
    from .config import LumpSumConfig
    from .growth import lump_sum, project_lump_sum

    if rate is None and not scenarios:
        _fail("Give --rate or --scenarios")

    if rate is not None:
        try:
            cfg = LumpSumConfig(principal=principal, years=years, annual_return=rate)
        except PydanticValidationError as e:
            _fail(str(e))
        value = lump_sum(cfg.principal, cfg.years, cfg.annual_return)
        _print_rows(ctx, "Lump Sum", [
            ("Invested", _money(ctx, cfg.principal)),
            ("Future Value", _money(ctx, value)),
            ("Gain", _money(ctx, value - cfg.principal)),
        ])

    if scenarios:
        try:
            rates = [float(x.strip()) for x in scenarios.split(",") if x.strip()]
        except ValueError as e:
            _fail(f"Could not parse scenarios: {e}")
        table = project_lump_sum(principal, int(years), rates)
        rows = [
            (f"Year {year}", " | ".join(f"{col} {_money(ctx, v)}" for col, v in r.items()))
            for year, r in table.iterrows()
        ]
        _print_rows(ctx, "Return Scenarios", rows)


@main.command()
@click.option("--initial", "-i", type=float, required=True, help="Initial value")
@click.option("--final", "-f", type=float, required=True, help="Final value")
@click.option("--years", "-y", type=float, required=True, help="Elapsed time in years")
@click.pass_context
def cagr(ctx: click.Context, initial: float, final: float, years: float) -> None:
    """
    Compute the compound annual growth rate between two values.

    Example:
        fintrack cagr -i 100000 -f 300000 -y 5
    """
    from .config import CagrConfig
    from .growth import cagr as compute_cagr, cagr_scenarios, total_gain

    try:
        cfg = CagrConfig(initial_value=initial, final_value=final, years=years)
    except PydanticValidationError as e:
        _fail(str(e))

    defined = cfg.initial_value > 0 and cfg.years > 0
    rate = compute_cagr(cfg.initial_value, cfg.final_value, cfg.years)
    gain, gain_percent = total_gain(cfg.initial_value, cfg.final_value)

    _print_rows(ctx, "CAGR", [
        ("CAGR", f"{rate:.2f}%" if defined else "N/A"),
        ("Total Gain", _money(ctx, gain)),
        ("Total Gain %", f"{gain_percent:.2f}%" if cfg.initial_value > 0 else "N/A"),
        ("Scenarios", ", ".join(f"{s}%" for s in cagr_scenarios(rate))),
    ])


# ---------------------------------------------------------------------------
# Debt payoff
# ---------------------------------------------------------------------------

@main.group()
def payoff() -> None:
    """
    Debt payoff planning commands.

    Loan portfolios are JSON files:

        {"schema_version": "0.1.0", "extra_monthly": 1000,
         "loans": [{"id": "A", "remaining_amount": 100000,
                    "interest_rate": 18, "emi_amount": 5000}]}
    """
    pass


def _load_loans(config: Path, extra: Optional[float]):
    from .serialization import load_portfolio

    try:
        portfolio = load_portfolio(config)
    except (FinTrackError, PydanticValidationError) as e:
        _fail(f"Could not load portfolio {config}: {e}")

    extra_monthly = portfolio.extra_monthly if extra is None else extra
    if extra_monthly < 0:
        _fail(f"--extra must be non-negative (got {extra_monthly})")
    return portfolio.to_loans(), extra_monthly


@payoff.command("compare")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to loan portfolio file (JSON)"
)
@click.option("--extra", "-e", type=float, default=None, help="Extra monthly payment (overrides the file)")
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output directory for comparison.json"
)
@click.pass_context
def payoff_compare(ctx: click.Context, config: Path, extra: Optional[float], output: Optional[Path]) -> None:
    """
    Compare avalanche and snowball repayment.

    Example:
        fintrack payoff compare -c loans.json --extra 2000 -o results/
    """
    from .comparison import compare_strategies, extra_payment_impact, summarize_debts
    from .constants import AVALANCHE, SNOWBALL
    from .serialization import comparison_to_dict, impact_to_dict, summary_to_dict

    loans, extra_monthly = _load_loans(config, extra)
    max_months = ctx.obj["settings"].max_months

    comparison = compare_strategies(loans, extra_monthly, max_months=max_months)
    impact = extra_payment_impact(loans, extra_monthly, max_months=max_months)
    summary = summarize_debts(loans, comparison)

    rows = [
        ("Loans", str(len(loans))),
        ("Total Debt", _money(ctx, summary.total_debt)),
        ("Monthly EMI Total", _money(ctx, summary.monthly_emi)),
        ("Extra Monthly", _money(ctx, extra_monthly)),
        ("", ""),
    ]
    for name in (AVALANCHE, SNOWBALL):
        result = comparison.result_for(name)
        months = f"{result.months} months" if result.settled else f"{result.months}+ months (not settled)"
        rows.append((f"{name.title()} Interest", _money(ctx, result.total_interest)))
        rows.append((f"{name.title()} Payoff", months))
    rows.extend([
        ("", ""),
        ("Recommended", comparison.recommended),
        ("Interest Saved", _money(ctx, comparison.interest_saved)),
        ("Months Saved", str(comparison.months_saved)),
        ("Estimated Payoff", summary.payoff_date.strftime("%b %Y") if summary.payoff_date else "Paid off"),
    ])
    if extra_monthly > 0:
        rows.extend([
            ("Extra Payment Saves", _money(ctx, impact.interest_saved)),
            ("Extra Payment Months Saved", str(impact.months_saved)),
        ])
    _print_rows(ctx, "Strategy Comparison", rows)

    if output:
        data = dict(comparison_to_dict(comparison, extra_monthly))
        data["extra_payment_impact"] = impact_to_dict(impact, extra_monthly)
        data["summary"] = summary_to_dict(summary)
        _write_json(ctx, data, output / "comparison.json")


@payoff.command("simulate")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to loan portfolio file (JSON)"
)
@click.option(
    "--strategy", "-s",
    type=click.Choice(list(STRATEGY_NAMES)),
    default="avalanche",
    help="Repayment strategy (default: avalanche)"
)
@click.option("--extra", "-e", type=float, default=None, help="Extra monthly payment (overrides the file)")
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file for the schedule (JSON)"
)
@click.pass_context
def payoff_simulate(
    ctx: click.Context,
    config: Path,
    strategy: str,
    extra: Optional[float],
    output: Optional[Path],
) -> None:
    """
    Simulate one repayment strategy and print its balance schedule.

    Example:
        fintrack payoff simulate -c loans.json -s snowball
    """
    from .payoff import simulate_payoff
    from .serialization import result_to_dict
    from .strategies import get_strategy

    loans, extra_monthly = _load_loans(config, extra)
    result = simulate_payoff(
        loans,
        extra_monthly,
        get_strategy(strategy),
        max_months=ctx.obj["settings"].max_months,
        strategy=strategy,
    )

    rows = [
        ("Strategy", strategy),
        ("Total Interest", _money(ctx, result.total_interest)),
        ("Months", str(result.months)),
        ("Status", result.status.value),
    ]
    _print_rows(ctx, "Payoff Simulation", rows)

    schedule_rows = [
        (
            f"Month {snap.month}",
            ", ".join(f"{loan_id}={compact_amount(b)}" for loan_id, b in snap.balances.items()),
        )
        for snap in result.schedule
    ]
    if schedule_rows:
        _print_rows(ctx, "Balance Schedule", schedule_rows)

    if output:
        _write_json(ctx, dict(result_to_dict(result)), output)


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

@main.command()
@click.option(
    "--result", "-r",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to a comparison file written by 'payoff compare'"
)
@click.option(
    "--format", "-f",
    type=click.Choice(["summary", "csv"]),
    default="summary",
    help="Output format (default: summary)"
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file (for csv format)"
)
@click.pass_context
def report(ctx: click.Context, result: Path, format: str, output: Optional[Path]) -> None:
    """
    Summarize a saved comparison, or export its timeline as CSV.

    Example:
        fintrack report -r results/comparison.json --format csv -o timeline.csv
    """
    from .serialization import load_result_file

    try:
        data = load_result_file(result)
    except json.JSONDecodeError as e:
        _fail(f"{result} is not valid JSON: {e}")
    except FinTrackError as e:
        _fail(str(e))

    if "avalanche" not in data or "snowball" not in data:
        _fail(f"{result} is not a comparison file")

    if format == "summary":
        rows = [
            ("Extra Monthly", _money(ctx, data.get("extra_monthly", 0.0))),
            ("Recommended", data.get("recommended", "N/A")),
            ("Avalanche Interest", _money(ctx, data["avalanche"]["total_interest"])),
            ("Avalanche Months", str(data["avalanche"]["months"])),
            ("Snowball Interest", _money(ctx, data["snowball"]["total_interest"])),
            ("Snowball Months", str(data["snowball"]["months"])),
            ("Interest Saved", _money(ctx, data.get("interest_saved", 0.0))),
            ("Months Saved", str(data.get("months_saved", 0))),
        ]
        _print_rows(ctx, "Comparison Report", rows)
        return

    from .comparison import balance_timeline

    start_total = data.get("summary", {}).get("total_debt")
    if start_total is None:
        _fail(f"{result} has no starting total debt; re-run 'fintrack payoff compare -o'")

    frame = balance_timeline(start_total, {
        key: {snap["month"]: sum(snap["balances"].values()) for snap in data[key].get("schedule", [])}
        for key in ("avalanche", "snowball")
    })

    if output is None:
        output = Path("timeline.csv")
    output.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output)
    if not ctx.obj["quiet"]:
        click.echo(f"CSV report saved to {output}")


@main.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display package, settings and dependency information.
    """
    settings = ctx.obj["settings"]
    info_lines = [
        f"FinTrack Version: {__version__}",
        f"Python: {sys.version.split()[0]}",
        f"Max simulation months: {settings.max_months}",
        f"Log level: {settings.log_level}",
    ]

    dependencies = {
        "numpy": "numpy",
        "pandas": "pandas",
        "pydantic": "pydantic",
        "click": "click",
        "rich": "rich",
    }

    for name, module in dependencies.items():
        try:
            mod = __import__(module)
            version = getattr(mod, "__version__", "installed")
            info_lines.append(f"{name}: {version}")
        except ImportError:
            info_lines.append(f"{name}: not installed")

    if ctx.obj["quiet"]:
        for line in info_lines:
            click.echo(line)
    else:
        from rich.panel import Panel
        ctx.obj["console"].print(Panel("\n".join(info_lines), title="System Information"))


if __name__ == "__main__":
    main()

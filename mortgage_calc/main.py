"""Command-line interface for the mortgage calculator.

This module uses the ``click`` library to implement a multi-command interface.
Users can compute full amortization schedules, view summaries, work out how
long a fixed payment takes to clear a loan, find the largest loan a monthly
budget can carry, or compare a plain mortgage against one with overpayments.
Results can be printed to the terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

import click

from .data_models import MortgageResult, Region, currency_for_region
from .engine import (
    DEFAULT_MAX_YEARS,
    compare_results,
    is_infinite_term,
    max_loan_for_budget,
    simulate,
    solve_term_from_payment,
    standard_payment,
)
from .formatter import format_currency, format_years, print_comparison, print_schedule, print_summary
from .utils import parse_amount, parse_rate

MAX_PRINTED_ROWS = 120


def _amount(value: str, name: str) -> float:
    try:
        return parse_amount(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint=name)


def _rate(value: str) -> float:
    try:
        return parse_rate(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--rate")


def result_to_dict(result: MortgageResult) -> Dict[str, Any]:
    """Convert a result into JSON-serialisable primitives."""
    data = asdict(result)
    data["schedule"] = [asdict(point) for point in result.schedule]
    data["interest_share"] = result.interest_share
    return data


def summary_to_dict(result: MortgageResult) -> Dict[str, Any]:
    data = result_to_dict(result)
    data.pop("schedule")
    return data


def export_to_json(path: Path, result: MortgageResult) -> None:
    """Export schedule and summary to a JSON file."""
    data = result_to_dict(result)
    schedule = data.pop("schedule")
    with path.open("w", encoding="utf-8") as f:
        json.dump({"summary": data, "schedule": schedule}, f, indent=2)


def export_to_csv(path: Path, result: MortgageResult) -> None:
    """Export schedule to a CSV file."""
    header = [
        "Month",
        "Year",
        "Principal",
        "Interest",
        "Cumulative_Interest",
        "Remaining_Balance",
        "Equity_Built",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for p in result.schedule:
            writer.writerow(
                [
                    p.month,
                    p.year,
                    p.principal_payment,
                    p.interest_payment,
                    p.cumulative_interest_paid,
                    p.remaining_balance,
                    p.equity_built,
                ]
            )


region_option = click.option(
    "--region",
    "region",
    type=click.Choice([r.value for r in Region], case_sensitive=False),
    default=Region.UK.value,
    help="Currency used for display",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """A command-line mortgage calculator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount (accepts 250k, 1.2m)")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", required=True, type=float, help="Loan term in years")
@click.option("--overpayment", "-o", "overpayment", default="0", help="Extra principal paid every month")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@region_option
def schedule(
    principal: str,
    rate: str,
    term: float,
    overpayment: str,
    output: Optional[str],
    region: str,
) -> None:
    """Compute and print the full amortization schedule."""
    result = simulate(_amount(principal, "--principal"), _rate(rate), term, _amount(overpayment, "--overpayment"))
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, result)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, result)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv", param_hint="--output")
        click.echo(f"Schedule exported to {path}")
        return

    print_summary(result, currency_for_region(region))
    # Limit schedule length printed to avoid flooding the terminal
    if len(result.schedule) > MAX_PRINTED_ROWS:
        click.echo(f"Schedule has {len(result.schedule)} rows; showing first {MAX_PRINTED_ROWS} rows.")
        print_schedule(result.schedule[:MAX_PRINTED_ROWS])
    else:
        print_schedule(result.schedule)


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount (accepts 250k, 1.2m)")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", required=True, type=float, help="Loan term in years")
@click.option("--overpayment", "-o", "overpayment", default="0", help="Extra principal paid every month")
@click.option("--output", "output", type=str, help="Output file path (.json)")
@region_option
def summary(
    principal: str,
    rate: str,
    term: float,
    overpayment: str,
    output: Optional[str],
    region: str,
) -> None:
    """Compute and print only the summary metrics for a loan."""
    result = simulate(_amount(principal, "--principal"), _rate(rate), term, _amount(overpayment, "--overpayment"))
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension", param_hint="--output")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": summary_to_dict(result)}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(result, currency_for_region(region))


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount (accepts 250k, 1.2m)")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--payment", "-m", "payment", required=True, help="Fixed monthly payment")
def term(principal: str, rate: str, payment: str) -> None:
    """Work out how long a fixed monthly payment takes to clear a loan."""
    years = solve_term_from_payment(_amount(principal, "--principal"), _rate(rate), _amount(payment, "--payment"))
    if is_infinite_term(years):
        click.echo("This payment never pays the loan off: it does not cover the interest.")
    else:
        click.echo(f"Paid off in {format_years(years)} ({years * 12:.0f} months)")


@cli.command()
@click.option("--budget", "-b", "budget", required=True, help="Monthly budget")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--max-years", "max_years", type=float, default=DEFAULT_MAX_YEARS, show_default=True, help="Longest acceptable term")
@region_option
def afford(budget: str, rate: str, max_years: float, region: str) -> None:
    """Find the largest loan a monthly budget can carry."""
    annual_rate = _rate(rate)
    loan = max_loan_for_budget(_amount(budget, "--budget"), annual_rate, max_years)
    currency = currency_for_region(region)
    click.echo(f"Maximum loan     : {format_currency(loan, currency)}")
    click.echo(f"Monthly payment  : {format_currency(standard_payment(loan, annual_rate, max_years), currency)}")


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount (accepts 250k, 1.2m)")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", required=True, type=float, help="Loan term in years")
@click.option("--overpayment", "-o", "overpayment", required=True, help="Extra principal paid every month")
@region_option
def compare(principal: str, rate: str, term: float, overpayment: str, region: str) -> None:
    """Compare a plain mortgage with the same mortgage plus a monthly overpayment.

    For example:

        mortgage-calc compare -p 250k -r 4.5 -t 25 -o 200
    """
    amount = _amount(principal, "--principal")
    annual_rate = _rate(rate)
    baseline = simulate(amount, annual_rate, term)
    overpaying = simulate(amount, annual_rate, term, _amount(overpayment, "--overpayment"))
    print_comparison(baseline, overpaying, compare_results(baseline, overpaying), currency_for_region(region))


if __name__ == "__main__":
    cli()

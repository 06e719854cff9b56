"""Output helpers for the mortgage calculator.

This module renders money for display and prints results in a tabular text
format for the command line. Currency rendering uses a small table of locale
layouts (grouping separator and symbol placement) rather than the platform
locale, so output is identical on every machine. Rounding here is display only;
nothing formatted is fed back into calculations.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable

from .data_models import CurrencyConfig, MonthlyDataPoint, MortgageResult
from .engine import is_infinite_term

SYMBOL_TO_CODE = {"£": "GBP", "€": "EUR"}
CODE_TO_SYMBOL = {"GBP": "£", "EUR": "€", "USD": "$"}

# locale -> (grouping separator, pattern)
LOCALE_LAYOUTS = {
    "en-GB": (",", "{sign}{symbol}{amount}"),
    "en-US": (",", "{sign}{symbol}{amount}"),
    "en-IE": (",", "{sign}{symbol}{amount}"),
    "de-DE": (".", "{sign}{amount} {symbol}"),
    "fr-FR": (" ", "{sign}{amount} {symbol}"),
    "es-ES": (".", "{sign}{amount} {symbol}"),
    "it-IT": (".", "{sign}{amount} {symbol}"),
    "nl-NL": (".", "{symbol} {sign}{amount}"),
}
DEFAULT_LAYOUT = LOCALE_LAYOUTS["en-US"]


def currency_code(symbol: str) -> str:
    """Map a display symbol to its ISO code; anything unknown is treated as USD."""
    return SYMBOL_TO_CODE.get(symbol, "USD")


def _field(currency: Any, name: str) -> str:
    if isinstance(currency, dict):
        return currency[name]
    return getattr(currency, name)


def format_currency(value: float, currency: Any) -> str:
    """Format ``value`` as a whole-unit currency string.

    ``currency`` is a ``CurrencyConfig`` or any mapping/object exposing
    ``locale`` and ``symbol``.
    """
    locale = _field(currency, "locale").replace("_", "-")
    code = currency_code(_field(currency, "symbol"))
    separator, pattern = LOCALE_LAYOUTS.get(locale, DEFAULT_LAYOUT)

    sign = "-" if value < 0 else ""
    if math.isfinite(value):
        rounded = Decimal(str(abs(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        amount = f"{int(rounded):,}".replace(",", separator)
    else:
        amount = "∞"
    return pattern.format(sign=sign, symbol=CODE_TO_SYMBOL[code], amount=amount)


def format_years(years: float) -> str:
    if is_infinite_term(years):
        return "never"
    return f"{years:.1f} years"


def print_summary(result: MortgageResult, currency: CurrencyConfig) -> None:
    """Print a summary of loan metrics in a human-readable format."""
    def money(v: float) -> str:
        return format_currency(v, currency)

    print("Summary")
    print("-" * 72)
    print(f"Principal          : {money(result.total_principal)}")
    print(f"Monthly payment    : {money(result.monthly_payment)}")
    print(f"Total interest     : {money(result.total_interest)}")
    print(f"Total cost         : {money(result.total_cost)}")
    print(f"Interest share     : {result.interest_share * 100:.1f}%")
    print(f"Paid off in        : {format_years(result.years_to_pay_off)} ({result.months_to_pay_off} months)")
    if result.truncated:
        last = result.schedule[-1]
        print(f"Not paid off       : {money(last.remaining_balance)} still owed at the cap")
    print("-" * 72)


def print_schedule(schedule: Iterable[MonthlyDataPoint]) -> None:
    """Print the amortization schedule as a simple table."""
    headers = [
        "Month",
        "Year",
        "Principal",
        "Interest",
        "CumInterest",
        "Balance",
        "Equity",
    ]
    print("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.month),
            str(entry.year),
            f"{entry.principal_payment:.2f}",
            f"{entry.interest_payment:.2f}",
            f"{entry.cumulative_interest_paid:.2f}",
            f"{entry.remaining_balance:.2f}",
            f"{entry.equity_built:.2f}",
        ]
        print("\t".join(row))


def print_comparison(
    baseline: MortgageResult,
    alternative: MortgageResult,
    savings: Dict[str, float],
    currency: CurrencyConfig,
) -> None:
    """Print two results side by side with the savings of the second.

    A positive saving means the second scenario is cheaper or shorter.
    """
    print("Comparison")
    print("=" * 72)
    print(f"{'Metric':20s} {'Baseline':>15s} {'Overpaying':>15s} {'Saved':>15s}")
    rows = [
        ("total_cost", baseline.total_cost, alternative.total_cost, savings["total_cost_saved"]),
        ("total_interest", baseline.total_interest, alternative.total_interest, savings["interest_saved"]),
    ]
    for key, v1, v2, saved in rows:
        print(
            f"{key:20s} {format_currency(v1, currency):>15s} "
            f"{format_currency(v2, currency):>15s} {format_currency(saved, currency):>15s}"
        )
    print(
        f"{'months':20s} {baseline.months_to_pay_off:15d} "
        f"{alternative.months_to_pay_off:15d} {int(savings['months_saved']):15d}"
    )
    print("=" * 72)

"""Data models for the mortgage calculator.

This module defines dataclasses representing the different entities used by the
calculator: the simulation inputs, individual months of the amortization
schedule, the overall result and the currency display configuration. All of
them are frozen: the engine builds fresh instances on every call and nothing
downstream is allowed to mutate them, which also makes results safe to cache.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class SimulationParams:
    """Inputs for a single amortization run.

    Attributes
    ----------
    principal: float
        The amount borrowed.
    annual_rate_percent: float
        The nominal annual interest rate in percent (``4.5`` means 4.5 %).
    term_years: float
        The nominal term used to derive the standard annuity payment. Fractional
        terms are allowed.
    monthly_overpayment: float
        Extra principal paid every month on top of the standard payment.
    """

    principal: float
    annual_rate_percent: float
    term_years: float
    monthly_overpayment: float = 0.0

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (
            self.principal,
            self.annual_rate_percent,
            self.term_years,
            self.monthly_overpayment,
        )


@dataclass(frozen=True)
class MonthlyDataPoint:
    """An entry in the amortization schedule.

    ``month`` is 1-indexed and ``year`` is the policy year the month falls in
    (months 1-12 are year 1). ``remaining_balance`` never goes below zero.
    """

    month: int
    year: int
    principal_payment: float
    interest_payment: float
    cumulative_interest_paid: float
    remaining_balance: float
    equity_built: float


@dataclass(frozen=True)
class MortgageResult:
    """Aggregate outcome of a simulation.

    ``monthly_payment`` is the standard annuity payment for the nominal term and
    does not include any overpayment. ``total_interest`` and ``total_cost`` are
    accumulated from the schedule itself. ``truncated`` is set when the run hit
    the iteration cap before the balance was cleared.
    """

    monthly_payment: float
    total_interest: float
    total_cost: float
    total_principal: float
    years_to_pay_off: float
    months_to_pay_off: int
    schedule: Tuple[MonthlyDataPoint, ...] = ()
    truncated: bool = False

    @property
    def interest_share(self) -> float:
        """Fraction of the total cost that is interest (0 when nothing is owed)."""
        if self.total_cost <= 0:
            return 0.0
        return self.total_interest / self.total_cost

    def month(self, number: int) -> Optional[MonthlyDataPoint]:
        """Return the schedule entry for a 1-indexed month, clamped into range."""
        if not self.schedule:
            return None
        index = min(max(number, 1), len(self.schedule)) - 1
        return self.schedule[index]

    @classmethod
    def empty(cls) -> "MortgageResult":
        return cls(
            monthly_payment=0.0,
            total_interest=0.0,
            total_cost=0.0,
            total_principal=0.0,
            years_to_pay_off=0.0,
            months_to_pay_off=0,
        )


@dataclass(frozen=True)
class CurrencyConfig:
    """How money is displayed for a region."""

    symbol: str
    code: str
    locale: str


class Region(str, Enum):
    UK = "UK"
    USA = "USA"
    EU = "EU"


CURRENCY_CONFIGS: Dict[Region, CurrencyConfig] = {
    Region.UK: CurrencyConfig(symbol="£", code="GBP", locale="en-GB"),
    Region.USA: CurrencyConfig(symbol="$", code="USD", locale="en-US"),
    Region.EU: CurrencyConfig(symbol="€", code="EUR", locale="de-DE"),
}


def currency_for_region(region: str) -> CurrencyConfig:
    """Return the currency preset for a region name, defaulting to the UK."""
    try:
        return CURRENCY_CONFIGS[Region(region.upper())]
    except ValueError:
        return CURRENCY_CONFIGS[Region.UK]

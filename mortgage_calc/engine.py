"""Core calculation engine for the mortgage calculator.

This module implements the financial logic behind the calculator: the
month-by-month amortization of a fixed-rate annuity loan with an optional
constant overpayment, and the two closed-form inverses of the annuity formula
(the term needed for a given payment and the largest loan a budget can carry).

Every function here is total: degenerate or nonsensical inputs map to a defined
result (a zero result, a sentinel term, or an iteration-capped schedule) rather
than an exception, so callers can re-run them on every keystroke.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List

from .data_models import MonthlyDataPoint, MortgageResult, SimulationParams

logger = logging.getLogger(__name__)

# Returned by ``solve_term_from_payment`` when the payment never clears the loan.
INFINITE_TERM_YEARS = 999.0
# Terms at or above this are treated as "will not pay off in a realistic horizon".
INFINITE_TERM_THRESHOLD = 99.0
DEFAULT_MAX_YEARS = 40

_PAID_OFF_EPSILON = 0.01
_ITERATION_CAP_FACTOR = 1.5
_AFFORDABILITY_STEP = 1000


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100 / 12


def _calculate_annuity_payment(principal: float, rate_per_month: float, months: float) -> float:
    """Return the annuity (equal installment) monthly payment for a loan.

    The formula is:

        payment = P * i / (1 - (1 + i)^-n)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments (which may be fractional). The negative
    exponent keeps very long terms finite: the payment tends to the
    interest-only amount ``P * i``. When the interest rate is not positive,
    the payment simplifies to ``P / n``.
    """
    if rate_per_month <= 0:
        return principal / months
    discount = (1 + rate_per_month) ** -months
    return principal * rate_per_month / (1 - discount)


def standard_payment(principal: float, annual_rate_percent: float, term_years: float) -> float:
    """Standard annuity payment for ``principal`` over ``term_years``.

    Returns 0 when there is nothing to amortize (non-positive principal or term).
    """
    if principal <= 0 or term_years <= 0:
        return 0.0
    return _calculate_annuity_payment(principal, monthly_rate(annual_rate_percent), term_years * 12)


def interest_only_payment(principal: float, annual_rate_percent: float) -> float:
    """The payment at or below which the balance never decreases."""
    return principal * monthly_rate(annual_rate_percent)


def minimum_payment(principal: float, annual_rate_percent: float) -> float:
    """Smallest payment worth offering: interest-only plus a one percent buffer."""
    return interest_only_payment(principal, annual_rate_percent) * 1.01


def simulate(
    principal: float,
    annual_rate_percent: float,
    term_years: float,
    monthly_overpayment: float = 0.0,
) -> MortgageResult:
    """Simulate the amortization of a fixed-rate loan month by month.

    Parameters
    ----------
    principal: float
        The amount borrowed.
    annual_rate_percent: float
        Annual nominal rate in percent.
    term_years: float
        Nominal term. Only used to derive the standard payment and the
        iteration cap; the schedule ends whenever the balance is cleared.
    monthly_overpayment: float
        Extra principal paid every month.

    Returns
    -------
    MortgageResult
        The schedule and its totals. If ``principal``, ``annual_rate_percent``
        or ``term_years`` is not positive an all-zero result with an empty
        schedule is returned.
    """
    if principal <= 0 or annual_rate_percent <= 0 or term_years <= 0:
        logger.debug(
            "Degenerate simulation input principal=%s rate=%s term=%s",
            principal,
            annual_rate_percent,
            term_years,
        )
        return MortgageResult.empty()

    rate_per_month = monthly_rate(annual_rate_percent)
    total_months = term_years * 12
    payment = _calculate_annuity_payment(principal, rate_per_month, total_months)
    month_cap = total_months * _ITERATION_CAP_FACTOR

    balance = principal
    total_interest = 0.0
    equity = 0.0
    schedule: List[MonthlyDataPoint] = []
    month = 0

    while balance > _PAID_OFF_EPSILON and month < month_cap:
        month += 1
        interest_payment = balance * rate_per_month
        principal_payment = payment - interest_payment + monthly_overpayment
        # Final month: pay exactly what is left
        if principal_payment > balance:
            principal_payment = balance

        balance -= principal_payment
        total_interest += interest_payment
        equity += principal_payment

        schedule.append(
            MonthlyDataPoint(
                month=month,
                year=math.ceil(month / 12),
                principal_payment=principal_payment,
                interest_payment=interest_payment,
                cumulative_interest_paid=total_interest,
                remaining_balance=max(0.0, balance),
                equity_built=equity,
            )
        )

    truncated = balance > _PAID_OFF_EPSILON
    if truncated:
        logger.debug(
            "Simulation stopped at the %d month cap with %.2f outstanding",
            month,
            balance,
        )

    return MortgageResult(
        monthly_payment=payment,
        total_interest=total_interest,
        total_cost=total_interest + principal,
        total_principal=principal,
        years_to_pay_off=month / 12,
        months_to_pay_off=month,
        schedule=tuple(schedule),
        truncated=truncated,
    )


def simulate_params(params: SimulationParams) -> MortgageResult:
    return simulate(*params.as_tuple())


def solve_term_from_payment(principal: float, annual_rate_percent: float, payment: float) -> float:
    """Return the number of years a fixed ``payment`` takes to clear ``principal``.

    This is the inverse of the annuity formula solved for ``n``:

        n = ln(M / (M - P * i)) / ln(1 + i)

    If the payment does not exceed the interest-only amount the loan never
    amortizes and ``INFINITE_TERM_YEARS`` is returned instead.
    """
    if principal <= 0:
        return 0.0
    rate_per_month = monthly_rate(annual_rate_percent)
    interest_only = principal * rate_per_month
    if payment <= interest_only:
        return INFINITE_TERM_YEARS
    if rate_per_month == 0:
        return principal / payment / 12
    months = math.log(payment / (payment - interest_only)) / math.log(1 + rate_per_month)
    return months / 12


def is_infinite_term(years: float) -> bool:
    return years >= INFINITE_TERM_THRESHOLD


def max_loan_for_budget(
    monthly_budget: float,
    annual_rate_percent: float,
    max_years: float = DEFAULT_MAX_YEARS,
) -> float:
    """Return the largest loan whose standard payment over ``max_years`` fits the budget.

    The closed-form principal

        P = M * (1 - (1 + i)^-n) / i

    is floored to the nearest lower multiple of 1000 so the suggestion is never
    pushed over budget by rounding. Very long terms approach ``M / i``.
    """
    if monthly_budget <= 0 or max_years <= 0:
        return 0.0
    rate_per_month = monthly_rate(annual_rate_percent)
    months = max_years * 12
    if rate_per_month <= 0:
        max_loan = monthly_budget * months
    else:
        discount = (1 + rate_per_month) ** -months
        max_loan = monthly_budget * (1 - discount) / rate_per_month
    return float(math.floor(max_loan / _AFFORDABILITY_STEP) * _AFFORDABILITY_STEP)


def compare_results(baseline: MortgageResult, alternative: MortgageResult) -> Dict[str, float]:
    """Summarise how much ``alternative`` saves relative to ``baseline``.

    Positive values mean the alternative is cheaper or shorter.
    """
    return {
        "interest_saved": baseline.total_interest - alternative.total_interest,
        "total_cost_saved": baseline.total_cost - alternative.total_cost,
        "years_saved": baseline.years_to_pay_off - alternative.years_to_pay_off,
        "months_saved": baseline.months_to_pay_off - alternative.months_to_pay_off,
    }

import asyncio
import functools
import logging
import os

from flask import Flask, jsonify, render_template, request

from mortgage_calc.advice import generate_mortgage_advice
from mortgage_calc.data_models import CURRENCY_CONFIGS, Region, currency_for_region
from mortgage_calc.engine import (
    DEFAULT_MAX_YEARS,
    is_infinite_term,
    max_loan_for_budget,
    minimum_payment,
    simulate,
    solve_term_from_payment,
    standard_payment,
)
from mortgage_calc.formatter import format_currency, format_years
from mortgage_calc.main import result_to_dict, summary_to_dict
from mortgage_calc.mood import MOOD_LABELS, classify_mood, is_trap
from mortgage_calc.utils import parse_amount, parse_rate

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
app.secret_key = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")

AVERAGE_UK_LOAN = 250_000
DEFAULT_RATE = 4.5
DEFAULT_BUDGET = 1400
STANDARD_TERM_YEARS = 25
# Terms passed to the engine (from the form or the API) are capped so schedules stay bounded
MAX_SIMULATED_YEARS = 100

# Results are immutable, so identical inputs can share one simulation
cached_simulate = functools.lru_cache(maxsize=512)(simulate)


def _form_number(form, name: str, default: float, parser=parse_amount) -> float:
    raw = str(form.get(name, "")).strip()
    if not raw:
        return float(default)
    return parser(raw)


def _run_game(form) -> dict:
    """Evaluate the budget game for the submitted form.

    The user picks a loan and a monthly payment; the payment decides the term,
    and the term decides the full schedule.
    """
    currency = currency_for_region(form.get("region", Region.UK.value))
    rate = _form_number(form, "rate", DEFAULT_RATE, parser=parse_rate)
    budget = _form_number(form, "budget", DEFAULT_BUDGET)
    loan = _form_number(form, "loan", AVERAGE_UK_LOAN)
    payment = _form_number(form, "payment", budget)

    term_years = solve_term_from_payment(loan, rate, payment)
    result = cached_simulate(loan, rate, min(term_years, MAX_SIMULATED_YEARS), 0.0)
    # A zero rate or zero loan gives an empty schedule: no totals or mood to show
    has_schedule = bool(result.schedule)
    mood = classify_mood(term_years, result) if has_schedule else None

    scrubber_month = int(_form_number(form, "month", 1))
    if scrubber_month > result.months_to_pay_off:
        scrubber_month = 1
    point = result.month(scrubber_month)

    def money(value: float) -> str:
        return format_currency(value, currency)

    return {
        "currency": currency,
        "rate": rate,
        "budget": budget,
        "loan": loan,
        "payment": payment,
        "term_years": term_years,
        "term_label": format_years(term_years),
        "never_pays_off": is_infinite_term(term_years),
        "result": result,
        "has_schedule": has_schedule,
        "no_interest": rate <= 0,
        "mood": mood.value if mood is not None else None,
        "mood_label": MOOD_LABELS[mood] if mood is not None else None,
        "is_trap": mood is not None and is_trap(mood),
        "interest_percent": result.interest_share * 100,
        "scrubber_month": scrubber_month,
        "point": point,
        "standard_payment": money(standard_payment(loan, rate, STANDARD_TERM_YEARS)),
        "minimum_payment": money(minimum_payment(loan, rate)),
        "max_loan": money(max_loan_for_budget(budget, rate, DEFAULT_MAX_YEARS)),
        "total_interest": money(result.total_interest),
        "total_cost": money(result.total_cost),
        "monthly_payment": money(payment),
    }


@app.route("/", methods=["GET", "POST"])
def index():
    game = None
    error = None
    region = Region.UK.value

    if request.method == "POST":
        region = request.form.get("region", Region.UK.value)
        try:
            game = _run_game(request.form)
        except ValueError as exc:
            error = str(exc)

    return render_template(
        "index.html",
        game=game,
        error=error,
        region=region,
        regions=[r.value for r in CURRENCY_CONFIGS],
        default_budget=DEFAULT_BUDGET,
        default_rate=DEFAULT_RATE,
        asset_version=app.config["ASSET_VERSION"],
    )


def _json_number(payload: dict, name: str, default=None) -> float:
    value = payload.get(name, default)
    if value is None:
        raise ValueError(f"Missing field: {name}")
    if isinstance(value, str):
        return parse_amount(value)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid numeric value for {name}: {value}") from exc


def _json_payload() -> dict:
    return request.get_json(silent=True) or {}


def _json_term(payload: dict) -> float:
    return min(_json_number(payload, "term_years"), MAX_SIMULATED_YEARS)


@app.errorhandler(ValueError)
def handle_value_error(exc: ValueError):
    return jsonify({"error": str(exc)}), 400


@app.post("/api/simulate")
def api_simulate():
    payload = _json_payload()
    result = cached_simulate(
        _json_number(payload, "principal"),
        _json_number(payload, "annual_rate_percent"),
        _json_term(payload),
        _json_number(payload, "monthly_overpayment", 0.0),
    )
    body = result_to_dict(result)
    body["mood"] = classify_mood(result.years_to_pay_off, result).value
    return jsonify(body)


@app.post("/api/term")
def api_term():
    payload = _json_payload()
    years = solve_term_from_payment(
        _json_number(payload, "principal"),
        _json_number(payload, "annual_rate_percent"),
        _json_number(payload, "monthly_payment"),
    )
    return jsonify({"years": years, "never_pays_off": is_infinite_term(years)})


@app.post("/api/affordability")
def api_affordability():
    payload = _json_payload()
    max_loan = max_loan_for_budget(
        _json_number(payload, "monthly_budget"),
        _json_number(payload, "annual_rate_percent"),
        _json_number(payload, "max_years", DEFAULT_MAX_YEARS),
    )
    return jsonify({"max_loan": max_loan})


@app.post("/api/advice")
def api_advice():
    payload = _json_payload()
    amount = _json_number(payload, "principal")
    rate = _json_number(payload, "annual_rate_percent")
    years = _json_term(payload)
    overpayment = _json_number(payload, "monthly_overpayment", 0.0)

    result = cached_simulate(amount, rate, years, 0.0)
    comparison = cached_simulate(amount, rate, years, overpayment) if overpayment else None
    advice = asyncio.run(
        generate_mortgage_advice(payload.get("region", Region.UK.value), amount, rate, years, result, comparison)
    )
    return jsonify({"advice": advice, "summary": summary_to_dict(result)})


if __name__ == "__main__":
    logger.info("Starting Mortgage Calculator web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)

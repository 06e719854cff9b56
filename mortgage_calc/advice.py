"""Claude API client for generating short mortgage commentary.

The commentary is decoration on top of the engine: it only reads finished
results, and any failure (no key configured, network or API error) yields
``FALLBACK_ADVICE`` so the caller always gets text back.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import anthropic

from .data_models import MortgageResult
from .engine import compare_results

logger = logging.getLogger(__name__)

FALLBACK_ADVICE = "The math speaks for itself: Interest is the silent wealth killer."
DEFAULT_MODEL = "claude-haiku-4-5"


def build_advice_prompt(
    region: str,
    amount: float,
    rate: float,
    years: float,
    result: MortgageResult,
    overpayment_result: Optional[MortgageResult] = None,
) -> str:
    """Assemble the prompt text from the headline numbers of one or two results."""
    interest_percent = 0
    if result.total_principal > 0:
        interest_percent = round(result.total_interest / result.total_principal * 100)

    lines = [
        "You are a witty, brutally honest, financial expert.",
        f"The user is looking at a mortgage in {region}.",
        "",
        "Here are the stats:",
        f"- Principal: {amount:,.0f}",
        f"- Interest Rate: {rate}%",
        f"- Term: {years:g} years",
        f"- Total Interest Payable: {round(result.total_interest):,}",
        f"- That is {interest_percent}% of the house value just in interest!",
    ]

    if overpayment_result is not None:
        savings = compare_results(result, overpayment_result)
        lines += [
            "",
            "Comparison:",
            "If they use the simulator settings (overpayment/shorter term), "
            f"they save {round(savings['interest_saved']):,} and {savings['years_saved']:.1f} years.",
        ]

    lines += [
        "",
        "Give a short, punchy, 2-sentence summary.",
        '1st sentence: Acknowledge the horror of the standard deal (use a metaphor like "feeding the bank").',
        "2nd sentence: If the overpayment saves money, enthusiastically recommend it. "
        "If not, warn them about the rate.",
        "Don't use markdown formatting like bold or italics. Just plain text.",
    ]
    return "\n".join(lines)


async def generate_mortgage_advice(
    region: str,
    amount: float,
    rate: float,
    years: float,
    result: MortgageResult,
    overpayment_result: Optional[MortgageResult] = None,
    *,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> str:
    """Generate a two-sentence commentary on a mortgage using Claude API.

    Returns ``FALLBACK_ADVICE`` if the API key is missing or the call fails.
    """
    api_key = api_key or os.environ.get("ANTHROPIC_API_KEY", "")
    if not api_key:
        logger.debug("Anthropic API key not configured, using fallback advice")
        return FALLBACK_ADVICE

    prompt = build_advice_prompt(region, amount, rate, years, result, overpayment_result)
    model = model or os.environ.get("MORTGAGE_ADVICE_MODEL", DEFAULT_MODEL)

    try:
        client = anthropic.AsyncAnthropic(api_key=api_key)
        message = await client.messages.create(
            model=model,
            max_tokens=200,
            messages=[{"role": "user", "content": prompt}],
        )
        text = message.content[0].text.strip()
    except Exception as e:
        logger.warning("Mortgage advice generation failed: %s", e)
        return FALLBACK_ADVICE

    return text or FALLBACK_ADVICE

"""Threshold classification of a mortgage for display.

A result is bucketed by how long it takes to pay off and by how much of the
total cost is interest. The worst matching tier wins.
"""

from __future__ import annotations

from enum import Enum

from .data_models import MortgageResult


class Mood(str, Enum):
    HAPPY = "happy"
    MEH = "meh"
    SAD = "sad"
    RAGE = "rage"


# (mood, years above, interest share above), checked worst first
MOOD_THRESHOLDS = (
    (Mood.RAGE, 35, 0.55),
    (Mood.SAD, 26, 0.45),
    (Mood.MEH, 22, 0.30),
)

MOOD_LABELS = {
    Mood.HAPPY: "The Freedom Zone",
    Mood.MEH: "Getting Expensive",
    Mood.SAD: "Feeding the Bank",
    Mood.RAGE: "The Debt Trap",
}


def classify_mood(years_to_pay_off: float, result: MortgageResult) -> Mood:
    share = result.interest_share
    for mood, max_years, max_share in MOOD_THRESHOLDS:
        if years_to_pay_off > max_years or share > max_share:
            return mood
    return Mood.HAPPY


def is_trap(mood: Mood) -> bool:
    return mood is Mood.RAGE

"""Utility functions for the mortgage calculator.

This module provides helpers for parsing user input (from the command line or
web forms) into plain floats. Amounts may carry thousands separators and the
``k``/``m`` shorthand suffixes; rates may carry a trailing percent sign.
"""

from __future__ import annotations


def number_from_str(value: str) -> float:
    """Convert a numeric string into a ``float``.

    The function strips any commas and surrounding whitespace. It raises
    ``ValueError`` if conversion fails.
    """
    try:
        cleaned = str(value).strip().replace(",", "")
        return float(cleaned)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc


def parse_amount(value: str) -> float:
    """Parse a money amount with optional suffixes.

    Accepts plain numbers ("250000") and shorthand with ``k``/``m`` suffixes
    (e.g. "250k" meaning 250_000). A leading currency symbol is ignored.
    """
    text = str(value).strip().lower().lstrip("£$€")
    factor = 1.0
    if text.endswith("k"):
        factor = 1_000.0
        text = text[:-1]
    elif text.endswith("m"):
        factor = 1_000_000.0
        text = text[:-1]
    try:
        return number_from_str(text) * factor
    except ValueError as exc:
        raise ValueError(f"Invalid amount: {value}") from exc


def parse_rate(value: str) -> float:
    """Parse an annual rate in percent (e.g. "4.5" or "4.5%")."""
    text = str(value).strip()
    if text.endswith("%"):
        text = text[:-1]
    try:
        return number_from_str(text)
    except ValueError as exc:
        raise ValueError(f"Invalid interest rate: {value}") from exc

"""Utility functions for the mortgage calculator.

This module provides helpers for turning user input into ``Decimal`` values
and for rounding money to cents. The presentation layer uses the parsing
helpers; the engine only uses ``as_decimal`` and ``to_money``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext
from typing import Union

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def as_decimal(value: Number) -> Decimal:
    """Return ``value`` as a ``Decimal``.

    Floats go through ``str`` so that ``3.65`` becomes ``Decimal("3.65")``
    rather than its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_money(value: Decimal) -> Decimal:
    """Round ``value`` to cents, half up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas and surrounding whitespace. It raises
    ``ValueError`` if conversion fails or the value is not finite.
    """
    try:
        cleaned = value.replace(",", "").strip()
        result = Decimal(cleaned)
    except (InvalidOperation, AttributeError) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value}")
    return result


def parse_amount(value: str) -> Decimal:
    """Parse a money string with optional suffixes.

    Accepts plain numbers ("400000", "400,000") and shorthand with ``k``/``m``
    suffixes (e.g. "400k" meaning 400_000).
    """
    value = value.strip().lower()
    factor = Decimal(1)
    if value.endswith("k"):
        factor = Decimal(1_000)
        value = value[:-1]
    elif value.endswith("m"):
        factor = Decimal(1_000_000)
        value = value[:-1]
    return decimal_from_str(value) * factor


def number_or_default(value: object, default: Number = 0) -> Decimal:
    """Return ``value`` as a ``Decimal`` or ``default`` when it is not numeric.

    Form fields arrive as free text; anything that does not parse (including
    an empty string or ``None``) falls back to ``default``.
    """
    if value is None:
        return as_decimal(default)
    try:
        if isinstance(value, str):
            return parse_amount(value)
        return decimal_from_str(str(value))
    except ValueError:
        return as_decimal(default)

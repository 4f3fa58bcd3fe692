"""Combining the quantities of two matched ingredients."""

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from cookshare.normalize.units import (
    convert_from_base_unit,
    convert_to_base_unit,
    format_number,
    normalize_unit,
    parse_amount,
)

# A merged total at or above this many base units is shown in the larger unit
UPGRADE_THRESHOLD = 1000
UPGRADE_UNITS: dict[str, str] = {"g": "kg", "ml": "l"}


@dataclass(frozen=True)
class Measure:
    """Display amount and unit of a shopping item."""

    amount: str
    unit: str


def _to_fixed(value: float, digits: int) -> str:
    """Fixed-point rendering that rounds halves away from zero, like Number.toFixed."""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_amount(value: float) -> str:
    """
    Format a converted amount for display.

    Whole numbers have no decimals, amounts below 1 keep up to two
    decimals and everything else keeps one decimal, with trailing zeros
    dropped. Overflowed totals print as "Infinity".
    """
    if not math.isfinite(value) or value % 1 == 0:
        return format_number(value)
    if value < 1:
        return re.sub(r"\.?0+$", "", _to_fixed(value, 2), count=1)
    return re.sub(r"\.0$", "", _to_fixed(value, 1))


def _format_direct_sum(value: float) -> str:
    if not math.isfinite(value) or value % 1 == 0:
        return format_number(value)
    return _to_fixed(value, 1)


def combine_quantities(
    amount1: str | None,
    unit1: str | None,
    amount2: str | None,
    unit2: str | None,
) -> Measure:
    """
    Merge two (amount, unit) pairs into one.

    The first pair belongs to the item already on the list and its unit is
    preferred for display. Falls back to joining both as text when the
    units cannot be reconciled, so nothing is ever lost.
    """
    amount1, unit1 = amount1 or "", unit1 or ""
    amount2, unit2 = amount2 or "", unit2 or ""

    num1 = parse_amount(amount1) or 0.0
    num2 = parse_amount(amount2) or 0.0

    # Non-numeric amounts such as "a pinch" are kept verbatim
    if num1 == 0:
        return Measure(amount2, unit2)
    if num2 == 0:
        return Measure(amount1, unit1)

    converted1 = convert_to_base_unit(num1, unit1)
    converted2 = convert_to_base_unit(num2, unit2)

    if converted1 and converted2 and converted1.unit == converted2.unit:
        total = converted1.amount + converted2.amount

        preferred_unit = unit1
        if converted1.unit in UPGRADE_UNITS and total >= UPGRADE_THRESHOLD:
            preferred_unit = UPGRADE_UNITS[converted1.unit]

        final = convert_from_base_unit(total, converted1.unit, preferred_unit)
        return Measure(format_amount(final.amount), final.unit)

    if normalize_unit(unit1) == normalize_unit(unit2):
        return Measure(_format_direct_sum(num1 + num2), unit1)

    existing = f"{amount1} {unit1}".strip()
    incoming = f"{amount2} {unit2}".strip()
    return Measure(f"{existing} + {incoming}", "")

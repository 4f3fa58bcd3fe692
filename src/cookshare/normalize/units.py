"""Unit normalization and conversion utilities."""

import math
import re
from dataclasses import dataclass
from decimal import Decimal

# =============================================================================
# Unit Tables
# =============================================================================

# Surface spelling -> canonical unit token
UNIT_ALIASES: dict[str, str] = {
    # Weight
    "g": "g",
    "gram": "g",
    "grams": "g",
    "gr": "g",
    "kg": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
    "kilo": "kg",
    "oz": "oz",
    "ounce": "oz",
    "ounces": "oz",
    "lb": "lb",
    "pound": "lb",
    "pounds": "lb",
    "lbs": "lb",
    # Volume
    "ml": "ml",
    "milliliter": "ml",
    "milliliters": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "l": "l",
    "liter": "l",
    "liters": "l",
    "litre": "l",
    "litres": "l",
    "cup": "cup",
    "cups": "cup",
    "c": "cup",
    "tbsp": "tbsp",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tbs": "tbsp",
    "tsp": "tsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "ts": "tsp",
    "fl oz": "fl oz",
    "fluid ounce": "fl oz",
    "fluid ounces": "fl oz",
    "floz": "fl oz",
    # Count
    "piece": "piece",
    "pieces": "piece",
    "pc": "piece",
    "pcs": "piece",
    "item": "item",
    "items": "item",
    "": "piece",
}

# Weight conversions (base unit: g)
WEIGHT_UNITS: dict[str, float] = {
    "g": 1.0,
    "kg": 1000.0,
    "oz": 28.35,
    "lb": 453.59,
}

# Volume conversions (base unit: ml)
VOLUME_UNITS: dict[str, float] = {
    "ml": 1.0,
    "l": 1000.0,
    "cup": 240.0,
    "tbsp": 15.0,
    "tsp": 5.0,
    "fl oz": 29.57,
}

# Count-based units pass through with base unit "piece"
COUNT_UNITS: frozenset[str] = frozenset({"piece", "item"})

BASE_UNIT_TABLES: dict[str, dict[str, float]] = {
    "g": WEIGHT_UNITS,
    "ml": VOLUME_UNITS,
}

_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class ConvertedQuantity:
    """A numeric amount tagged with the unit it is expressed in."""

    amount: float
    unit: str


# =============================================================================
# Numeric Helpers
# =============================================================================


def parse_amount(amount: str | float | None) -> float | None:
    """
    Parse the leading number of an amount string.

    Mirrors the lenient parsing recipe amounts have always had in the web
    client: only the leading decimal number counts, so "2 cups" is 2 and
    "1/2" is 1. Returns None when the text does not start with a number.
    """
    if amount is None:
        return None
    if isinstance(amount, (int, float)):
        return float(amount)

    match = _LEADING_NUMBER.match(amount.lstrip())
    if not match:
        return None
    return float(match.group(0))


def format_number(value: float) -> str:
    """
    Render a number the way the web client prints it.

    Integral values have no decimals (6.0 -> "6"), fractions use the
    shortest round-trip digits, and very large or small magnitudes switch
    to exponent notation at the same points with the same spelling
    ("1.5e-7", "1e+21"). Non-finite values become "Infinity" or "NaN".
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    # Position of the decimal point relative to the first significant digit
    point = exponent + len(digits)

    if len(digits) <= point <= 21:
        text = digits + "0" * (point - len(digits))
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        mantissa = digits if len(digits) == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{point - 1:+d}"
    return sign + text


# =============================================================================
# Normalization and Conversion
# =============================================================================


def normalize_unit(raw: str | None) -> str:
    """
    Map a unit spelling to its canonical token.

    Unknown units come back lowercased and trimmed. An empty unit is a
    "piece".
    """
    normalized = (raw or "").lower().strip()
    return UNIT_ALIASES.get(normalized, normalized)


def convert_to_base_unit(amount: float, unit: str | None) -> ConvertedQuantity | None:
    """
    Convert an amount to grams (weight) or milliliters (volume).

    Count units come back unchanged with base unit "piece". Returns None
    when the unit is not in any conversion table.
    """
    normalized = normalize_unit(unit)

    if normalized in WEIGHT_UNITS:
        return ConvertedQuantity(amount * WEIGHT_UNITS[normalized], "g")

    if normalized in VOLUME_UNITS:
        return ConvertedQuantity(amount * VOLUME_UNITS[normalized], "ml")

    if normalized in COUNT_UNITS:
        return ConvertedQuantity(amount, "piece")

    return None


def convert_from_base_unit(amount: float, base_unit: str, preferred_unit: str) -> ConvertedQuantity:
    """
    Convert a base-unit amount into the preferred display unit.

    The result keeps the preferred unit's spelling. If the preferred unit
    does not belong to the base unit's table, the amount is returned as-is
    in the base unit.
    """
    table = BASE_UNIT_TABLES.get(base_unit)
    normalized_preferred = normalize_unit(preferred_unit)

    if table is not None and normalized_preferred in table:
        return ConvertedQuantity(amount / table[normalized_preferred], preferred_unit)

    return ConvertedQuantity(amount, base_unit)

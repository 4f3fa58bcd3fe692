"""Unit normalization, ingredient matching and quantity combination."""

from cookshare.normalize.ingredients import are_similar, normalize_ingredient_name
from cookshare.normalize.quantities import Measure, combine_quantities, format_amount
from cookshare.normalize.units import (
    ConvertedQuantity,
    convert_from_base_unit,
    convert_to_base_unit,
    format_number,
    normalize_unit,
    parse_amount,
)

__all__ = [
    "ConvertedQuantity",
    "Measure",
    "are_similar",
    "combine_quantities",
    "convert_from_base_unit",
    "convert_to_base_unit",
    "format_amount",
    "format_number",
    "normalize_ingredient_name",
    "normalize_unit",
    "parse_amount",
]

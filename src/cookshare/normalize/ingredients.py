"""Ingredient name normalization and similarity matching."""

import re

# Descriptors that never change what has to be bought
DESCRIPTOR_PATTERN = re.compile(r"\b(fresh|dried|ground|chopped|diced|sliced|whole|organic)\b")

# Ingredient families: canonical name -> surface variants
INGREDIENT_VARIATIONS: dict[str, tuple[str, ...]] = {
    "onion": ("onions", "yellow onion", "white onion", "red onion"),
    "tomato": ("tomatoes", "cherry tomatoes", "roma tomatoes"),
    "garlic": ("garlic cloves", "garlic clove", "minced garlic"),
    "butter": ("unsalted butter", "salted butter"),
    "oil": ("olive oil", "vegetable oil", "cooking oil"),
    "salt": ("sea salt", "kosher salt", "table salt"),
    "pepper": ("black pepper", "white pepper", "ground pepper"),
}


def normalize_ingredient_name(name: str) -> str:
    """
    Normalize an ingredient name for matching.

    - Lowercase
    - Remove preparation descriptors (fresh, chopped, ...)
    - Collapse whitespace
    """
    name = DESCRIPTOR_PATTERN.sub("", name.lower())
    return " ".join(name.split())


def _in_family(normalized: str, base: str, variants: tuple[str, ...]) -> bool:
    return base in normalized or any(variant in normalized for variant in variants)


def are_similar(name1: str, name2: str) -> bool:
    """
    Check whether two ingredient names refer to the same thing to buy.

    Names match when their normalized forms are equal, when one contains
    the other ("tomato" / "cherry tomatoes"), or when both fall into the
    same ingredient family. There is no fuzzy matching: names without
    lexical overlap are always distinct.
    """
    normalized1 = normalize_ingredient_name(name1)
    normalized2 = normalize_ingredient_name(name2)

    if normalized1 == normalized2:
        return True

    if normalized1 in normalized2 or normalized2 in normalized1:
        return True

    for base, variants in INGREDIENT_VARIATIONS.items():
        if _in_family(normalized1, base, variants) and _in_family(normalized2, base, variants):
            return True

    return False

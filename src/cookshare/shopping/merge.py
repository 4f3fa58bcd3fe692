"""Merging a recipe's ingredients into a shopping list."""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from cookshare.logging_config import get_logger
from cookshare.normalize.ingredients import are_similar
from cookshare.normalize.quantities import combine_quantities
from cookshare.normalize.units import format_number, parse_amount

logger = get_logger(__name__)

_ITEM_FIELDS = ("name", "amount", "unit", "completed", "added_by", "order")


@dataclass(frozen=True)
class Ingredient:
    """A recipe ingredient line."""

    name: str
    amount: str = ""
    unit: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ingredient":
        return cls(
            name=data.get("name") or "",
            amount=str(data.get("amount") or ""),
            unit=data.get("unit") or "",
        )


@dataclass
class ShoppingItem:
    """A single entry on a shopping list. Identity is its position in the list."""

    name: str
    amount: str = ""
    unit: str = ""
    completed: bool = False
    added_by: str | None = None
    order: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShoppingItem":
        """Build an item from its stored form, keeping unknown keys in `extra`."""
        return cls(
            name=data.get("name") or "",
            amount=str(data.get("amount") or ""),
            unit=data.get("unit") or "",
            completed=bool(data.get("completed", False)),
            added_by=data.get("added_by"),
            order=data.get("order"),
            extra={k: v for k, v in data.items() if k not in _ITEM_FIELDS},
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.extra)
        data.update(
            name=self.name,
            amount=self.amount,
            unit=self.unit,
            completed=self.completed,
            added_by=self.added_by,
        )
        if self.order is not None:
            data["order"] = self.order
        return data


@dataclass
class MergeResult:
    """Outcome of merging one recipe into a list."""

    added_count: int
    combined_count: int
    updated_items: list[ShoppingItem]

    @property
    def processed_count(self) -> int:
        return self.added_count + self.combined_count


def serving_multiplier(requested_servings: float | None, recipe_servings: int | None) -> float:
    """Scale factor for cooking `requested_servings` of a recipe written for `recipe_servings`."""
    if requested_servings and requested_servings > 0:
        return requested_servings / (recipe_servings or 1)
    return 1.0


def scale_amount(amount: str, multiplier: float) -> str:
    """Scale a numeric amount; anything that is not a number passes through."""
    if multiplier == 1 or not amount:
        return amount

    value = parse_amount(amount)
    if value is None:
        return amount
    return format_number(value * multiplier)


def _find_similar(items: Sequence[ShoppingItem], name: str) -> int | None:
    for index, item in enumerate(items):
        if item.name.strip() and are_similar(item.name, name):
            return index
    return None


def merge_recipe_into_list(
    recipe_ingredients: Sequence[Ingredient],
    existing_items: Sequence[ShoppingItem],
    serving_multiplier: float = 1.0,
    user_id: str | None = None,
) -> MergeResult:
    """
    Merge recipe ingredients into a shopping list's items.

    Each ingredient is combined into the first similar item, scanning the
    list as it stands at that moment (including items appended earlier in
    the same pass). Unmatched ingredients are appended. Ingredients with a
    blank name are skipped and not counted.

    The input sequence and its items are left untouched; the returned
    `updated_items` holds existing items in their existing order followed
    by new ones.
    """
    items: list[ShoppingItem] = list(existing_items)
    added_count = 0
    combined_count = 0

    for ingredient in recipe_ingredients:
        if not ingredient.name.strip():
            continue

        adjusted_amount = scale_amount(ingredient.amount, serving_multiplier)

        index = _find_similar(items, ingredient.name)
        if index is not None:
            existing = items[index]
            combined = combine_quantities(
                existing.amount,
                existing.unit,
                adjusted_amount,
                ingredient.unit,
            )
            items[index] = replace(
                existing,
                amount=combined.amount,
                unit=combined.unit,
                completed=False,
                extra=dict(existing.extra),
            )
            combined_count += 1
            logger.debug(
                f"Combined '{ingredient.name}' into '{existing.name}': "
                f"{combined.amount} {combined.unit}".rstrip()
            )
        else:
            items.append(
                ShoppingItem(
                    name=ingredient.name,
                    amount=adjusted_amount,
                    unit=ingredient.unit,
                    completed=False,
                    added_by=user_id,
                )
            )
            added_count += 1

    return MergeResult(
        added_count=added_count,
        combined_count=combined_count,
        updated_items=items,
    )

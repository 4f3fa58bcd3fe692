"""Shopping lists: recipe merging, persistence and access rules."""

from cookshare.shopping.merge import (
    Ingredient,
    MergeResult,
    ShoppingItem,
    merge_recipe_into_list,
    scale_amount,
    serving_multiplier,
)
from cookshare.shopping.service import AddRecipeOutcome, ShoppingListService

__all__ = [
    "AddRecipeOutcome",
    "Ingredient",
    "MergeResult",
    "ShoppingItem",
    "ShoppingListService",
    "merge_recipe_into_list",
    "scale_amount",
    "serving_multiplier",
]

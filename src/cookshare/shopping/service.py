"""Shopping-list operations: access rules and the read-modify-write of items."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from cookshare.config import settings
from cookshare.logging_config import LoggingContext, get_logger
from cookshare.models import Recipe, ShoppingList, User
from cookshare.shopping.exceptions import (
    AccessDeniedError,
    RecipeNotFoundError,
    ShoppingListNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from cookshare.shopping.merge import (
    Ingredient,
    MergeResult,
    ShoppingItem,
    merge_recipe_into_list,
    serving_multiplier,
)
from cookshare.shopping.repository import ShoppingListRepository

logger = get_logger(__name__)


@dataclass
class AddRecipeOutcome:
    """Summary returned after adding a recipe to a list."""

    list_id: str
    recipe_name: str
    added_count: int
    combined_count: int

    @property
    def message(self) -> str:
        total = self.added_count + self.combined_count
        return f'Processed {total} ingredients from "{self.recipe_name}"'


class ShoppingListService:
    """
    Shopping-list use cases on top of a repository.

    Visibility follows the household model: a user in a family sees the
    family's lists, anyone else sees their own personal lists. Adding
    recipes, reordering and inviting go by membership instead (owner or
    invited user).
    """

    def __init__(self, repository: ShoppingListRepository):
        self.repository = repository

    # =========================================================================
    # Lists
    # =========================================================================

    async def list_lists(self, user: User) -> list[ShoppingList]:
        """Lists visible to the user, newest first."""
        if user.family_id:
            return await self.repository.find_family_lists(user.family_id)
        return await self.repository.find_member_lists(user.id, personal_only=True)

    async def create_list(self, user: User, name: str) -> ShoppingList:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name is required")

        shopping_list = await self.repository.add_list(
            ShoppingList(
                name=name,
                items=[],
                recipe_log=[],
                created_by=user.id,
                family_id=user.family_id,
            )
        )
        await self.repository.commit()
        logger.info(f"Created shopping list {shopping_list.id} '{name}'")
        return shopping_list

    async def get_list(self, user: User, list_id: str) -> ShoppingList:
        """Get a list the user can see."""
        shopping_list = await self.repository.get_list(list_id)
        if shopping_list is None or not self._is_visible(user, shopping_list):
            raise ShoppingListNotFoundError(f"Shopping list {list_id} not found")
        return shopping_list

    async def update_list(
        self,
        user: User,
        list_id: str,
        name: str | None = None,
        items: list[dict[str, Any]] | None = None,
    ) -> ShoppingList:
        """Rename a list and/or replace its item array."""
        shopping_list = await self.get_list(user, list_id)

        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Name is required")
            shopping_list.name = name

        if items is not None:
            shopping_list.items = [ShoppingItem.from_dict(item).to_dict() for item in items]

        await self.repository.commit()
        return shopping_list

    async def delete_list(self, user: User, list_id: str) -> None:
        shopping_list = await self.get_list(user, list_id)
        await self.repository.delete_list(shopping_list)
        await self.repository.commit()
        logger.info(f"Deleted shopping list {list_id}")

    # =========================================================================
    # Recipes
    # =========================================================================

    async def add_recipe(
        self,
        user: User,
        recipe_id: str,
        servings: float | None = None,
    ) -> AddRecipeOutcome:
        """
        Add one of the user's own recipes to their default list.

        The default list is the first list the user owns or is invited to;
        one is created when there is none.
        """
        recipe = await self.repository.get_recipe(recipe_id, owner_id=user.id)
        if recipe is None:
            raise RecipeNotFoundError(f"Recipe {recipe_id} not found")

        shopping_list = await self.repository.find_default_list(user.id)
        if shopping_list is None:
            shopping_list = await self.repository.add_list(
                ShoppingList(
                    name=settings.default_list_name,
                    items=[],
                    recipe_log=[],
                    created_by=user.id,
                )
            )
            logger.info(f"Created default shopping list {shopping_list.id}")

        return await self._merge_recipe(user, shopping_list, recipe, servings)

    async def add_recipe_to_list(
        self,
        user: User,
        list_id: str,
        recipe_id: str,
        servings: float | None = None,
    ) -> AddRecipeOutcome:
        """Add any recipe to a specific list the user is a member of."""
        shopping_list = await self._get_member_list(user, list_id)

        recipe = await self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(f"Recipe {recipe_id} not found")

        return await self._merge_recipe(user, shopping_list, recipe, servings)

    async def _merge_recipe(
        self,
        user: User,
        shopping_list: ShoppingList,
        recipe: Recipe,
        servings: float | None,
    ) -> AddRecipeOutcome:
        with LoggingContext(list_id=shopping_list.id):
            result: MergeResult = merge_recipe_into_list(
                [Ingredient.from_dict(ing) for ing in recipe.ingredients or []],
                [ShoppingItem.from_dict(item) for item in shopping_list.items or []],
                serving_multiplier=serving_multiplier(servings, recipe.servings),
                user_id=user.id,
            )

            # Reassign so the JSON columns are flagged dirty and written in full
            shopping_list.items = [item.to_dict() for item in result.updated_items]
            shopping_list.recipe_log = [
                *(shopping_list.recipe_log or []),
                {
                    "recipe_id": recipe.id,
                    "recipe_title": recipe.title,
                    "servings": servings,
                    "added_by": user.id,
                    "added_at": datetime.now(UTC).isoformat(),
                },
            ]
            await self.repository.commit()

            logger.info(
                f"Added recipe '{recipe.title}': {result.added_count} added, "
                f"{result.combined_count} combined"
            )

        return AddRecipeOutcome(
            list_id=shopping_list.id,
            recipe_name=recipe.title,
            added_count=result.added_count,
            combined_count=result.combined_count,
        )

    # =========================================================================
    # Items and Members
    # =========================================================================

    async def reorder_items(
        self,
        user: User,
        list_id: str,
        items: list[dict[str, Any]],
    ) -> ShoppingList:
        """Replace the item array with `items`, numbering `order` by position."""
        shopping_list = await self._get_member_list(user, list_id)

        reordered = []
        for index, data in enumerate(items):
            item = ShoppingItem.from_dict(data)
            item.order = index
            reordered.append(item.to_dict())

        shopping_list.items = reordered
        await self.repository.commit()
        return shopping_list

    async def invite_user(self, user: User, list_id: str, email: str) -> User:
        shopping_list = await self._get_owned_list(user, list_id, "invite users")

        email = (email or "").strip().lower()
        if not email:
            raise ValidationError("Email is required")

        invitee = await self.repository.get_user_by_email(email)
        if invitee is None:
            raise UserNotFoundError("User with this email not found")
        if invitee.id in shopping_list.invited_users:
            raise ValidationError("User is already invited to this list")
        if invitee.id == shopping_list.created_by:
            raise ValidationError("Cannot invite the list owner")

        await self.repository.add_invite(shopping_list, invitee.id)
        await self.repository.commit()
        logger.info(f"Invited user {invitee.id} to list {list_id}")
        return invitee

    async def remove_invited_user(self, user: User, list_id: str, user_id: str) -> None:
        shopping_list = await self._get_owned_list(user, list_id, "remove users")

        if await self.repository.remove_invite(shopping_list, user_id):
            await self.repository.commit()
            logger.info(f"Removed user {user_id} from list {list_id}")

    # =========================================================================
    # Access helpers
    # =========================================================================

    @staticmethod
    def _is_visible(user: User, shopping_list: ShoppingList) -> bool:
        if user.family_id:
            return shopping_list.family_id == user.family_id
        return shopping_list.created_by == user.id and shopping_list.family_id is None

    async def _get_member_list(self, user: User, list_id: str) -> ShoppingList:
        shopping_list = await self.repository.get_list(list_id)
        if shopping_list is None:
            raise ShoppingListNotFoundError(f"Shopping list {list_id} not found")
        if not shopping_list.is_member(user.id):
            raise AccessDeniedError("Access denied")
        return shopping_list

    async def _get_owned_list(self, user: User, list_id: str, action: str) -> ShoppingList:
        shopping_list = await self.repository.get_list(list_id)
        if shopping_list is None:
            raise ShoppingListNotFoundError(f"Shopping list {list_id} not found")
        if shopping_list.created_by != user.id:
            raise AccessDeniedError(f"Only the list owner can {action}")
        return shopping_list

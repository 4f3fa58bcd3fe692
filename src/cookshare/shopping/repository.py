"""Repository for shopping-list persistence."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from cookshare.models import Recipe, ShoppingList, ShoppingListInvite, User


class ShoppingListRepository:
    """Data access for users, recipes and shopping lists over one session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # =========================================================================
    # Users
    # =========================================================================

    async def get_user(self, user_id: str) -> User | None:
        return await self.session.get(User, user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    # =========================================================================
    # Recipes
    # =========================================================================

    async def get_recipe(self, recipe_id: str, owner_id: str | None = None) -> Recipe | None:
        """Get a recipe, optionally only if `owner_id` created it."""
        query = select(Recipe).where(Recipe.id == recipe_id)
        if owner_id is not None:
            query = query.where(Recipe.created_by == owner_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    # =========================================================================
    # Shopping Lists
    # =========================================================================

    async def get_list(self, list_id: str) -> ShoppingList | None:
        return await self.session.get(ShoppingList, list_id)

    async def find_family_lists(self, family_id: str) -> list[ShoppingList]:
        result = await self.session.execute(
            select(ShoppingList)
            .where(ShoppingList.family_id == family_id)
            .order_by(ShoppingList.created_at.desc())
        )
        return list(result.scalars().all())

    async def find_member_lists(self, user_id: str, personal_only: bool = False) -> list[ShoppingList]:
        """Lists the user owns or is invited to, newest first."""
        query = select(ShoppingList).where(
            or_(
                ShoppingList.created_by == user_id,
                ShoppingList.invites.any(ShoppingListInvite.user_id == user_id),
            )
        )
        if personal_only:
            query = query.where(ShoppingList.family_id.is_(None))
        result = await self.session.execute(query.order_by(ShoppingList.created_at.desc()))
        return list(result.scalars().all())

    async def find_default_list(self, user_id: str) -> ShoppingList | None:
        """The oldest list the user owns or is invited to."""
        result = await self.session.execute(
            select(ShoppingList)
            .where(
                or_(
                    ShoppingList.created_by == user_id,
                    ShoppingList.invites.any(ShoppingListInvite.user_id == user_id),
                )
            )
            .order_by(ShoppingList.created_at.asc(), ShoppingList.id.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def add_list(self, shopping_list: ShoppingList) -> ShoppingList:
        self.session.add(shopping_list)
        await self.session.flush()
        await self.session.refresh(shopping_list, attribute_names=["invites"])
        return shopping_list

    async def delete_list(self, shopping_list: ShoppingList) -> None:
        await self.session.delete(shopping_list)

    async def add_invite(self, shopping_list: ShoppingList, user_id: str) -> None:
        shopping_list.invites.append(ShoppingListInvite(user_id=user_id))

    async def remove_invite(self, shopping_list: ShoppingList, user_id: str) -> bool:
        for invite in list(shopping_list.invites):
            if invite.user_id == user_id:
                shopping_list.invites.remove(invite)
                return True
        return False

    async def commit(self) -> None:
        await self.session.commit()

"""Request and response schemas for the shopping-list API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case fields in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShoppingItemSchema(CamelModel):
    """Single item on a shopping list."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    name: str
    amount: str = ""
    unit: str = ""
    completed: bool = False
    added_by: str | None = None
    order: int | None = None


class RecipeLogEntry(CamelModel):
    """A recipe that was added to the list."""

    recipe_id: str
    recipe_title: str
    servings: float | None = None
    added_by: str
    added_at: str


class ShoppingListResponse(CamelModel):
    """Shopping list with its items."""

    id: str
    name: str
    items: list[ShoppingItemSchema]
    created_by: str
    family_id: str | None = None
    invited_users: list[str] = Field(default_factory=list)
    recipe_log: list[RecipeLogEntry] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, shopping_list: Any) -> "ShoppingListResponse":
        return cls(
            id=shopping_list.id,
            name=shopping_list.name,
            items=[ShoppingItemSchema.model_validate(item) for item in shopping_list.items or []],
            created_by=shopping_list.created_by,
            family_id=shopping_list.family_id,
            invited_users=shopping_list.invited_users,
            recipe_log=[RecipeLogEntry.model_validate(e) for e in shopping_list.recipe_log or []],
            created_at=shopping_list.created_at,
            updated_at=shopping_list.updated_at,
        )


class ShoppingListCreateRequest(CamelModel):
    name: str


class ShoppingListUpdateRequest(CamelModel):
    """Partial update; omitted fields are left alone."""

    name: str | None = None
    items: list[ShoppingItemSchema] | None = None


class ReorderRequest(CamelModel):
    items: list[ShoppingItemSchema]


class AddRecipeRequest(CamelModel):
    """Add a recipe's ingredients to a shopping list."""

    recipe_id: str = Field(min_length=1)
    servings: float | None = Field(None, description="Servings to shop for; recipe default if omitted")


class AddRecipeResponse(CamelModel):
    message: str
    added_count: int
    combined_count: int
    recipe_name: str


class InviteRequest(CamelModel):
    email: str = Field(min_length=1)


class RemoveInviteRequest(CamelModel):
    user_id: str = Field(min_length=1)


class MessageResponse(BaseModel):
    message: str

"""API routes for shopping lists."""

from collections.abc import Awaitable
from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from cookshare.auth import get_current_user
from cookshare.database import get_db
from cookshare.logging_config import get_logger
from cookshare.models import User
from cookshare.schemas import (
    AddRecipeRequest,
    AddRecipeResponse,
    InviteRequest,
    MessageResponse,
    RemoveInviteRequest,
    ReorderRequest,
    ShoppingListCreateRequest,
    ShoppingListResponse,
    ShoppingListUpdateRequest,
)
from cookshare.shopping.exceptions import (
    AccessDeniedError,
    CookShareError,
    RecipeNotFoundError,
    ShoppingListNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from cookshare.shopping.repository import ShoppingListRepository
from cookshare.shopping.service import AddRecipeOutcome, ShoppingListService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/shopping-lists", tags=["shopping-lists"])

T = TypeVar("T")

ERROR_STATUS: dict[type[CookShareError], int] = {
    ShoppingListNotFoundError: status.HTTP_404_NOT_FOUND,
    RecipeNotFoundError: status.HTTP_404_NOT_FOUND,
    UserNotFoundError: status.HTTP_404_NOT_FOUND,
    AccessDeniedError: status.HTTP_403_FORBIDDEN,
    ValidationError: status.HTTP_400_BAD_REQUEST,
}


async def get_shopping_service(db: AsyncSession = Depends(get_db)) -> ShoppingListService:
    """Build the service on the request's database session."""
    return ShoppingListService(ShoppingListRepository(db))


async def _run(operation: Awaitable[T], failure: str) -> T:
    """Await a service call, translating domain errors into HTTP errors."""
    try:
        return await operation
    except CookShareError as e:
        raise HTTPException(
            status_code=ERROR_STATUS.get(type(e), status.HTTP_400_BAD_REQUEST),
            detail=str(e),
        ) from e
    except Exception as e:
        logger.error(f"{failure}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=failure,
        ) from e


def _add_recipe_response(outcome: AddRecipeOutcome) -> AddRecipeResponse:
    return AddRecipeResponse(
        message=outcome.message,
        added_count=outcome.added_count,
        combined_count=outcome.combined_count,
        recipe_name=outcome.recipe_name,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/", response_model=list[ShoppingListResponse])
async def list_shopping_lists(
    user: User = Depends(get_current_user),
    service: ShoppingListService = Depends(get_shopping_service),
) -> list[ShoppingListResponse]:
    """List the shopping lists visible to the current user."""
    lists = await _run(service.list_lists(user), "Failed to list shopping lists")
    return [ShoppingListResponse.from_model(lst) for lst in lists]


@router.post("/", response_model=ShoppingListResponse, status_code=status.HTTP_201_CREATED)
async def create_shopping_list(
    request: ShoppingListCreateRequest,
    user: User = Depends(get_current_user),
    service: ShoppingListService = Depends(get_shopping_service),
) -> ShoppingListResponse:
    shopping_list = await _run(
        service.create_list(user, request.name), "Failed to create shopping list"
    )
    return ShoppingListResponse.from_model(shopping_list)


@router.post("/add-recipe", response_model=AddRecipeResponse)
async def add_recipe_to_default_list(
    request: AddRecipeRequest,
    user: User = Depends(get_current_user),
    service: ShoppingListService = Depends(get_shopping_service),
) -> AddRecipeResponse:
    """
    Add one of your recipes to your shopping list.

    Ingredients already on the list are combined with the new amounts;
    the rest are appended. The list is created if you have none.
    """
    logger.info(f"Adding recipe {request.recipe_id} to default list, servings={request.servings}")
    outcome = await _run(
        service.add_recipe(user, request.recipe_id, request.servings),
        "Failed to add recipe to shopping list",
    )
    return _add_recipe_response(outcome)


@router.get("/{list_id}", response_model=ShoppingListResponse)
async def get_shopping_list(
    list_id: str,
    user: User = Depends(get_current_user),
    service: ShoppingListService = Depends(get_shopping_service),
) -> ShoppingListResponse:
    shopping_list = await _run(service.get_list(user, list_id), "Failed to fetch shopping list")
    return ShoppingListResponse.from_model(shopping_list)


@router.put("/{list_id}", response_model=ShoppingListResponse)
async def update_shopping_list(
    list_id: str,
    request: ShoppingListUpdateRequest,
    user: User = Depends(get_current_user),
    service: ShoppingListService = Depends(get_shopping_service),
) -> ShoppingListResponse:
    """Rename a list or replace its items (e.g. after ticking items off)."""
    items = None
    if request.items is not None:
        items = [item.model_dump() for item in request.items]

    shopping_list = await _run(
        service.update_list(user, list_id, name=request.name, items=items),
        "Failed to update shopping list",
    )
    return ShoppingListResponse.from_model(shopping_list)


@router.delete("/{list_id}", response_model=MessageResponse)
async def delete_shopping_list(
    list_id: str,
    user: User = Depends(get_current_user),
    service: ShoppingListService = Depends(get_shopping_service),
) -> MessageResponse:
    await _run(service.delete_list(user, list_id), "Failed to delete shopping list")
    return MessageResponse(message="Shopping list deleted successfully")


@router.post("/{list_id}/add-recipe", response_model=AddRecipeResponse)
async def add_recipe_to_list(
    list_id: str,
    request: AddRecipeRequest,
    user: User = Depends(get_current_user),
    service: ShoppingListService = Depends(get_shopping_service),
) -> AddRecipeResponse:
    """Add a recipe to a specific list you own or were invited to."""
    logger.info(f"Adding recipe {request.recipe_id} to list {list_id}")
    outcome = await _run(
        service.add_recipe_to_list(user, list_id, request.recipe_id, request.servings),
        "Failed to add recipe to shopping list",
    )
    return _add_recipe_response(outcome)


@router.put("/{list_id}/reorder", response_model=ShoppingListResponse)
async def reorder_items(
    list_id: str,
    request: ReorderRequest,
    user: User = Depends(get_current_user),
    service: ShoppingListService = Depends(get_shopping_service),
) -> ShoppingListResponse:
    shopping_list = await _run(
        service.reorder_items(user, list_id, [item.model_dump() for item in request.items]),
        "Failed to reorder shopping list items",
    )
    return ShoppingListResponse.from_model(shopping_list)


@router.post("/{list_id}/invite", response_model=MessageResponse)
async def invite_user(
    list_id: str,
    request: InviteRequest,
    user: User = Depends(get_current_user),
    service: ShoppingListService = Depends(get_shopping_service),
) -> MessageResponse:
    await _run(service.invite_user(user, list_id, request.email), "Failed to invite user")
    return MessageResponse(message="User invited successfully")


@router.delete("/{list_id}/invite", response_model=MessageResponse)
async def remove_invited_user(
    list_id: str,
    request: RemoveInviteRequest,
    user: User = Depends(get_current_user),
    service: ShoppingListService = Depends(get_shopping_service),
) -> MessageResponse:
    await _run(
        service.remove_invited_user(user, list_id, request.user_id), "Failed to remove user"
    )
    return MessageResponse(message="User removed successfully")

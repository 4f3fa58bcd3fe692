"""API routers for the cookshare service."""

from cookshare.routers.shopping_lists import router as shopping_lists_router

__all__ = [
    "shopping_lists_router",
]

"""Errors raised by the shopping-list service."""


class CookShareError(Exception):
    """Base class for service-layer errors."""


class ShoppingListNotFoundError(CookShareError):
    """The list does not exist or is not visible to the caller."""


class RecipeNotFoundError(CookShareError):
    """The recipe does not exist or is not available to the caller."""


class UserNotFoundError(CookShareError):
    """No user matches the given id or email."""


class AccessDeniedError(CookShareError):
    """The caller may see the list but not perform this operation."""


class ValidationError(CookShareError):
    """The request is well-formed but not acceptable."""

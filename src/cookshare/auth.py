"""Current-user dependency.

Sign-in happens in front of this service; the authenticated user's id is
forwarded in the ``X-User-Id`` header.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from cookshare.database import get_db
from cookshare.logging_config import set_context
from cookshare.models import User
from cookshare.shopping.repository import ShoppingListRepository


async def get_current_user(
    x_user_id: Annotated[str | None, Header()] = None,
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the calling user or reject the request with 401."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    user = await ShoppingListRepository(db).get_user(x_user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    set_context(user_id=user.id)
    return user

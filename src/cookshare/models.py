"""SQLAlchemy database models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cookshare.database import Base


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def _new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    """User account. Authentication happens upstream."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    family_id: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    recipes: Mapped[list["Recipe"]] = relationship("Recipe", back_populates="owner")


class Recipe(Base):
    """Recipe with its ingredient lines."""

    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    servings: Mapped[int] = mapped_column(Integer, default=1)
    ingredients: Mapped[list] = mapped_column(JSON, default=list)  # [{name, amount, unit}]
    tags: Mapped[list] = mapped_column(JSON, default=list)
    created_by: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False)
    family_id: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    owner: Mapped["User"] = relationship("User", back_populates="recipes")

    __table_args__ = (Index("idx_recipes_created_by", "created_by"),)


class ShoppingList(Base):
    """Shared shopping list. Items are stored and rewritten as one JSON array."""

    __tablename__ = "shopping_lists"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String, nullable=False, default="My Shopping List")
    items: Mapped[list] = mapped_column(JSON, default=list)
    recipe_log: Mapped[list] = mapped_column(JSON, default=list)
    created_by: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False)
    family_id: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    invites: Mapped[list["ShoppingListInvite"]] = relationship(
        "ShoppingListInvite",
        back_populates="shopping_list",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_shopping_lists_created_by", "created_by"),
        Index("idx_shopping_lists_family_id", "family_id"),
    )

    @property
    def invited_users(self) -> list[str]:
        return [invite.user_id for invite in self.invites]

    def is_member(self, user_id: str) -> bool:
        """Owner or invited user."""
        return self.created_by == user_id or user_id in self.invited_users


class ShoppingListInvite(Base):
    """A user invited to collaborate on a shopping list."""

    __tablename__ = "shopping_list_invites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    list_id: Mapped[str] = mapped_column(
        String, ForeignKey("shopping_lists.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    shopping_list: Mapped["ShoppingList"] = relationship("ShoppingList", back_populates="invites")

    __table_args__ = (Index("idx_shopping_list_invites_user_id", "user_id"),)

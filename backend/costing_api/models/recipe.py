"""
Recipe and recipe line tables.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from costing_api.models.base import AuditMixin, Base


class RecipeRecord(AuditMixin, Base):
    """Recipe row."""

    __tablename__ = "recipe"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class RecipeLineRecord(Base):
    """
    Recipe line row.

    ingredient_id has no foreign key; a line may outlive the ingredient it
    points to.
    """

    __tablename__ = "recipe_line"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    recipe_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("recipe.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ingredient_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    quantity: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_recipe_line_quantity_positive"),
    )

"""
Ingredient and price ledger tables.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from costing_api.models.base import AuditMixin, Base


class IngredientRecord(AuditMixin, Base):
    """
    Ingredient row.

    Name is unique among rows that are not soft-deleted.
    """

    __tablename__ = "ingredient"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    supplier: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        Index(
            "uq_ingredient_name_active",
            "name",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )


class PriceEntryRecord(Base):
    """
    Price ledger row. Insert-only.

    sequence is the position of the entry in its ingredient's ledger and
    breaks ties between entries with the same effective_at.
    """

    __tablename__ = "price_entry"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    ingredient_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("ingredient.id"), nullable=False, index=True
    )
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    effective_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("price > 0", name="chk_price_entry_price_positive"),
        UniqueConstraint("ingredient_id", "sequence", name="uq_price_entry_ingredient_sequence"),
        Index("ix_price_entry_latest", "ingredient_id", "effective_at", "sequence"),
    )

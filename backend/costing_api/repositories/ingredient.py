"""
SQLAlchemy ingredient store.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from shared.utils.clock import ensure_utc
from shared.utils.exceptions import DuplicateEntityError

from costing_api.domain import Ingredient, PriceEntry
from costing_api.models import IngredientRecord, PriceEntryRecord
from costing_api.repositories.base import AggregateRepository


class IngredientRepository(AggregateRepository[Ingredient, IngredientRecord]):
    """
    Ingredient aggregates with their price ledger.

    Ledger rows are insert-only: a save adds the entries the store has not
    seen yet and never touches existing ones.
    """

    entity_name = "Ingrediente"

    @property
    def model(self) -> type[IngredientRecord]:
        return IngredientRecord

    def _root_values(self, aggregate: Ingredient) -> dict[str, Any]:
        return {"name": aggregate.name, "supplier": aggregate.supplier}

    def _save_children(self, aggregate: Ingredient) -> None:
        stored_ids = set(
            self._db.scalars(
                select(PriceEntryRecord.id).where(PriceEntryRecord.ingredient_id == aggregate.id)
            ).all()
        )
        new_rows = [
            PriceEntryRecord(
                id=entry.id,
                ingredient_id=aggregate.id,
                price=entry.price,
                effective_at=entry.effective_at,
                sequence=sequence,
            )
            for sequence, entry in enumerate(aggregate.price_entries)
            if entry.id not in stored_ids
        ]
        if new_rows:
            self._db.add_all(new_rows)
            self._db.flush()

    def _duplicate_error(self, aggregate: Ingredient, error: IntegrityError) -> Exception:
        return DuplicateEntityError(self.entity_name, aggregate.name)

    def _to_domain(self, records: Sequence[IngredientRecord]) -> list[Ingredient]:
        if not records:
            return []
        entries_by_ingredient: dict[str, list[PriceEntry]] = defaultdict(list)
        rows = self._db.scalars(
            select(PriceEntryRecord)
            .where(PriceEntryRecord.ingredient_id.in_([r.id for r in records]))
            .order_by(PriceEntryRecord.ingredient_id, PriceEntryRecord.sequence)
        ).all()
        for row in rows:
            entries_by_ingredient[row.ingredient_id].append(
                PriceEntry(
                    id=row.id,
                    ingredient_id=row.ingredient_id,
                    price=Decimal(row.price),
                    effective_at=ensure_utc(row.effective_at),
                )
            )

        return [
            Ingredient(
                name=record.name,
                supplier=record.supplier,
                price_entries=entries_by_ingredient.get(record.id, []),
                **self._audit_fields(record),
            )
            for record in records
        ]

    # =========================================================================
    # Ingredient-specific queries
    # =========================================================================

    def find_by_name(self, name: str) -> Ingredient | None:
        """Find the active ingredient with exactly this (trimmed) name."""
        with self._store_errors("find_by_name"):
            record = self._db.scalar(
                self._base_query().where(IngredientRecord.name == name.strip())
            )
            if record is None:
                return None
            return self._to_domain([record])[0]

    def latest_price(self, ingredient_id: str) -> Decimal | None:
        """
        Latest price read straight from the ledger.

        Greatest effective_at wins; on equal instants the later ledger entry
        wins. Soft-deleted ingredients have no latest price.
        """
        with self._store_errors("latest_price", ingredient_id):
            price = self._db.scalar(
                select(PriceEntryRecord.price)
                .join(IngredientRecord, IngredientRecord.id == PriceEntryRecord.ingredient_id)
                .where(
                    PriceEntryRecord.ingredient_id == ingredient_id,
                    IngredientRecord.deleted_at.is_(None),
                )
                .order_by(PriceEntryRecord.effective_at.desc(), PriceEntryRecord.sequence.desc())
                .limit(1)
            )
        return Decimal(price) if price is not None else None

"""
SQLAlchemy recipe store.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Any, Sequence

from sqlalchemy import delete, select, update

from costing_api.domain import Recipe, RecipeLine
from costing_api.models import RecipeLineRecord, RecipeRecord
from costing_api.repositories.base import AggregateRepository


class RecipeRepository(AggregateRepository[Recipe, RecipeRecord]):
    """
    Recipe aggregates with their lines.

    A save makes the stored lines match the aggregate's lines exactly,
    including their order.
    """

    entity_name = "Receta"

    @property
    def model(self) -> type[RecipeRecord]:
        return RecipeRecord

    def _root_values(self, aggregate: Recipe) -> dict[str, Any]:
        return {"name": aggregate.name, "description": aggregate.description}

    def _save_children(self, aggregate: Recipe) -> None:
        stored = {
            line_id: position
            for line_id, position in self._db.execute(
                select(RecipeLineRecord.id, RecipeLineRecord.position).where(
                    RecipeLineRecord.recipe_id == aggregate.id
                )
            ).all()
        }
        current_ids = {line.id for line in aggregate.lines}

        removed = [line_id for line_id in stored if line_id not in current_ids]
        if removed:
            self._db.execute(
                delete(RecipeLineRecord)
                .where(RecipeLineRecord.id.in_(removed))
                .execution_options(synchronize_session=False)
            )

        for position, line in enumerate(aggregate.lines):
            if line.id not in stored:
                self._db.add(
                    RecipeLineRecord(
                        id=line.id,
                        recipe_id=aggregate.id,
                        ingredient_id=line.ingredient_id,
                        quantity=line.quantity,
                        position=position,
                    )
                )
            elif stored[line.id] != position:
                self._db.execute(
                    update(RecipeLineRecord)
                    .where(RecipeLineRecord.id == line.id)
                    .values(position=position)
                    .execution_options(synchronize_session=False)
                )
        self._db.flush()

    def _to_domain(self, records: Sequence[RecipeRecord]) -> list[Recipe]:
        if not records:
            return []
        lines_by_recipe: dict[str, list[RecipeLine]] = defaultdict(list)
        rows = self._db.scalars(
            select(RecipeLineRecord)
            .where(RecipeLineRecord.recipe_id.in_([r.id for r in records]))
            .order_by(RecipeLineRecord.recipe_id, RecipeLineRecord.position)
        ).all()
        for row in rows:
            lines_by_recipe[row.recipe_id].append(
                RecipeLine(
                    id=row.id,
                    recipe_id=row.recipe_id,
                    ingredient_id=row.ingredient_id,
                    quantity=Decimal(row.quantity),
                )
            )

        return [
            Recipe(
                name=record.name,
                description=record.description,
                lines=lines_by_recipe.get(record.id, []),
                **self._audit_fields(record),
            )
            for record in records
        ]

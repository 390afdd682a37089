"""
Store contracts consumed by the services.

The SQLAlchemy repositories implement these; tests may substitute doubles.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol, Sequence

from costing_api.domain import Ingredient, Recipe


class LatestPriceSource(Protocol):
    """Direct store read of an ingredient's latest price, bypassing any cache."""

    def latest_price(self, ingredient_id: str) -> Decimal | None:
        ...


class IngredientStore(LatestPriceSource, Protocol):
    def save(self, ingredient: Ingredient) -> Ingredient:
        """Persist the aggregate. Raises VersionConflictError on a stale version."""
        ...

    def find_by_id(self, ingredient_id: str, include_deleted: bool = False) -> Ingredient | None:
        ...

    def find_by_ids(self, ingredient_ids: Sequence[str]) -> list[Ingredient]:
        ...

    def find_by_name(self, name: str) -> Ingredient | None:
        ...

    def find_page(self, limit: int, offset: int) -> tuple[list[Ingredient], int]:
        ...

    def soft_delete(self, ingredient_id: str) -> bool:
        ...

    def restore(self, ingredient_id: str) -> bool:
        ...


class RecipeStore(Protocol):
    def save(self, recipe: Recipe) -> Recipe:
        """Persist the aggregate. Raises VersionConflictError on a stale version."""
        ...

    def find_by_id(self, recipe_id: str, include_deleted: bool = False) -> Recipe | None:
        ...

    def find_page(self, limit: int, offset: int) -> tuple[list[Recipe], int]:
        ...

    def soft_delete(self, recipe_id: str) -> bool:
        ...

    def restore(self, recipe_id: str) -> bool:
        ...

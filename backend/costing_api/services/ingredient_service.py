"""
Ingredient Service.

Handles ingredient creation, the price ledger and the ingredient lifecycle.

Usage:
    from costing_api.services import IngredientService

    service = IngredientService(IngredientRepository(db))
    ingredient = service.create_ingredient("Harina", "Molino Sur", [(1.50, None)], user_id)
    service.add_price(ingredient.id, "1.80", user_id)
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable

from shared.config.logging import get_logger
from shared.utils.exceptions import DuplicateEntityError, NotFoundError

from costing_api.domain import Ingredient, PriceEntry
from costing_api.repositories.contracts import IngredientStore

logger = get_logger(__name__)


class IngredientService:
    """
    Service for ingredient management.

    Business rules:
    - Names are unique among active ingredients
    - Prices are appended, never edited
    - Delete is soft; restore brings the ingredient back unchanged
    """

    entity_name = "Ingrediente"

    def __init__(self, ingredients: IngredientStore):
        self._ingredients = ingredients

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_ingredient(self, ingredient_id: str) -> Ingredient:
        """Get an active ingredient or raise NotFoundError."""
        ingredient = self._ingredients.find_by_id(ingredient_id)
        if ingredient is None:
            raise NotFoundError(self.entity_name, ingredient_id)
        return ingredient

    def list_ingredients(self, limit: int, offset: int) -> tuple[list[Ingredient], int]:
        """Active ingredients, newest first, with the total count."""
        return self._ingredients.find_page(limit, offset)

    def get_latest_price(self, ingredient_id: str) -> Decimal | None:
        """
        Exact latest price read from the store.

        Returns None for an ingredient that has no prices yet.
        """
        self.get_ingredient(ingredient_id)
        return self._ingredients.latest_price(ingredient_id)

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create_ingredient(
        self,
        name: str,
        supplier: str,
        prices: Iterable[tuple[Any, datetime | None]] = (),
        *,
        user_id: str,
    ) -> Ingredient:
        """
        Create an ingredient, optionally seeded with prices.

        Raises:
            InvalidArgumentError: Invalid name, supplier or seed price
            DuplicateEntityError: An active ingredient already has this name
        """
        ingredient = Ingredient.create(name, supplier, prices)
        if self._ingredients.find_by_name(ingredient.name) is not None:
            raise DuplicateEntityError(self.entity_name, ingredient.name)

        ingredient.set_created_by(user_id)
        self._ingredients.save(ingredient)

        logger.info(
            "Ingredient created",
            ingredient_id=ingredient.id,
            name=ingredient.name,
            prices=len(ingredient.price_entries),
            user_id=user_id,
        )
        return ingredient

    def add_price(
        self,
        ingredient_id: str,
        price: Any,
        *,
        user_id: str,
        effective_at: datetime | None = None,
    ) -> PriceEntry:
        """
        Append a price to an ingredient's ledger.

        Cached latest prices are not evicted; they catch up within the TTL.

        Raises:
            InvalidArgumentError: Price not greater than zero
            NotFoundError: Ingredient missing or deleted
            VersionConflictError: The ingredient changed since it was loaded
        """
        ingredient = self.get_ingredient(ingredient_id)
        entry = ingredient.add_price(price, effective_at)
        ingredient.set_updated_by(user_id)
        self._ingredients.save(ingredient)

        logger.info(
            "Price added",
            ingredient_id=ingredient_id,
            price=str(entry.price),
            effective_at=entry.effective_at.isoformat(),
            user_id=user_id,
        )
        return entry

    def delete_ingredient(self, ingredient_id: str, *, user_id: str) -> None:
        """Soft delete an active ingredient."""
        if not self._ingredients.soft_delete(ingredient_id):
            raise NotFoundError(self.entity_name, ingredient_id)
        logger.info("Ingredient deleted", ingredient_id=ingredient_id, user_id=user_id)

    def restore_ingredient(self, ingredient_id: str, *, user_id: str) -> Ingredient:
        """
        Restore a soft-deleted ingredient.

        Raises:
            NotFoundError: No deleted ingredient with this id
            DuplicateEntityError: Another active ingredient took the name
        """
        if not self._ingredients.restore(ingredient_id):
            raise NotFoundError(self.entity_name, ingredient_id)
        logger.info("Ingredient restored", ingredient_id=ingredient_id, user_id=user_id)
        return self.get_ingredient(ingredient_id)

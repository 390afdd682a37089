"""
Recipe Service.

Handles recipe creation, edits with optimistic concurrency, costing and the
recipe lifecycle.
"""

from __future__ import annotations

from typing import Any, Iterable

from shared.config.constants import ErrorMessages
from shared.config.logging import get_logger
from shared.utils.exceptions import InvalidArgumentError, NotFoundError, VersionConflictError

from costing_api.domain import CostBreakdown, Recipe, RecipeLine
from costing_api.repositories.contracts import RecipeStore
from costing_api.services.cost_calculator import CostCalculator

logger = get_logger(__name__)


class _Unset:
    """Marker for "argument not given" where None is a meaningful value."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class RecipeService:
    """
    Service for recipe management.

    Business rules:
    - A recipe starts with at least one line
    - Lines may reference ingredients that no longer exist
    - Edits can be guarded with the version the caller last saw
    - Cost is all-or-nothing: a line without a price fails the calculation
    """

    entity_name = "Receta"

    def __init__(self, recipes: RecipeStore, calculator: CostCalculator):
        self._recipes = recipes
        self._calculator = calculator

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_recipe(self, recipe_id: str) -> Recipe:
        recipe = self._recipes.find_by_id(recipe_id)
        if recipe is None:
            raise NotFoundError(self.entity_name, recipe_id)
        return recipe

    def get_recipe_with_cost(
        self, recipe_id: str, bypass_cache: bool = False
    ) -> tuple[Recipe, CostBreakdown]:
        """
        Load a recipe and price it.

        Args:
            recipe_id: Recipe ID
            bypass_cache: Read every price straight from the store

        Raises:
            NotFoundError: Recipe missing or deleted
            PriceNotFoundError: Some ingredient has no price
        """
        recipe = self.get_recipe(recipe_id)
        breakdown = self._calculator.calculate(recipe, use_cache=not bypass_cache)
        return recipe, breakdown

    def list_recipes(self, limit: int, offset: int) -> tuple[list[Recipe], int]:
        return self._recipes.find_page(limit, offset)

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create_recipe(
        self,
        name: str,
        description: str | None,
        lines: Iterable[tuple[str, Any]],
        *,
        user_id: str,
    ) -> Recipe:
        """
        Create a recipe from (ingredient_id, quantity) pairs.

        Raises:
            InvalidArgumentError: Invalid name/description, no lines or a bad line
        """
        recipe = Recipe.create(name, description, lines)
        recipe.set_created_by(user_id)
        self._recipes.save(recipe)

        logger.info(
            "Recipe created",
            recipe_id=recipe.id,
            name=recipe.name,
            lines=len(recipe.lines),
            user_id=user_id,
        )
        return recipe

    def update_recipe(
        self,
        recipe_id: str,
        *,
        name: str | None = None,
        description: Any = UNSET,
        expected_version: int | None = None,
        user_id: str,
    ) -> Recipe:
        """
        Rename and/or re-describe a recipe.

        Passing description=None clears it; leaving it out keeps it.

        Raises:
            InvalidArgumentError: Nothing to update, or invalid values
            VersionConflictError: expected_version is stale
        """
        if name is None and description is UNSET:
            raise InvalidArgumentError(ErrorMessages.NOTHING_TO_UPDATE)

        recipe = self._load_for_update(recipe_id, expected_version)
        if name is not None:
            recipe.rename(name)
        if description is not UNSET:
            recipe.describe(description)
        return self._save(recipe, user_id, "Recipe updated")

    def add_recipe_line(
        self,
        recipe_id: str,
        ingredient_id: str,
        quantity: Any,
        *,
        expected_version: int | None = None,
        user_id: str,
    ) -> tuple[Recipe, RecipeLine]:
        recipe = self._load_for_update(recipe_id, expected_version)
        line = recipe.add_line(ingredient_id, quantity)
        self._save(recipe, user_id, "Recipe line added", line_id=line.id)
        return recipe, line

    def remove_recipe_line(
        self,
        recipe_id: str,
        line_id: str,
        *,
        expected_version: int | None = None,
        user_id: str,
    ) -> Recipe:
        """
        Remove a line. An unknown line id leaves the recipe untouched and
        does not bump its version.
        """
        recipe = self._load_for_update(recipe_id, expected_version)
        if not recipe.remove_line(line_id):
            return recipe
        return self._save(recipe, user_id, "Recipe line removed", line_id=line_id)

    def delete_recipe(self, recipe_id: str, *, user_id: str) -> None:
        if not self._recipes.soft_delete(recipe_id):
            raise NotFoundError(self.entity_name, recipe_id)
        logger.info("Recipe deleted", recipe_id=recipe_id, user_id=user_id)

    def restore_recipe(self, recipe_id: str, *, user_id: str) -> Recipe:
        if not self._recipes.restore(recipe_id):
            raise NotFoundError(self.entity_name, recipe_id)
        logger.info("Recipe restored", recipe_id=recipe_id, user_id=user_id)
        return self.get_recipe(recipe_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _load_for_update(self, recipe_id: str, expected_version: int | None) -> Recipe:
        recipe = self.get_recipe(recipe_id)
        if expected_version is not None and expected_version != recipe.version:
            raise VersionConflictError(
                self.entity_name,
                recipe_id,
                expected=expected_version,
                actual=recipe.version,
            )
        return recipe

    def _save(self, recipe: Recipe, user_id: str, message: str, **log_context: Any) -> Recipe:
        recipe.set_updated_by(user_id)
        self._recipes.save(recipe)
        logger.info(
            message,
            recipe_id=recipe.id,
            version=recipe.version,
            user_id=user_id,
            **log_context,
        )
        return recipe

"""
Cost aggregation: turns a recipe into a per-line breakdown and total.
"""

from __future__ import annotations

from decimal import Decimal

from shared.config.constants import UNKNOWN_INGREDIENT_NAME
from shared.config.logging import get_logger
from shared.utils.exceptions import DependencyFailureError

from costing_api.domain import CostBreakdown, CostLine, Recipe
from costing_api.repositories.contracts import IngredientStore
from costing_api.services.price_resolution import PriceResolver

logger = get_logger(__name__)


class CostCalculator:
    """
    Prices every line of a recipe.

    Business rules:
    - Each distinct ingredient is priced once, even if it appears on
      several lines
    - Any line without a resolvable price fails the whole calculation
    - Names that cannot be looked up fall back to a placeholder
    - Amounts are not rounded; lines keep recipe order
    """

    def __init__(self, ingredients: IngredientStore, resolver: PriceResolver):
        self._ingredients = ingredients
        self._resolver = resolver

    def calculate(self, recipe: Recipe, use_cache: bool = True) -> CostBreakdown:
        """
        Compute the cost breakdown of a recipe.

        Raises:
            PriceNotFoundError: Some line's ingredient has no price
            DependencyFailureError: The price store or cache failed
        """
        ingredient_ids = recipe.ingredient_ids()
        names = self._display_names(ingredient_ids)

        unit_prices: dict[str, Decimal] = {}
        for ingredient_id in ingredient_ids:
            unit_prices[ingredient_id] = self._resolver.resolve(ingredient_id, use_cache=use_cache)

        lines = [
            CostLine(
                line_id=line.id,
                ingredient_id=line.ingredient_id,
                ingredient_name=names.get(line.ingredient_id, UNKNOWN_INGREDIENT_NAME),
                quantity=line.quantity,
                unit_price=unit_prices[line.ingredient_id],
                line_cost=line.quantity * unit_prices[line.ingredient_id],
            )
            for line in recipe.lines
        ]
        breakdown = CostBreakdown.from_lines(recipe.id, lines)

        logger.debug(
            "Recipe cost calculated",
            recipe_id=recipe.id,
            lines=len(lines),
            ingredients=len(ingredient_ids),
            total=str(breakdown.total),
            use_cache=use_cache,
        )
        return breakdown

    def _display_names(self, ingredient_ids: list[str]) -> dict[str, str]:
        try:
            ingredients = self._ingredients.find_by_ids(ingredient_ids)
        except DependencyFailureError as e:
            logger.warning(
                "Ingredient name lookup failed, using placeholders",
                ingredient_ids=ingredient_ids,
                error=str(e),
            )
            return {}
        return {ingredient.id: ingredient.name for ingredient in ingredients}

"""
Services - application layer of the costing API.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (table mapping)

Usage:
    from costing_api.services import RecipeService

    service = RecipeService(recipe_repository, calculator)
    recipe, breakdown = service.get_recipe_with_cost(recipe_id)
"""

from costing_api.services.price_resolution import PriceResolver
from costing_api.services.cost_calculator import CostCalculator
from costing_api.services.ingredient_service import IngredientService
from costing_api.services.recipe_service import RecipeService, UNSET

__all__ = [
    "PriceResolver",
    "CostCalculator",
    "IngredientService",
    "RecipeService",
    "UNSET",
]

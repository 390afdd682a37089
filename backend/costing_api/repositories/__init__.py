"""
Repositories: data access for the ingredient and recipe aggregates.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)
        ↓
    Repository (data access)  ← YOU ARE HERE
        ↓
    Model (table mapping)
"""

from costing_api.repositories.base import AggregateRepository
from costing_api.repositories.contracts import IngredientStore, LatestPriceSource, RecipeStore
from costing_api.repositories.ingredient import IngredientRepository
from costing_api.repositories.recipe import RecipeRepository

__all__ = [
    "AggregateRepository",
    "IngredientStore",
    "LatestPriceSource",
    "RecipeStore",
    "IngredientRepository",
    "RecipeRepository",
]

"""
SQLAlchemy table mappings.

Usage:
    from costing_api.models import Base, IngredientRecord, RecipeRecord
"""

from costing_api.models.base import Base, AuditMixin
from costing_api.models.ingredient import IngredientRecord, PriceEntryRecord
from costing_api.models.recipe import RecipeRecord, RecipeLineRecord

__all__ = [
    "Base",
    "AuditMixin",
    "IngredientRecord",
    "PriceEntryRecord",
    "RecipeRecord",
    "RecipeLineRecord",
]

"""
Domain model: aggregates and derived records. No I/O.
"""

from costing_api.domain.lifecycle import AuditableAggregate, new_id
from costing_api.domain.ingredient import Ingredient, PriceEntry
from costing_api.domain.recipe import Recipe, RecipeLine
from costing_api.domain.cost import CostBreakdown, CostLine, round_money

__all__ = [
    "AuditableAggregate",
    "new_id",
    "Ingredient",
    "PriceEntry",
    "Recipe",
    "RecipeLine",
    "CostBreakdown",
    "CostLine",
    "round_money",
]

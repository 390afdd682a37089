"""
HTTP routers of the costing API.
"""

from costing_api.routers.ingredients import router as ingredients_router
from costing_api.routers.recipes import router as recipes_router

__all__ = [
    "ingredients_router",
    "recipes_router",
]

"""
FastAPI dependency wiring for the costing API.

Routers receive ready-made services; tests override get_db and
get_price_cache.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from shared.config.settings import settings
from shared.infrastructure.cache import InMemoryPriceCache, PriceCache, RedisPriceCache
from shared.infrastructure.db import get_db
from shared.infrastructure.redis import get_redis_sync_client

from costing_api.repositories import IngredientRepository, RecipeRepository
from costing_api.services import CostCalculator, IngredientService, PriceResolver, RecipeService


@lru_cache
def get_price_cache() -> PriceCache:
    """Process-wide price cache for the configured backend."""
    if settings.price_cache_backend == "memory":
        return InMemoryPriceCache()
    return RedisPriceCache(get_redis_sync_client())


def get_user_id(x_user_id: str | None = Header(default=None, alias="X-User-ID")) -> str:
    """Acting user for audit fields; falls back to the system user."""
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return settings.system_user_id


def get_ingredient_service(db: Session = Depends(get_db)) -> IngredientService:
    return IngredientService(IngredientRepository(db))


def get_recipe_service(
    db: Session = Depends(get_db),
    cache: PriceCache = Depends(get_price_cache),
) -> RecipeService:
    ingredients = IngredientRepository(db)
    resolver = PriceResolver(ingredients, cache, ttl_seconds=settings.price_cache_ttl_seconds)
    return RecipeService(RecipeRepository(db), CostCalculator(ingredients, resolver))

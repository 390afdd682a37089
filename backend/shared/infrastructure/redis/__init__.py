"""
Redis package: connection pool, key prefixes and TTLs.
"""

from shared.infrastructure.redis.constants import (
    INGREDIENT_PRICE_CACHE_TTL,
    get_ingredient_price_cache_key,
)
from shared.infrastructure.redis.pool import (
    get_redis_sync_client,
    close_redis_sync_pool,
)

__all__ = [
    "INGREDIENT_PRICE_CACHE_TTL",
    "get_ingredient_price_cache_key",
    "get_redis_sync_client",
    "close_redis_sync_pool",
]

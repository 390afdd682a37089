"""
Cache package: price cache contract and backends.
"""

from shared.infrastructure.cache.price_cache import (
    PriceCache,
    InMemoryPriceCache,
)
from shared.infrastructure.cache.redis_cache import RedisPriceCache

__all__ = [
    "PriceCache",
    "InMemoryPriceCache",
    "RedisPriceCache",
]

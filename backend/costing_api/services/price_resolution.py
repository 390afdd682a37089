"""
Cache-aside resolution of an ingredient's latest price.

Cached prices may be stale by up to the TTL; adding a price never evicts.
Callers that need the exact current value pass use_cache=False.
"""

from __future__ import annotations

from decimal import Decimal

from shared.config.logging import get_logger
from shared.infrastructure.cache import PriceCache
from shared.infrastructure.redis.constants import (
    INGREDIENT_PRICE_CACHE_TTL,
    get_ingredient_price_cache_key,
)
from shared.utils.exceptions import PriceNotFoundError

from costing_api.repositories.contracts import LatestPriceSource

logger = get_logger(__name__)


class PriceResolver:
    """
    Latest-price lookups in front of the price store.

    Usage:
        resolver = PriceResolver(ingredient_repository, cache)
        price = resolver.resolve(ingredient_id)                   # may be cached
        price = resolver.resolve(ingredient_id, use_cache=False)  # exact read
    """

    def __init__(
        self,
        source: LatestPriceSource,
        cache: PriceCache,
        ttl_seconds: int = INGREDIENT_PRICE_CACHE_TTL,
    ):
        self._source = source
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def resolve(self, ingredient_id: str, use_cache: bool = True) -> Decimal:
        """
        Return the latest unit price of an ingredient.

        With use_cache, a hit is served without touching the store; a miss
        reads the store and caches the price found. An ingredient without
        prices is never cached, so a price added later shows up on the next
        call.

        Raises:
            PriceNotFoundError: The ingredient has no price entries
            DependencyFailureError: The store or the cache failed
        """
        if not use_cache:
            return self._load(ingredient_id)

        key = get_ingredient_price_cache_key(ingredient_id)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Price cache hit", ingredient_id=ingredient_id)
            return cached

        logger.debug("Price cache miss", ingredient_id=ingredient_id)
        price = self._load(ingredient_id)
        # Concurrent misses may both write the same fresh value
        self._cache.set(key, price, self._ttl_seconds)
        return price

    def _load(self, ingredient_id: str) -> Decimal:
        price = self._source.latest_price(ingredient_id)
        if price is None:
            raise PriceNotFoundError(ingredient_id)
        return price

"""
Infrastructure module: Database, Redis and caching.

Provides:
- Database sessions and transactions (db.py)
- Redis connection pool (redis/)
- Latest-price cache backends (cache/)
- Request correlation ids (correlation.py)
"""

from shared.infrastructure.db import (
    engine,
    SessionLocal,
    build_engine,
    get_db,
)
from shared.infrastructure.redis import (
    get_redis_sync_client,
    close_redis_sync_pool,
)
from shared.infrastructure.cache import (
    PriceCache,
    InMemoryPriceCache,
    RedisPriceCache,
)

__all__ = [
    # db
    "engine",
    "SessionLocal",
    "build_engine",
    "get_db",
    # redis
    "get_redis_sync_client",
    "close_redis_sync_pool",
    # cache
    "PriceCache",
    "InMemoryPriceCache",
    "RedisPriceCache",
]

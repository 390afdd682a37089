"""
Redis-backed price cache.

Values are stored with SETEX as the string form of the Decimal so no
precision is lost on the way through Redis.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import redis

from shared.config.logging import get_logger
from shared.utils.exceptions import DependencyFailureError

logger = get_logger(__name__)


class RedisPriceCache:
    """PriceCache implementation over a sync Redis client."""

    def __init__(self, client: redis.Redis):
        self._client = client

    def get(self, key: str) -> Decimal | None:
        try:
            raw = self._client.get(key)
        except redis.RedisError as e:
            raise DependencyFailureError("cache", reason=str(e), key=key) from e

        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            value = Decimal(raw)
        except InvalidOperation:
            value = None
        if value is None or not value.is_finite():
            # Unreadable entry is treated as a miss and overwritten on reload
            logger.warning("Discarding malformed cached price", key=key, value=raw)
            return None
        return value

    def set(self, key: str, value: Decimal, ttl_seconds: int) -> None:
        try:
            self._client.setex(key, ttl_seconds, str(value))
        except redis.RedisError as e:
            raise DependencyFailureError("cache", reason=str(e), key=key) from e

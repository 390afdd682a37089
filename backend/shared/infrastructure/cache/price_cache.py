"""
Price cache contract and the process-local implementation.

The cache only knows string keys and Decimal values; key construction and
the cache-aside policy live in the price resolver.
"""

from __future__ import annotations

import threading
import time
from decimal import Decimal
from typing import Callable, Protocol


class PriceCache(Protocol):
    """Minimal key/value cache with per-entry expiry."""

    def get(self, key: str) -> Decimal | None:
        """Return the cached value, or None on a miss or an expired entry."""
        ...

    def set(self, key: str, value: Decimal, ttl_seconds: int) -> None:
        """Store a value that expires ttl_seconds from now."""
        ...


class InMemoryPriceCache:
    """
    Thread-safe in-process cache.

    Expiry is measured with the injected clock (seconds, monotonic), so tests
    can move time forward without sleeping.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[Decimal, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Decimal | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Decimal, ttl_seconds: int) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

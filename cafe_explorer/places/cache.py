from __future__ import annotations

import hashlib
import json
import time
from collections.abc import Callable
from typing import Any, TypeVar

from .config import DEFAULT_PLACES_CONFIG

T = TypeVar("T")


class LookupCache:
    """TTL cache for places lookups, keyed on the endpoint and its parameters."""

    def __init__(self, ttl: float = DEFAULT_PLACES_CONFIG.cache_ttl, clock: Callable[[], float] = time.time) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(endpoint: str, params: dict[str, Any]) -> str:
        normalized = json.dumps({"endpoint": endpoint, **params}, sort_keys=True, default=str)
        return hashlib.sha256(normalized.encode()).hexdigest()[:16]

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is not None:
            created_at, value = entry
            if self._clock() - created_at < self.ttl:
                self.hits += 1
                return value
            del self._entries[key]
        self.misses += 1
        return None

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def get_or_fetch(self, endpoint: str, params: dict[str, Any], fetch: Callable[[], T]) -> T:
        """Return the cached value or call *fetch* and cache what it returns.

        Exceptions raised by *fetch* propagate and nothing is cached.
        """
        key = self.make_key(endpoint, params)
        cached = self.get(key)
        if cached is not None:
            return cached
        value = fetch()
        self.set(key, value)
        return value

    def stats(self) -> dict[str, Any]:
        total = self.hits + self.misses
        return {
            "size": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / total * 100, 1) if total > 0 else 0.0,
        }

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0


places_cache = LookupCache()

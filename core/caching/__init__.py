"""
Ops Core Caching — Bounded TTL Cache for Reference Data
=========================================================
Fast read access for small, slowly-changing reference rows
(the housekeeping task catalog).

Doctrine: Cache is disposable — always rebuildable from the database.
Entries expire after a TTL; the LRU bound keeps memory fixed.
Time is injected — no datetime.now() calls.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional


# ══════════════════════════════════════════════════════════════
# CACHE ENTRY
# ══════════════════════════════════════════════════════════════

@dataclass
class CacheEntry:
    """A single cached value with TTL metadata."""

    key: str
    value: Any
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


# ══════════════════════════════════════════════════════════════
# CACHE STATISTICS
# ══════════════════════════════════════════════════════════════

@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    invalidations: int = 0
    total_entries: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "invalidations": self.invalidations,
            "total_entries": self.total_entries,
            "hit_rate": round(self.hit_rate, 4),
        }


# ══════════════════════════════════════════════════════════════
# TTL CACHE (LRU + TTL)
# ══════════════════════════════════════════════════════════════

class TTLCache:
    """
    In-memory LRU cache with TTL expiration.

    - TTL-based expiration (global default or per entry)
    - LRU eviction when max_size is exceeded
    - Explicit invalidation of one key or the whole cache

    Not thread-safe on its own; owners that share an instance
    across threads must serialize access.
    """

    def __init__(
        self,
        max_size: int = 1000,
        default_ttl_seconds: int = 300,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be >= 1.")
        if default_ttl_seconds < 1:
            raise ValueError("default_ttl_seconds must be >= 1.")
        self._max_size = max_size
        self._default_ttl = timedelta(seconds=default_ttl_seconds)
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._stats = CacheStats()

    def get(self, key: str, now: datetime) -> Optional[Any]:
        """
        Get a cached value by key.

        Returns None on miss or expired entry.
        """
        entry = self._entries.get(key)
        if entry is None:
            self._stats.misses += 1
            return None

        if entry.is_expired(now):
            self._evict(key)
            self._stats.misses += 1
            return None

        # LRU: move to end
        self._entries.move_to_end(key)
        self._stats.hits += 1
        return entry.value

    def put(
        self,
        key: str,
        value: Any,
        now: datetime,
        ttl_seconds: Optional[int] = None,
    ) -> None:
        ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else self._default_ttl

        if key not in self._entries and len(self._entries) >= self._max_size:
            self._evict_lru()

        self._entries[key] = CacheEntry(
            key=key,
            value=value,
            created_at=now,
            expires_at=now + ttl,
        )
        self._entries.move_to_end(key)
        self._stats.total_entries = len(self._entries)

    def invalidate(self, key: str) -> bool:
        """Invalidate a specific cache entry."""
        if key in self._entries:
            self._entries.pop(key)
            self._stats.invalidations += 1
            self._stats.total_entries = len(self._entries)
            return True
        return False

    def clear(self) -> int:
        """Drop every entry. Returns how many were dropped."""
        count = len(self._entries)
        self._entries.clear()
        self._stats.invalidations += count
        self._stats.total_entries = 0
        return count

    @property
    def stats(self) -> CacheStats:
        return self._stats

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def max_size(self) -> int:
        return self._max_size

    def _evict(self, key: str) -> None:
        self._entries.pop(key, None)
        self._stats.evictions += 1
        self._stats.total_entries = len(self._entries)

    def _evict_lru(self) -> None:
        if self._entries:
            oldest_key = next(iter(self._entries))
            self._evict(oldest_key)


__all__ = [
    "CacheEntry",
    "CacheStats",
    "TTLCache",
]

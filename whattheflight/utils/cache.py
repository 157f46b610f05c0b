"""
In-memory lookup caching with TTL and LRU eviction.

Each service owns its caches and clears them when it is closed; nothing
here is module-level state.
"""

import time
import logging
from typing import Any, Callable, Dict, Optional
from collections import OrderedDict
from threading import Lock

logger = logging.getLogger(__name__)


def normalize_code(key: str) -> str:
    """Default key normalization for callsigns and airport codes."""
    return key.strip().upper()


class CacheEntry:
    """Represents a single cache entry with TTL."""

    def __init__(self, data: Any, ttl: float, now: float):
        self.data = data
        self.created_at = now
        self.expires_at = now + ttl
        self.hits = 0

    def is_expired(self, now: float) -> bool:
        """Check if the cache entry has expired."""
        return now >= self.expires_at

    def access(self) -> Any:
        """Access the cached data and increment hit count."""
        self.hits += 1
        return self.data


class TTLCache:
    """Thread-safe LRU cache with per-entry TTL."""

    def __init__(self, max_size: int = 500, default_ttl: float = 300,
                 key_func: Callable[[str], str] = normalize_code,
                 clock: Callable[[], float] = time.time,
                 name: str = 'cache'):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries
            default_ttl: Default TTL in seconds
            key_func: Maps a caller key to the stored key
            clock: Time source, injectable for tests
            name: Label used in log lines
        """
        self.max_size = max_size
        self.default_ttl = default_ttl
        self.key_func = key_func
        self.clock = clock
        self.name = name
        self._entries: 'OrderedDict[str, CacheEntry]' = OrderedDict()
        self._lock = Lock()
        self.stats = {
            'hits': 0,
            'misses': 0,
            'evictions': 0,
            'expirations': 0
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache, or None if missing or expired."""
        key = self.key_func(key)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.stats['misses'] += 1
                return None

            if entry.is_expired(self.clock()):
                del self._entries[key]
                self.stats['expirations'] += 1
                self.stats['misses'] += 1
                return None

            # Move to end (most recently used)
            self._entries.move_to_end(key)
            self.stats['hits'] += 1
            return entry.access()

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Set value in cache with optional TTL."""
        key = self.key_func(key)
        with self._lock:
            if key in self._entries:
                del self._entries[key]

            self._entries[key] = CacheEntry(
                value,
                self.default_ttl if ttl is None else ttl,
                self.clock()
            )

            while len(self._entries) > self.max_size:
                oldest_key = next(iter(self._entries))
                del self._entries[oldest_key]
                self.stats['evictions'] += 1

    def delete(self, key: str) -> bool:
        """Remove a single entry. Returns True if it existed."""
        key = self.key_func(key)
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self._entries.clear()
        logger.debug(f"Cleared {self.name}")

    def cleanup_expired(self) -> int:
        """Drop expired entries and return how many were removed."""
        now = self.clock()
        with self._lock:
            expired_keys = [key for key, entry in self._entries.items()
                            if entry.is_expired(now)]
            for key in expired_keys:
                del self._entries[key]
            self.stats['expirations'] += len(expired_keys)

        if expired_keys:
            logger.debug(f"Removed {len(expired_keys)} expired entries from {self.name}")
        return len(expired_keys)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total_requests = self.stats['hits'] + self.stats['misses']
            hit_rate = self.stats['hits'] / total_requests if total_requests > 0 else 0

            return {
                **self.stats,
                'size': len(self._entries),
                'hit_rate': round(hit_rate, 3),
                'total_requests': total_requests
            }

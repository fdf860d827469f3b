"""
In-process TTL cache for suggestion lists.

The cache is only an accelerator, never the source of truth. Entries expire
lazily: an expired entry is dropped when it is read and overwritten when it is
written; there is no background sweeper, so memory is bounded by key churn.

Namespaces in use:
- retrieval: hybrid search results keyed by profile hash (TTL 5 min)
- recommend: single-strategy results keyed by sanitized message (TTL 2 min)
"""
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from aromachat.utils.logger import get_logger

logger = get_logger("recommendation.cache")

V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    value: V
    expires_at: float


class TTLCache(Generic[V]):
    """
    Thread-safe key/value cache with a single TTL for every entry.

    Args:
        ttl_seconds: Lifetime of each entry
        namespace: Label used in log lines
        clock: Monotonic time source (seconds); injectable for tests
    """

    def __init__(
        self,
        ttl_seconds: float,
        namespace: str = "default",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.namespace = namespace
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, CacheEntry[V]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[V]:
        """Return the cached value, or None on miss or expiry."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._clock() < entry.expires_at:
                self.hits += 1
                return entry.value
            if entry is not None:
                del self._entries[key]
            self.misses += 1
            return None

    def set(self, key: str, value: V) -> None:
        """Store a value, replacing any previous entry for the key."""
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + self.ttl_seconds)

    def invalidate(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """Drop every entry. Returns how many were removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries = {}
        logger.info(f"Cache cleared ({self.namespace}): {removed} entries")
        return removed

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "namespace": self.namespace,
                "entries": len(self._entries),
                "hits": self.hits,
                "misses": self.misses,
                "ttl_seconds": self.ttl_seconds,
            }

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and self._clock() < entry.expires_at

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

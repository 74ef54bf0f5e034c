"""
Query embedding cache.

Bounded LRU map from normalized query text to an embedding, with a per-entry
expiry. Safe for concurrent use from threads; the lock is only held for
dictionary operations, never across a provider call.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from recruit_memory.models import EmbeddingVector

logger = logging.getLogger(__name__)


def normalize_query(text: str) -> str:
    """Cache key for a query: trimmed and lower-cased."""
    return text.strip().lower()


@dataclass
class CacheStats:
    total_entries: int
    valid_entries: int
    expired_entries: int
    hits: int
    misses: int
    evictions: int

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


@dataclass
class _CacheEntry:
    vector: EmbeddingVector
    expires_at: float


class QueryEmbeddingCache:
    """
    In-process TTL + LRU cache for query embeddings.

    Expired entries are dropped lazily when looked up and in bulk by
    sweep(). When the cache is full the least recently used entry is evicted.

    Example:
        >>> cache = QueryEmbeddingCache(max_entries=500)
        >>> cache.set("python developer", vector, ttl_seconds=600)
        >>> cache.get("  Python Developer ")  # same normalized key
    """

    def __init__(
        self,
        max_entries: int = 1000,
        default_ttl_seconds: float = 600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            max_entries: Upper bound on stored entries (LRU eviction beyond it)
            default_ttl_seconds: TTL used when set() is called without one
            clock: Monotonic seconds source; inject a fake for tests
        """
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")

        self._entries: "OrderedDict[str, _CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()
        self._clock = clock
        self._max_entries = max_entries
        self._default_ttl = default_ttl_seconds
        self._hits = 0
        self._misses = 0
        self._evictions = 0

        logger.info(
            f"QueryEmbeddingCache initialized (max_entries={max_entries}, "
            f"default_ttl={default_ttl_seconds}s)"
        )

    def get(self, text: str) -> Optional[EmbeddingVector]:
        """Return the cached vector for a query, or None on miss/expiry."""
        key = normalize_query(text)
        now = self._clock()

        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            if entry.expires_at <= now:
                del self._entries[key]
                self._misses += 1
                self._evictions += 1
                return None

            self._entries.move_to_end(key)
            self._hits += 1
            return entry.vector

    def set(
        self, text: str, vector: EmbeddingVector, ttl_seconds: Optional[float] = None
    ) -> None:
        """Store a vector under the normalized query key."""
        key = normalize_query(text)
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        expires_at = self._clock() + ttl

        with self._lock:
            self._entries[key] = _CacheEntry(vector=vector, expires_at=expires_at)
            self._entries.move_to_end(key)

            while len(self._entries) > self._max_entries:
                evicted_key, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug(f"Evicted least recently used query '{evicted_key[:40]}'")

    def sweep(self) -> int:
        """Evict every expired entry. Returns the number evicted."""
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
            for key in expired:
                del self._entries[key]
            self._evictions += len(expired)

        if expired:
            logger.debug(f"Swept {len(expired)} expired query embeddings")
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        now = self._clock()
        with self._lock:
            valid = sum(1 for entry in self._entries.values() if entry.expires_at > now)
            total = len(self._entries)
            return CacheStats(
                total_entries=total,
                valid_entries=valid,
                expired_entries=total - valid,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

"""In-memory routing cache: normalized query text -> previously chosen agent.

Entries expire after ``ttl`` seconds without a hit; a hit refreshes the
entry's timestamp, so the cache behaves as a sliding window. When full, the
entry with the oldest timestamp is evicted. Only confident routings are kept.

The cache is per process. Concurrent requests may both miss on the same query
and both compute a routing; the second ``set`` simply overwrites the first.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from typing import Callable

from cleorouter.models.routing_cache import CacheStats, RoutingCacheEntry

logger = logging.getLogger(__name__)

DEFAULT_TTL = 3600.0
DEFAULT_MAX_SIZE = 1000
DEFAULT_MIN_CONFIDENCE = 0.7
DEFAULT_CLEANUP_INTERVAL = 300.0

NORMALIZED_MAX_CHARS = 200
STORED_INPUT_CHARS = 100

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Cache key for a query: lowercase, no punctuation, single spaces, capped."""
    text = _PUNCTUATION.sub("", text.lower())
    text = _WHITESPACE.sub(" ", text).strip()
    return text[:NORMALIZED_MAX_CHARS]


class RoutingCache:
    """Bounded TTL + LRU cache of routing decisions."""

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        max_size: int = DEFAULT_MAX_SIZE,
        min_confidence: float = DEFAULT_MIN_CONFIDENCE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._ttl = ttl
        self._max_size = max_size
        self._min_confidence = min_confidence
        self._clock = clock
        self._entries: dict[str, RoutingCacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._total_queries = 0

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def min_confidence(self) -> float:
        return self._min_confidence

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, text: str) -> bool:
        return normalize(text) in self._entries

    def get_cached(self, text: str) -> str | None:
        """Return the cached agent id for a query, or None on a miss."""
        self._total_queries += 1
        key = normalize(text)
        entry = self._entries.get(key)

        if entry is None:
            self._misses += 1
            return None

        now = self._clock()
        if entry.is_expired(now, self._ttl):
            del self._entries[key]
            self._misses += 1
            return None

        self._hits += 1
        entry.hit_count += 1
        entry.timestamp = now
        logger.debug("Routing cache hit for %r -> %s", text[:50], entry.agent_id)
        return entry.agent_id

    def set(self, text: str, agent_id: str, confidence: float) -> bool:
        """Cache a routing choice. Returns False when below the confidence gate."""
        if confidence < self._min_confidence:
            return False

        key = normalize(text)
        if key not in self._entries and len(self._entries) >= self._max_size:
            self._evict_oldest()

        self._entries[key] = RoutingCacheEntry(
            key=key,
            input=text[:STORED_INPUT_CHARS],
            agent_id=agent_id,
            confidence=confidence,
            timestamp=self._clock(),
        )
        logger.debug(
            "Cached routing %r -> %s (confidence: %.2f)", text[:50], agent_id, confidence
        )
        return True

    def _evict_oldest(self) -> None:
        if not self._entries:
            return
        # min() keeps the first of equal timestamps, i.e. the earliest inserted
        oldest = min(self._entries.values(), key=lambda e: e.timestamp)
        del self._entries[oldest.key]
        logger.debug("Evicted routing cache entry %r", oldest.input[:50])

    def cleanup(self) -> int:
        """Remove all expired entries. Returns how many were removed."""
        now = self._clock()
        expired = [k for k, e in self._entries.items() if e.is_expired(now, self._ttl)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Cleaned %d expired routing cache entries", len(expired))
        return len(expired)

    def get_stats(self) -> CacheStats:
        hit_rate = (self._hits / self._total_queries) * 100 if self._total_queries else 0.0
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            total_queries=self._total_queries,
            hit_rate=round(hit_rate, 2),
            cache_size=len(self._entries),
        )

    def clear(self) -> None:
        """Drop every entry and reset the counters."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0
        self._total_queries = 0
        logger.info("Routing cache cleared")

    def get_top_entries(self, limit: int = 10) -> list[RoutingCacheEntry]:
        """Most-hit entries first."""
        return sorted(self._entries.values(), key=lambda e: e.hit_count, reverse=True)[:limit]


class CacheSweeper:
    """Background task that periodically expires routing cache entries."""

    def __init__(self, cache: RoutingCache, interval: float = DEFAULT_CLEANUP_INTERVAL) -> None:
        self._cache = cache
        self._interval = interval
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.ensure_future(self._sweep_loop())
        logger.info("Routing cache sweeper started (interval=%ss)", self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Routing cache sweeper stopped")

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self._cache.cleanup()
            except Exception:
                logger.warning("Routing cache sweep failed", exc_info=True)

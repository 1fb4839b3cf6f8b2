"""Routing cache domain models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RoutingCacheEntry:
    """A cached routing choice. Mutable: hits refresh ``timestamp`` and ``hit_count``."""

    key: str  # normalized input
    input: str  # first 100 chars of the raw input, for diagnostics
    agent_id: str
    confidence: float
    timestamp: float  # seconds since epoch
    hit_count: int = 0

    def is_expired(self, now: float, ttl: float) -> bool:
        return now - self.timestamp > ttl

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "input": self.input,
            "agent_id": self.agent_id,
            "confidence": self.confidence,
            "timestamp": self.timestamp,
            "hit_count": self.hit_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> RoutingCacheEntry:
        return cls(
            key=data["key"],
            input=data.get("input", ""),
            agent_id=data["agent_id"],
            confidence=data.get("confidence", 0.0),
            timestamp=data.get("timestamp", 0.0),
            hit_count=data.get("hit_count", 0),
        )


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of routing cache counters."""

    hits: int = 0
    misses: int = 0
    total_queries: int = 0
    hit_rate: float = 0.0  # percentage, two decimals
    cache_size: int = 0

    def to_dict(self) -> dict:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "total_queries": self.total_queries,
            "hit_rate": self.hit_rate,
            "cache_size": self.cache_size,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CacheStats:
        return cls(
            hits=data.get("hits", 0),
            misses=data.get("misses", 0),
            total_queries=data.get("total_queries", 0),
            hit_rate=data.get("hit_rate", 0.0),
            cache_size=data.get("cache_size", 0),
        )

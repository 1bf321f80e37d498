"""
In-memory TTL cache with bounded capacity.

Eviction removes the oldest entry by insertion order, which approximates LRU
without tracking access order. Expiry is lazy: entries are only purged when
read after their deadline.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

T = TypeVar("T")

_MISSING = object()


@dataclass
class CacheEntry(Generic[T]):
    value: T
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class CacheStore(Generic[T]):
    """Key/value store with per-entry TTL and a hard size limit"""

    def __init__(self, max_size: int = 500, clock: Optional[Callable[[], float]] = None):
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self.max_size = max_size
        self._clock = clock or time.monotonic
        self._entries: Dict[str, CacheEntry[T]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: T, ttl_ms: float) -> None:
        """Insert or overwrite ``key``, evicting the oldest entry when full."""
        expires_at = self._clock() + ttl_ms / 1000.0
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_size:
                oldest_key = next(iter(self._entries))
                del self._entries[oldest_key]
            self._entries[key] = CacheEntry(value=value, expires_at=expires_at)

    def get(self, key: str, default=None):
        """Return the cached value, or ``default`` when missing or expired.

        Reading an expired entry deletes it.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return default
            return entry.value

    def has(self, key: str) -> bool:
        # Goes through get() so an expired entry is purged here as well
        return self.get(key, _MISSING) is not _MISSING

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

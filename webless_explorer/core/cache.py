"""Result caches keyed on the exact (query, radius) pair of a search.

Only unfiltered result sets are ever stored; the search pipeline skips the
cache entirely when the no-website filter is active.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Callable, List, Optional, Sequence, Tuple

from webless_explorer.core.config import Settings
from webless_explorer.models import FullBusinessData

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, int]


def cache_key(query: str, radius: int) -> CacheKey:
    return query, int(radius)


class ResultCache(ABC):
    """Read-through/write-through cache interface used by the search pipeline."""

    @abstractmethod
    def get(self, query: str, radius: int) -> Optional[List[FullBusinessData]]:
        """Return the cached records for the exact pair, or None on a miss."""

    @abstractmethod
    def put(self, query: str, radius: int, records: Sequence[FullBusinessData]) -> None:
        """Store records for the pair; later writes replace earlier ones."""

    def describe(self) -> str:
        return type(self).__name__


class NullResultCache(ResultCache):
    """Cache that never stores anything."""

    def get(self, query: str, radius: int) -> Optional[List[FullBusinessData]]:
        logger.info("Checking cache for query=%r radius=%d: disabled, treating as miss", query, radius)
        return None

    def put(self, query: str, radius: int, records: Sequence[FullBusinessData]) -> None:
        logger.info("Caching disabled; dropping %d results for query=%r radius=%d", len(records), query, radius)

    def describe(self) -> str:
        return "disabled"


class InMemoryResultCache(ResultCache):
    """Process-local cache with a time-to-live per entry.

    Safe to share between concurrent searches; writes for the same key are
    last-write-wins. When ``max_entries`` is reached the oldest entry is evicted.
    """

    def __init__(
        self,
        ttl_seconds: int,
        max_entries: int = 128,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max(1, max_entries)
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: "OrderedDict[CacheKey, Tuple[float, Tuple[FullBusinessData, ...]]]" = OrderedDict()

    def get(self, query: str, radius: int) -> Optional[List[FullBusinessData]]:
        key = cache_key(query, radius)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.info("Cache miss for query=%r radius=%d", query, radius)
                return None
            stored_at, records = entry
            if self._clock() - stored_at > self.ttl_seconds:
                del self._entries[key]
                logger.info("Cache entry expired for query=%r radius=%d", query, radius)
                return None
        logger.info("Cache hit for query=%r radius=%d (%d results)", query, radius, len(records))
        return list(records)

    def put(self, query: str, radius: int, records: Sequence[FullBusinessData]) -> None:
        key = cache_key(query, radius)
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (self._clock(), tuple(records))
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cache entry %s", evicted)
        logger.info("Cached %d results for query=%r radius=%d", len(records), query, radius)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def describe(self) -> str:
        return f"memory(ttl={self.ttl_seconds}s)"


def build_cache(settings: Settings) -> ResultCache:
    if settings.cache_ttl_seconds > 0:
        return InMemoryResultCache(settings.cache_ttl_seconds, settings.cache_max_entries)
    return NullResultCache()

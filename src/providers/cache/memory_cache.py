"""In-memory cache store using cachetools.LRUCache.

Simple, fast store suitable for tests and throwaway sessions.  Entries do
not survive the process; swap in :class:`SQLiteCacheStore` when they should.
"""

from __future__ import annotations

import structlog
from cachetools import LRUCache

from src.interfaces.cache_provider import ICacheStore
from src.models.animal import CachedPageInfo, PageInfo

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheStore(ICacheStore):
    """In-process page-info store backed by ``cachetools.LRUCache``.

    TTL is not enforced here: the Wikipedia source compares entry
    timestamps itself, so the store only needs to remember what it was
    given.  The LRU bound keeps a long-lived process from growing without
    limit.

    Parameters
    ----------
    max_size:
        Maximum number of titles kept before the least-recently-used entry
        is evicted.
    """

    def __init__(self, max_size: int = 10000) -> None:
        self._cache: LRUCache[str, CachedPageInfo] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # ICacheStore implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> CachedPageInfo | None:
        """Retrieve the entry for *key*, or ``None`` if missing."""
        entry = self._cache.get(key)
        if entry is not None:
            logger.debug("cache_hit", key=key)
        else:
            logger.debug("cache_miss", key=key)
        return entry

    async def put(self, key: str, value: PageInfo | None, timestamp: float) -> None:
        """Store *value* under *key*, overwriting any prior entry."""
        self._cache[key] = CachedPageInfo(timestamp=timestamp, payload=value)
        logger.debug("cache_set", key=key, absent=value is None)

    def get_provider_name(self) -> str:
        return "memory_cache"

    def __len__(self) -> int:
        return len(self._cache)

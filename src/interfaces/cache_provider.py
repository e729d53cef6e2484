"""Abstract base class for the page-info cache store.

Defines the contract for the best-effort key/value cache used by the
Wikipedia source to avoid repeating page lookups.  Implementations may keep
entries in memory or persist them to disk; the adapter pattern allows the
backend to be swapped without touching the source or the pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.animal import CachedPageInfo, PageInfo


class ICacheStore(ABC):
    """Contract for page-info cache stores.

    Both operations are async so disk-backed stores do not block the event
    loop.  Neither operation raises: storage failures are logged and the
    key is treated as absent.
    """

    @abstractmethod
    async def get(self, key: str) -> CachedPageInfo | None:
        """Return the entry stored under *key*, or ``None``.

        Entries are returned regardless of age; deciding whether an entry
        is stale is the caller's concern.

        Parameters
        ----------
        key:
            The cache key (a Wikipedia page title).
        """

    @abstractmethod
    async def put(self, key: str, value: PageInfo | None, timestamp: float) -> None:
        """Store *value* under *key*, replacing any previous entry.

        Parameters
        ----------
        key:
            The cache key.
        value:
            The page info, or ``None`` to record a "known absent" result.
        timestamp:
            Creation time in epoch seconds.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this cache backend."""

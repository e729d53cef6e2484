"""Cache stores.

Page-info cache used by the Wikipedia source so that each title is looked
up at most once per TTL window (30 days by default), including titles the
source reported as missing.

MemoryCacheStore is a dict-like LRU store, fast but gone when the process
exits.  SQLiteCacheStore persists the same entries to disk; both implement
ICacheStore, so the choice is made once in ``src/main.py``.
"""

from src.providers.cache.memory_cache import MemoryCacheStore
from src.providers.cache.sqlite_cache import SQLiteCacheStore

__all__ = ["MemoryCacheStore", "SQLiteCacheStore"]

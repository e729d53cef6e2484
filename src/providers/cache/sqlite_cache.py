"""SQLite-backed persistent cache store.

Persists page-info entries to a local SQLite database so they survive
process restarts.  The layout mirrors a browser ``localStorage`` origin: a
single ``kv_store`` table holding one JSON blob under a versioned key
(``wiki_cache_v1`` by default) that maps title → ``{timestamp, payload}``.
Bumping the key name invalidates every entry at once.

Every :meth:`get` re-reads the blob and every :meth:`put` is a
read-modify-write.  Concurrent writers are last-writer-wins; entries are
idempotent derivations of the same page, so a lost write only costs a
repeated lookup.  Uses ``aiosqlite`` for async I/O.
"""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any

import aiosqlite
import structlog
from pydantic import ValidationError

from src.interfaces.cache_provider import ICacheStore
from src.models.animal import CachedPageInfo, PageInfo
from src.utils.errors import CacheStoreError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/wiki_cache.db")
_DEFAULT_BLOB_KEY = "wiki_cache_v1"

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS kv_store (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    updated_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""

_SELECT_SQL = "SELECT value FROM kv_store WHERE key = ?;"

_UPSERT_SQL = """\
INSERT INTO kv_store (key, value)
VALUES (?, ?)
ON CONFLICT(key)
DO UPDATE SET value      = excluded.value,
              updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now');
"""


class _CorruptBlobError(CacheStoreError):
    """The stored blob exists but is not a JSON object."""


class SQLiteCacheStore(ICacheStore):
    """Persistent page-info store: one JSON blob in a SQLite key/value table.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Parent directories are created
        on first use.
    blob_key:
        Versioned key under which the whole cache blob is stored.
    """

    def __init__(
        self,
        db_path: str | Path = _DEFAULT_DB_PATH,
        blob_key: str = _DEFAULT_BLOB_KEY,
    ) -> None:
        self._db_path = Path(db_path)
        self._blob_key = blob_key
        self._schema_ready = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> bool:
        """Create the table if needed.  Returns ``False`` if storage is unusable.

        Optional: the first :meth:`get` or :meth:`put` initializes lazily.
        """
        try:
            await self._ensure_schema()
        except CacheStoreError as exc:
            logger.warning("cache_init_failed", path=str(self._db_path), error=str(exc))
            return False
        logger.info("cache_db_initialized", path=str(self._db_path), key=self._blob_key)
        return True

    # ------------------------------------------------------------------
    # ICacheStore implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> CachedPageInfo | None:
        """Return the entry for *key*; storage or decode errors read as absent."""
        try:
            blob = await self._read_blob()
        except CacheStoreError as exc:
            logger.warning("cache_read_failed", key=key, error=str(exc))
            return None

        raw = blob.get(key)
        if raw is None:
            logger.debug("cache_miss", key=key)
            return None

        try:
            entry = CachedPageInfo.model_validate(raw)
        except ValidationError as exc:
            logger.warning("cache_entry_invalid", key=key, error=str(exc))
            return None

        logger.debug("cache_hit", key=key)
        return entry

    async def put(self, key: str, value: PageInfo | None, timestamp: float) -> None:
        """Store *value* under *key*; failures are logged and dropped."""
        try:
            blob = await self._read_blob()
        except _CorruptBlobError as exc:
            # A corrupt blob is replaced; storage failures leave it untouched.
            logger.warning("cache_blob_reset", key=key, error=str(exc))
            blob = {}
        except CacheStoreError as exc:
            logger.warning("cache_write_skipped", key=key, error=str(exc))
            return

        entry = CachedPageInfo(timestamp=timestamp, payload=value)
        blob[key] = entry.model_dump(mode="json")

        try:
            await self._write_blob(blob)
        except CacheStoreError as exc:
            logger.warning("cache_write_failed", key=key, error=str(exc))
            return
        logger.debug("cache_set", key=key, absent=value is None)

    def get_provider_name(self) -> str:
        return "sqlite_cache"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(_CREATE_TABLE_SQL)
                await db.commit()
        except (sqlite3.Error, OSError) as exc:
            raise CacheStoreError(
                message=f"Cannot prepare cache database: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        self._schema_ready = True

    async def _read_blob(self) -> dict[str, Any]:
        await self._ensure_schema()
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                async with db.execute(_SELECT_SQL, (self._blob_key,)) as cursor:
                    row = await cursor.fetchone()
        except (sqlite3.Error, OSError) as exc:
            raise CacheStoreError(
                message=f"Cannot read cache blob: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if row is None:
            return {}

        try:
            blob = json.loads(row[0])
        except (TypeError, ValueError) as exc:
            raise _CorruptBlobError(
                message=f"Cache blob is not valid JSON: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(blob, dict):
            raise _CorruptBlobError(
                message="Cache blob is not a JSON object",
                provider_name=self.get_provider_name(),
            )
        return blob

    async def _write_blob(self, blob: dict[str, Any]) -> None:
        await self._ensure_schema()
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(_UPSERT_SQL, (self._blob_key, json.dumps(blob)))
                await db.commit()
        except (sqlite3.Error, OSError) as exc:
            raise CacheStoreError(
                message=f"Cannot write cache blob: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

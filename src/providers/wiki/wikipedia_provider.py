"""Wikipedia provider implementing IEncyclopediaProvider.

Wraps two MediaWiki action-API queries:

- ``list=search`` for ranked title hits, and
- ``prop=extracts|pageimages|pageterms`` for an exact-title page summary.

Page lookups go through an injected :class:`ICacheStore`.  Both found and
missing pages are cached with a timestamp; an entry younger than the TTL
(30 days by default) is served without a network call.  Transport errors
and malformed bodies are *not* cached, since they say nothing definitive
about the page.
"""

from __future__ import annotations

import time
from typing import Any, Callable
from urllib.parse import urlsplit

import httpx
import structlog

from src.interfaces.cache_provider import ICacheStore
from src.interfaces.encyclopedia_provider import IEncyclopediaProvider, SearchHit
from src.models.animal import PageInfo
from src.providers.wiki.mediawiki import fetch_mediawiki_json
from src.utils.errors import (
    MalformedResponseError,
    RecordNotFoundError,
    SourceUnavailableError,
)

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_API_URL = "https://en.wikipedia.org/w/api.php"
_DEFAULT_USER_AGENT = "wildfacts/0.1.0 (https://github.com/wildfacts/wildfacts)"
_DEFAULT_TTL_SECONDS = 30 * 24 * 60 * 60


class WikipediaProvider(IEncyclopediaProvider):
    """Wikipedia search and cached page-info lookups.

    Parameters
    ----------
    http_client:
        Shared ``httpx.AsyncClient`` (injected for testability).
    cache:
        Page-info cache store, keyed by the requested title.
    api_url:
        MediaWiki ``api.php`` endpoint.
    timeout:
        Per-request timeout in seconds.
    ttl_seconds:
        Maximum age of a cached entry before it is refreshed.
    thumbnail_size:
        Requested thumbnail width (``pithumbsize``).
    clock:
        Returns the current epoch time; overridden in tests.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        cache: ICacheStore,
        api_url: str = _DEFAULT_API_URL,
        timeout: float = 5.0,
        ttl_seconds: float = _DEFAULT_TTL_SECONDS,
        thumbnail_size: int = 800,
        user_agent: str = _DEFAULT_USER_AGENT,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._http = http_client
        self._cache = cache
        self._api_url = api_url
        self._timeout = timeout
        self._ttl_seconds = ttl_seconds
        self._thumbnail_size = thumbnail_size
        self._user_agent = user_agent
        self._clock = clock
        parts = urlsplit(api_url)
        self._page_url_base = f"{parts.scheme}://{parts.netloc}/?curid="

    # ------------------------------------------------------------------
    # IEncyclopediaProvider implementation
    # ------------------------------------------------------------------

    async def search(self, query: str, limit: int = 5) -> list[SearchHit]:
        """Return up to *limit* title hits for *query* in Wikipedia's ranking order."""
        query = (query or "").strip()
        if not query or limit <= 0:
            return []

        params = {
            "action": "query",
            "list": "search",
            "srsearch": query,
            "srlimit": limit,
        }
        try:
            data = await self._get(params)
        except (SourceUnavailableError, MalformedResponseError) as exc:
            logger.warning("wikipedia_search_failed", query=query, error=str(exc))
            return []

        query_block = data.get("query")
        raw_hits = query_block.get("search") if isinstance(query_block, dict) else None
        if not isinstance(raw_hits, list):
            raw_hits = []
        hits: list[SearchHit] = []
        for item in raw_hits:
            if not isinstance(item, dict) or not item.get("title"):
                continue
            hits.append(
                SearchHit(
                    title=str(item["title"]),
                    page_id=item.get("pageid"),
                    snippet=item.get("snippet"),
                )
            )
            if len(hits) >= limit:
                break

        logger.debug("wikipedia_search_complete", query=query, result_count=len(hits))
        return hits

    async def get_page_info(self, title: str) -> PageInfo | None:
        """Return the page summary for *title*, serving fresh cache entries first."""
        title = (title or "").strip()
        if not title:
            return None

        now = self._clock()
        entry = await self._cache.get(title)
        if entry is not None and entry.is_fresh(now, self._ttl_seconds):
            logger.debug("wikipedia_page_cached", title=title, absent=entry.payload is None)
            return entry.payload

        try:
            page = await self._fetch_page(title)
        except RecordNotFoundError:
            logger.info("wikipedia_page_missing", title=title)
            await self._cache.put(title, None, now)
            return None
        except (SourceUnavailableError, MalformedResponseError) as exc:
            logger.warning("wikipedia_page_lookup_failed", title=title, error=str(exc))
            return None

        await self._cache.put(title, page, now)
        return page

    def get_provider_name(self) -> str:
        return "wikipedia"

    def is_available(self) -> bool:
        """Wikipedia needs no API key."""
        return True

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _get(self, params: dict[str, Any]) -> dict[str, Any]:
        return await fetch_mediawiki_json(
            self._http,
            self._api_url,
            params,
            timeout=self._timeout,
            user_agent=self._user_agent,
            provider_name=self.get_provider_name(),
        )

    async def _fetch_page(self, title: str) -> PageInfo:
        params = {
            "action": "query",
            "titles": title,
            "prop": "extracts|pageimages|pageterms",
            "exintro": 1,
            "explaintext": 1,
            "piprop": "thumbnail",
            "pithumbsize": self._thumbnail_size,
        }
        data = await self._get(params)

        query = data.get("query")
        if not isinstance(query, dict):
            raise MalformedResponseError(
                message=f"No 'query' object in page-info response for '{title}'",
                provider_name=self.get_provider_name(),
            )
        pages = query.get("pages") or {}
        if not isinstance(pages, dict):
            raise MalformedResponseError(
                message=f"'query.pages' is not a map for '{title}'",
                provider_name=self.get_provider_name(),
            )
        if not pages:
            raise RecordNotFoundError(
                message=f"No page returned for '{title}'",
                provider_name=self.get_provider_name(),
            )

        page = next(iter(pages.values()))
        return self._map_page(title, page)

    def _map_page(self, title: str, page: Any) -> PageInfo:
        """Map one ``query.pages`` entry to :class:`PageInfo`."""
        if not isinstance(page, dict):
            raise MalformedResponseError(
                message=f"Page entry for '{title}' is not an object",
                provider_name=self.get_provider_name(),
            )
        if "missing" in page or "invalid" in page:
            raise RecordNotFoundError(
                message=f"Wikipedia has no page titled '{title}'",
                provider_name=self.get_provider_name(),
            )

        page_id = page.get("pageid")
        if page_id is None:
            raise MalformedResponseError(
                message=f"Page entry for '{title}' has no pageid",
                provider_name=self.get_provider_name(),
            )

        thumbnail = page.get("thumbnail") or {}
        terms = page.get("terms") or {}
        try:
            return PageInfo(
                page_id=int(page_id),
                title=page.get("title") or title,
                extract=page.get("extract") or "",
                thumbnail=thumbnail.get("source", "") if isinstance(thumbnail, dict) else "",
                terms=terms if isinstance(terms, dict) else {},
                url=f"{self._page_url_base}{page_id}",
            )
        except (TypeError, ValueError) as exc:
            # pydantic's ValidationError is a ValueError subclass.
            raise MalformedResponseError(
                message=f"Page entry for '{title}' has unexpected field types: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

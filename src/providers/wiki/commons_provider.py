"""Wikimedia Commons image provider implementing IImageProvider.

Runs a ``generator=search`` query with ``prop=imageinfo`` and returns the
first candidate that is a raster photo: ``.svg`` files and locator maps
are skipped because they render poorly in a photo slot.  Any failure
returns an empty string, never an exception.
"""

from __future__ import annotations

import math
from typing import Any

import httpx
import structlog

from src.interfaces.image_provider import IImageProvider
from src.providers.wiki.mediawiki import fetch_mediawiki_json
from src.services.image_resolver import is_usable_photo
from src.utils.errors import MalformedResponseError, SourceUnavailableError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_API_URL = "https://commons.wikimedia.org/w/api.php"
_DEFAULT_USER_AGENT = "wildfacts/0.1.0 (https://github.com/wildfacts/wildfacts)"


class CommonsImageProvider(IImageProvider):
    """Image search against Wikimedia Commons.

    The ``httpx.AsyncClient`` is injected for testability.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_url: str = _DEFAULT_API_URL,
        timeout: float = 5.0,
        max_candidates: int = 5,
        user_agent: str = _DEFAULT_USER_AGENT,
    ) -> None:
        self._http = http_client
        self._api_url = api_url
        self._timeout = timeout
        self._max_candidates = max_candidates
        self._user_agent = user_agent

    async def fetch_image(self, query: str) -> str:
        """Return the first qualifying image URL for *query*, or ``""``."""
        query = (query or "").strip()
        if not query:
            return ""

        params = {
            "action": "query",
            "generator": "search",
            "gsrsearch": query,
            "gsrlimit": self._max_candidates,
            "prop": "imageinfo",
            "iiprop": "url",
        }
        try:
            data = await fetch_mediawiki_json(
                self._http,
                self._api_url,
                params,
                timeout=self._timeout,
                user_agent=self._user_agent,
                provider_name=self.get_provider_name(),
            )
        except (SourceUnavailableError, MalformedResponseError) as exc:
            logger.warning("commons_image_search_failed", query=query, error=str(exc))
            return ""

        for url in self._candidate_urls(data):
            if is_usable_photo(url):
                logger.debug("commons_image_found", query=query, url=url)
                return url

        logger.debug("commons_image_not_found", query=query)
        return ""

    def get_provider_name(self) -> str:
        return "commons"

    def is_available(self) -> bool:
        """Commons needs no API key."""
        return True

    @staticmethod
    def _candidate_urls(data: dict[str, Any]) -> list[str]:
        """Extract image URLs from ``query.pages`` in search-rank order.

        Generator results are keyed by page id, which says nothing about
        relevance; each page carries its rank in an ``index`` field.
        """
        query = data.get("query")
        pages = query.get("pages") if isinstance(query, dict) else None
        if not isinstance(pages, dict):
            return []

        ranked = sorted(
            (p for p in pages.values() if isinstance(p, dict)),
            key=_search_rank,
        )
        urls: list[str] = []
        for page in ranked:
            info = page.get("imageinfo")
            if isinstance(info, list) and info and isinstance(info[0], dict):
                urls.append(str(info[0].get("url") or ""))
        return urls


def _search_rank(page: dict[str, Any]) -> float:
    """Numeric ``index`` of a generator page; unranked pages sort last."""
    try:
        return float(page.get("index", math.inf))
    except (TypeError, ValueError):
        return math.inf

"""Unit tests for the remote source adapters.

HTTP is stubbed with ``httpx.MockTransport`` so the real request building
(params, headers) and response decoding paths run without a network.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from src.models.animal import PageInfo
from src.providers.animal.zoo_animal_provider import ZooAnimalProvider
from src.providers.cache.memory_cache import MemoryCacheStore
from src.providers.wiki.commons_provider import CommonsImageProvider
from src.providers.wiki.wikipedia_provider import WikipediaProvider
from src.utils.errors import SourceUnavailableError

WIKI_API = "https://en.wikipedia.org/w/api.php"
COMMONS_API = "https://commons.wikimedia.org/w/api.php"
DAY = 24 * 60 * 60


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _json(body: Any, status: int = 200) -> httpx.Response:
    return httpx.Response(status, json=body)


def _page_body(title: str = "Lion", page_id: int = 36896, **extra: Any) -> dict[str, Any]:
    page = {
        "pageid": page_id,
        "ns": 0,
        "title": title,
        "extract": "The lion is a large cat.",
        "thumbnail": {"source": "https://upload.wikimedia.org/lion.jpg", "width": 800},
        "terms": {"label": ["lion"], "description": ["species of big cat"]},
    }
    page.update(extra)
    return {"batchcomplete": "", "query": {"pages": {str(page_id): page}}}


class _Clock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


# ======================================================================
# Zoo Animal API
# ======================================================================


class TestZooAnimalProvider:
    @pytest.mark.asyncio
    async def test_fetch_random_success(self, zoo_record: dict[str, Any]) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _json(zoo_record)

        async with _client(handler) as client:
            provider = ZooAnimalProvider(client, url="https://zoo.test/animals/rand")
            record = await provider.fetch_random()

        assert record["name"] == "Red Panda"
        assert str(seen[0].url) == "https://zoo.test/animals/rand"
        assert "wildfacts" in seen[0].headers["User-Agent"]

    @pytest.mark.asyncio
    async def test_server_error_raises_unavailable(self) -> None:
        async with _client(lambda r: httpx.Response(503)) as client:
            provider = ZooAnimalProvider(client, url="https://zoo.test/animals/rand")
            with pytest.raises(SourceUnavailableError) as exc_info:
                await provider.fetch_random()
        assert exc_info.value.provider_name == "zoo_animal_api"

    @pytest.mark.asyncio
    async def test_connection_error_raises_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        async with _client(handler) as client:
            provider = ZooAnimalProvider(client, url="https://zoo.test/animals/rand")
            with pytest.raises(SourceUnavailableError):
                await provider.fetch_random()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>asleep</html>"),
            httpx.Response(200, json=["not", "an", "object"]),
            httpx.Response(200, json={"habitat": "Forest"}),
        ],
    )
    async def test_unusable_body_raises_unavailable(self, response: httpx.Response) -> None:
        async with _client(lambda r: response) as client:
            provider = ZooAnimalProvider(client, url="https://zoo.test/animals/rand")
            with pytest.raises(SourceUnavailableError):
                await provider.fetch_random()

    @pytest.mark.asyncio
    async def test_latin_name_only_is_accepted(self) -> None:
        async with _client(lambda r: _json({"latin_name": "Ailurus fulgens"})) as client:
            provider = ZooAnimalProvider(client, url="https://zoo.test/animals/rand")
            record = await provider.fetch_random()
        assert record["latin_name"] == "Ailurus fulgens"

    def test_provider_metadata(self) -> None:
        provider = ZooAnimalProvider(httpx.AsyncClient(), url="")
        assert provider.get_provider_name() == "zoo_animal_api"
        assert provider.is_available() is False


# ======================================================================
# Wikipedia search
# ======================================================================


class TestWikipediaSearch:
    @pytest.mark.asyncio
    async def test_search_returns_hits_in_order(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _json({
                "query": {
                    "search": [
                        {"title": "Lion", "pageid": 36896, "snippet": "big cat"},
                        {"title": "Asiatic lion", "pageid": 1},
                        {"title": "Mountain lion", "pageid": 2},
                    ]
                }
            })

        async with _client(handler) as client:
            provider = WikipediaProvider(client, MemoryCacheStore(), api_url=WIKI_API)
            hits = await provider.search("lion", limit=2)

        assert [h.title for h in hits] == ["Lion", "Asiatic lion"]
        assert hits[0].page_id == 36896
        params = seen[0].url.params
        assert params["list"] == "search"
        assert params["srsearch"] == "lion"
        assert params["srlimit"] == "2"
        assert params["format"] == "json"

    @pytest.mark.asyncio
    async def test_blank_query_skips_network(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        async with _client(handler) as client:
            provider = WikipediaProvider(client, MemoryCacheStore(), api_url=WIKI_API)
            assert await provider.search("   ") == []
            assert await provider.search("lion", limit=0) == []

    @pytest.mark.asyncio
    async def test_transport_error_returns_empty(self) -> None:
        async with _client(lambda r: httpx.Response(500)) as client:
            provider = WikipediaProvider(client, MemoryCacheStore(), api_url=WIKI_API)
            assert await provider.search("lion") == []

    @pytest.mark.asyncio
    async def test_entries_without_title_skipped(self) -> None:
        body = {"query": {"search": [{"pageid": 1}, {"title": ""}, {"title": "Lion"}]}}
        async with _client(lambda r: _json(body)) as client:
            provider = WikipediaProvider(client, MemoryCacheStore(), api_url=WIKI_API)
            hits = await provider.search("lion")
        assert [h.title for h in hits] == ["Lion"]

    @pytest.mark.asyncio
    async def test_missing_query_block_returns_empty(self) -> None:
        async with _client(lambda r: _json({"batchcomplete": ""})) as client:
            provider = WikipediaProvider(client, MemoryCacheStore(), api_url=WIKI_API)
            assert await provider.search("lion") == []


# ======================================================================
# Wikipedia page info + cache
# ======================================================================


class TestWikipediaPageInfo:
    @pytest.mark.asyncio
    async def test_page_info_mapped(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _json(_page_body())

        async with _client(handler) as client:
            provider = WikipediaProvider(client, MemoryCacheStore(), api_url=WIKI_API)
            page = await provider.get_page_info("Lion")

        assert page == PageInfo(
            page_id=36896,
            title="Lion",
            extract="The lion is a large cat.",
            thumbnail="https://upload.wikimedia.org/lion.jpg",
            terms={"label": ["lion"], "description": ["species of big cat"]},
            url="https://en.wikipedia.org/?curid=36896",
        )
        params = seen[0].url.params
        assert params["titles"] == "Lion"
        assert params["prop"] == "extracts|pageimages|pageterms"
        assert params["exintro"] == "1"
        assert params["explaintext"] == "1"
        assert params["piprop"] == "thumbnail"
        assert params["pithumbsize"] == "800"

    @pytest.mark.asyncio
    async def test_page_without_thumbnail(self) -> None:
        body = _page_body()
        del body["query"]["pages"]["36896"]["thumbnail"]
        async with _client(lambda r: _json(body)) as client:
            provider = WikipediaProvider(client, MemoryCacheStore(), api_url=WIKI_API)
            page = await provider.get_page_info("Lion")
        assert page is not None
        assert page.thumbnail == ""

    @pytest.mark.asyncio
    async def test_fresh_entry_served_from_cache(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return _json(_page_body())

        clock = _Clock()
        async with _client(handler) as client:
            provider = WikipediaProvider(client, MemoryCacheStore(), api_url=WIKI_API, clock=clock)
            first = await provider.get_page_info("Lion")
            clock.now += 29 * DAY
            second = await provider.get_page_info("Lion")

        assert calls == 1
        assert first == second

    @pytest.mark.asyncio
    async def test_stale_entry_refetched(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return _json(_page_body(extract=f"revision {calls}"))

        clock = _Clock()
        async with _client(handler) as client:
            provider = WikipediaProvider(client, MemoryCacheStore(), api_url=WIKI_API, clock=clock)
            await provider.get_page_info("Lion")
            clock.now += 31 * DAY
            page = await provider.get_page_info("Lion")

        assert calls == 2
        assert page is not None
        assert page.extract == "revision 2"

    @pytest.mark.asyncio
    async def test_missing_page_cached_as_absent(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return _json({"query": {"pages": {"-1": {"ns": 0, "title": "Nopeasaurus", "missing": ""}}}})

        cache = MemoryCacheStore()
        async with _client(handler) as client:
            provider = WikipediaProvider(client, cache, api_url=WIKI_API, clock=_Clock())
            assert await provider.get_page_info("Nopeasaurus") is None
            assert await provider.get_page_info("Nopeasaurus") is None

        assert calls == 1
        entry = await cache.get("Nopeasaurus")
        assert entry is not None
        assert entry.payload is None

    @pytest.mark.asyncio
    async def test_transport_error_not_cached(self) -> None:
        responses = [httpx.Response(502), _json(_page_body())]

        cache = MemoryCacheStore()
        async with _client(lambda r: responses.pop(0)) as client:
            provider = WikipediaProvider(client, cache, api_url=WIKI_API, clock=_Clock())
            assert await provider.get_page_info("Lion") is None
            assert await cache.get("Lion") is None
            page = await provider.get_page_info("Lion")

        assert page is not None
        assert page.title == "Lion"

    @pytest.mark.asyncio
    async def test_malformed_body_returns_none(self) -> None:
        body = {"query": {"pages": {"1": {"title": "Lion"}}}}
        cache = MemoryCacheStore()
        async with _client(lambda r: _json(body)) as client:
            provider = WikipediaProvider(client, cache, api_url=WIKI_API)
            assert await provider.get_page_info("Lion") is None
        assert await cache.get("Lion") is None

    @pytest.mark.asyncio
    async def test_blank_title_returns_none(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        async with _client(handler) as client:
            provider = WikipediaProvider(client, MemoryCacheStore(), api_url=WIKI_API)
            assert await provider.get_page_info("  ") is None


# ======================================================================
# Wikimedia Commons
# ======================================================================


def _commons_body(*pages: tuple[int, str]) -> dict[str, Any]:
    """Build a generator=search body; page ids deliberately disagree with rank."""
    return {
        "query": {
            "pages": {
                str(1000 - index): {
                    "pageid": 1000 - index,
                    "index": index,
                    "title": f"File:{url.rsplit('/', 1)[-1]}",
                    "imageinfo": [{"url": url}],
                }
                for index, url in pages
            }
        }
    }


class TestCommonsImageProvider:
    @pytest.mark.asyncio
    async def test_first_raster_candidate_by_rank(self) -> None:
        seen: list[httpx.Request] = []
        body = _commons_body(
            (3, "https://upload.wikimedia.org/third.jpg"),
            (1, "https://upload.wikimedia.org/Lion_range.svg"),
            (2, "https://upload.wikimedia.org/second.jpg"),
        )

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _json(body)

        async with _client(handler) as client:
            provider = CommonsImageProvider(client, api_url=COMMONS_API, max_candidates=5)
            url = await provider.fetch_image("Lion")

        assert url == "https://upload.wikimedia.org/second.jpg"
        params = seen[0].url.params
        assert params["generator"] == "search"
        assert params["gsrsearch"] == "Lion"
        assert params["gsrlimit"] == "5"
        assert params["prop"] == "imageinfo"
        assert params["iiprop"] == "url"

    @pytest.mark.asyncio
    async def test_locator_maps_skipped(self) -> None:
        body = _commons_body(
            (1, "https://upload.wikimedia.org/Kenya_locator_map.png"),
            (2, "https://upload.wikimedia.org/lion.jpg"),
        )
        async with _client(lambda r: _json(body)) as client:
            provider = CommonsImageProvider(client, api_url=COMMONS_API)
            assert await provider.fetch_image("Lion") == "https://upload.wikimedia.org/lion.jpg"

    @pytest.mark.asyncio
    async def test_only_vectors_returns_empty(self) -> None:
        body = _commons_body((1, "https://upload.wikimedia.org/a.svg"))
        async with _client(lambda r: _json(body)) as client:
            provider = CommonsImageProvider(client, api_url=COMMONS_API)
            assert await provider.fetch_image("Lion") == ""

    @pytest.mark.asyncio
    async def test_no_results_returns_empty(self) -> None:
        async with _client(lambda r: _json({"batchcomplete": ""})) as client:
            provider = CommonsImageProvider(client, api_url=COMMONS_API)
            assert await provider.fetch_image("Lion") == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "pages",
        [
            {"1": {"index": 1, "imageinfo": {"url": "https://upload.wikimedia.org/x.jpg"}}},
            {"1": {"index": 1, "imageinfo": "https://upload.wikimedia.org/x.jpg"}},
            {"1": {"index": 1, "imageinfo": ["https://upload.wikimedia.org/x.jpg"]}},
            {"1": "not a page"},
        ],
    )
    async def test_malformed_imageinfo_returns_empty(self, pages: dict[str, Any]) -> None:
        body = {"query": {"pages": pages}}
        async with _client(lambda r: _json(body)) as client:
            provider = CommonsImageProvider(client, api_url=COMMONS_API)
            assert await provider.fetch_image("lion") == ""

    @pytest.mark.asyncio
    async def test_non_numeric_index_sorts_last(self) -> None:
        body = {
            "query": {
                "pages": {
                    "1": {"index": "first", "imageinfo": [{"url": "https://upload.wikimedia.org/a.jpg"}]},
                    "2": {"index": None, "imageinfo": [{"url": "https://upload.wikimedia.org/b.jpg"}]},
                    "3": {"index": "2", "imageinfo": [{"url": "https://upload.wikimedia.org/c.jpg"}]},
                }
            }
        }
        async with _client(lambda r: _json(body)) as client:
            provider = CommonsImageProvider(client, api_url=COMMONS_API)
            assert await provider.fetch_image("lion") == "https://upload.wikimedia.org/c.jpg"

    @pytest.mark.asyncio
    async def test_error_returns_empty(self) -> None:
        async with _client(lambda r: httpx.Response(500, content=json.dumps({}))) as client:
            provider = CommonsImageProvider(client, api_url=COMMONS_API)
            assert await provider.fetch_image("Lion") == ""

    @pytest.mark.asyncio
    async def test_blank_query_returns_empty(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        async with _client(handler) as client:
            provider = CommonsImageProvider(client, api_url=COMMONS_API)
            assert await provider.fetch_image("") == ""

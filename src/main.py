"""wildfacts composition root.

Wires together every provider and the resolution service from
:class:`~src.config.settings.Settings`.  Consumers either call
:func:`build_wildlife_service` with their own ``httpx.AsyncClient`` or use
the :func:`wildlife_service_session` context manager, which owns the client
and prepares the cache store.
"""

from __future__ import annotations

import random
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import structlog

from src.config.settings import Settings
from src.interfaces.cache_provider import ICacheStore
from src.providers.animal.zoo_animal_provider import ZooAnimalProvider
from src.providers.cache.memory_cache import MemoryCacheStore
from src.providers.cache.sqlite_cache import SQLiteCacheStore
from src.providers.wiki.commons_provider import CommonsImageProvider
from src.providers.wiki.wikipedia_provider import WikipediaProvider
from src.services.local_dataset import LocalDataset
from src.services.wildlife_service import WildlifeFactService
from src.utils.errors import ConfigurationError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Provider factories
# ---------------------------------------------------------------------------


def build_cache_store(app_settings: Settings) -> ICacheStore:
    """Select the page-info cache backend named by ``CACHE_BACKEND``."""
    backend = app_settings.cache_backend.strip().lower()
    if backend == "memory":
        return MemoryCacheStore(max_size=app_settings.memory_cache_max_entries)
    if backend == "sqlite":
        return SQLiteCacheStore(
            db_path=app_settings.cache_db_path,
            blob_key=app_settings.cache_key,
        )
    raise ConfigurationError(
        message=f"Unknown cache backend '{app_settings.cache_backend}' (expected sqlite or memory)",
        provider_name="cache",
    )


def build_wildlife_service(
    app_settings: Settings,
    http_client: httpx.AsyncClient,
    *,
    cache: ICacheStore | None = None,
    dataset: LocalDataset | None = None,
    rng: random.Random | None = None,
) -> WildlifeFactService:
    """Construct the resolution service and all of its sources.

    Parameters
    ----------
    app_settings:
        Resolved settings.
    http_client:
        Shared client for every remote source.
    cache:
        Page-info cache; built from settings when omitted.
    dataset:
        Local fallback dataset; loaded from ``DATASET_PATH`` (or the
        bundled file) when omitted.
    rng:
        Random generator for record selection.

    Raises
    ------
    ConfigurationError
        If the cache backend is unknown or the dataset cannot be loaded.
    """
    cache = cache if cache is not None else build_cache_store(app_settings)
    dataset = dataset if dataset is not None else LocalDataset.from_file(
        app_settings.dataset_path or None
    )

    random_source = ZooAnimalProvider(
        http_client=http_client,
        url=app_settings.random_animal_url,
        timeout=app_settings.request_timeout,
        user_agent=app_settings.user_agent,
    )
    encyclopedia = WikipediaProvider(
        http_client=http_client,
        cache=cache,
        api_url=app_settings.wikipedia_api_url,
        timeout=app_settings.request_timeout,
        ttl_seconds=app_settings.cache_ttl_seconds,
        thumbnail_size=app_settings.thumbnail_size,
        user_agent=app_settings.user_agent,
    )
    images = CommonsImageProvider(
        http_client=http_client,
        api_url=app_settings.commons_api_url,
        timeout=app_settings.request_timeout,
        max_candidates=app_settings.commons_limit,
        user_agent=app_settings.user_agent,
    )

    _logger.info(
        "wildlife_service_built",
        cache=cache.get_provider_name(),
        dataset_records=len(dataset),
        random_source_blocked=app_settings.random_source_blocked,
    )

    return WildlifeFactService(
        encyclopedia=encyclopedia,
        image_source=images,
        dataset=dataset,
        random_source=random_source,
        skip_random_source=app_settings.random_source_blocked,
        search_limit=app_settings.search_limit,
        fallback_query=app_settings.fallback_query,
        max_concurrent_lookups=app_settings.max_concurrent_lookups,
        rng=rng,
    )


@asynccontextmanager
async def wildlife_service_session(
    app_settings: Settings | None = None,
) -> AsyncIterator[WildlifeFactService]:
    """Yield a ready service whose HTTP client is closed on exit."""
    app_settings = app_settings or Settings()
    cache = build_cache_store(app_settings)
    if isinstance(cache, SQLiteCacheStore):
        await cache.initialize()

    async with httpx.AsyncClient(timeout=app_settings.request_timeout) as http_client:
        yield build_wildlife_service(app_settings, http_client, cache=cache)

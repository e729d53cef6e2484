"""Multi-source resolution pipeline for wildlife facts.

Architecture role: **Facade / Fallback orchestrator**
------------------------------------------------------
Consumers (the CLI, or any presentation layer) call the public coroutines
on :class:`WildlifeFactService` and always get back a canonical record, a
list of them, or ``None``.  Behind that surface the service decides which
source to ask, in what order, and how to merge partial answers:

- **search_species** fans out one task per Wikipedia search hit.  Each task
  fetches the page summary and a Commons photo *in parallel*, then picks
  the display image (thumbnail unless it is missing or a vector icon).
  Per-title failures are isolated; the call joins on every task and keeps
  Wikipedia's relevance order.
- **get_random_fact** walks an ordered list of strategies (random-animal
  API → random Wikipedia result for a generic query → random local record)
  and stops at the first that yields a record.
- **get_random_by_category** and **search_by_name** prefer a narrower
  source and fall back to the broader operations above.

Every strategy returns a :class:`Resolution` instead of raising, so the
fallback order is data, not nested ``try`` blocks.  Source failures never
propagate past this class.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable, Sequence

import structlog

from src.interfaces.encyclopedia_provider import IEncyclopediaProvider
from src.interfaces.image_provider import IImageProvider
from src.interfaces.random_animal_provider import IRandomAnimalProvider
from src.models.animal import CanonicalAnimal
from src.models.resolution import Resolution
from src.services.image_resolver import resolve_image
from src.services.local_dataset import LocalDataset
from src.services.normalizer import (
    SOURCE_LOCAL,
    SOURCE_WIKIPEDIA,
    SOURCE_ZOO,
    finalize_batch,
    from_local,
    from_page_info,
    from_zoo_record,
)
from src.utils.concurrency import throttled_gather
from src.utils.errors import SourceUnavailableError
from src.utils.logging import get_logger

Strategy = tuple[str, Callable[[], Awaitable[Resolution]]]


class WildlifeFactService:
    """Resolves wildlife facts from remote sources with a local fallback.

    All sources are injected, following the adapter pattern; the service
    holds no state of its own beyond a semaphore and a random generator.

    Parameters
    ----------
    encyclopedia:
        Wikipedia search and page-info source.
    image_source:
        Commons photo search, used when a page thumbnail is unusable.
    dataset:
        Bundled local records; the final fallback.
    random_source:
        Random-animal API.  ``None`` disables that stage.
    skip_random_source:
        Start the random-fact chain at the Wikipedia stage, for hosts where
        the random-animal API is known to be blocked.
    search_limit:
        Number of Wikipedia titles resolved per species search.
    fallback_query:
        Generic query whose results stand in for a random animal.
    max_concurrent_lookups:
        Upper bound on titles resolved at the same time.
    rng:
        Source of randomness; injected for reproducible tests.
    """

    def __init__(
        self,
        encyclopedia: IEncyclopediaProvider,
        image_source: IImageProvider,
        dataset: LocalDataset,
        random_source: IRandomAnimalProvider | None = None,
        *,
        skip_random_source: bool = False,
        search_limit: int = 6,
        fallback_query: str = "animal",
        max_concurrent_lookups: int = 8,
        rng: random.Random | None = None,
    ) -> None:
        self._encyclopedia = encyclopedia
        self._images = image_source
        self._dataset = dataset
        self._random_source = random_source
        self._skip_random_source = skip_random_source
        self._search_limit = search_limit
        self._fallback_query = fallback_query
        self._semaphore = asyncio.Semaphore(max(1, max_concurrent_lookups))
        self._rng = rng or random.Random()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # -- Public API -----------------------------------------------------------

    async def search_species(self, query: str) -> list[CanonicalAnimal]:
        """Search Wikipedia and resolve every hit into a canonical record.

        Parameters
        ----------
        query:
            Free-text species query.  Blank queries return ``[]`` without
            touching the network.

        Returns
        -------
        list[CanonicalAnimal]
            One record per hit whose page exists, in search-relevance order.
        """
        query = (query or "").strip()
        if not query:
            return []

        hits = await self._encyclopedia.search(query, self._search_limit)
        if not hits:
            self._logger.info("species_search_empty", query=query)
            return []

        outcomes = await throttled_gather(
            [self._resolve_title(hit.title) for hit in hits],
            semaphore=self._semaphore,
        )

        animals: list[CanonicalAnimal | None] = []
        for hit, outcome in zip(hits, outcomes):
            if isinstance(outcome, BaseException):
                self._logger.warning(
                    "species_title_failed", query=query, title=hit.title, error=str(outcome)
                )
                continue
            animals.append(outcome)

        results = finalize_batch(animals)
        self._logger.info(
            "species_search_complete", query=query, hits=len(hits), results=len(results)
        )
        return results

    async def get_species_by_title(self, title: str) -> CanonicalAnimal | None:
        """Resolve one exact Wikipedia title, or ``None`` if the page is absent."""
        title = (title or "").strip()
        if not title:
            return None
        return await self._resolve_title(title)

    async def get_random_fact(self) -> CanonicalAnimal | None:
        """Return a random animal from the first source that can supply one.

        Returns ``None`` only when every remote stage fails *and* the local
        dataset is empty.
        """
        strategies: list[Strategy] = []
        if self._skip_random_source:
            self._logger.debug("random_source_skipped", reason="blocked_by_configuration")
        else:
            strategies.append((SOURCE_ZOO, self._from_random_source))
        strategies.append((SOURCE_WIKIPEDIA, self._from_wikipedia_sample))
        strategies.append((SOURCE_LOCAL, self._from_local_dataset))
        return await self._first_success("random_fact", strategies)

    async def get_random_by_category(self, category: str) -> CanonicalAnimal | None:
        """Return a random local record of *category* (case-insensitive).

        When the dataset has no such category the request is answered by
        :meth:`get_random_fact` instead.
        """
        matches = self._dataset.filter_by_category(category)
        if not matches:
            self._logger.info("category_not_found", category=category)
            return await self.get_random_fact()

        position, local = self._rng.choice(matches)
        animal = from_local(local, position)
        if animal is None:
            return await self.get_random_fact()
        return await self._backfill_image(animal, local.common_names)

    async def search_by_name(self, query: str) -> list[CanonicalAnimal]:
        """Search live sources first, then the local dataset by name substring."""
        query = (query or "").strip()
        if not query:
            return []

        live = await self.search_species(query)
        if live:
            return live

        matches = self._dataset.search(query)
        self._logger.info("name_search_local_fallback", query=query, matches=len(matches))
        if not matches:
            return []

        pairs = [(from_local(local, position), local.common_names) for position, local in matches]
        candidates = [(animal, names) for animal, names in pairs if animal is not None]
        backfilled = await asyncio.gather(
            *(self._backfill_image(animal, names) for animal, names in candidates),
            return_exceptions=True,
        )

        animals: list[CanonicalAnimal] = []
        for (original, _names), outcome in zip(candidates, backfilled):
            if isinstance(outcome, BaseException):
                self._logger.warning(
                    "image_backfill_failed", name=original.name, error=str(outcome)
                )
                animals.append(original)
            else:
                animals.append(outcome)
        return finalize_batch(animals)

    # -- Fallback chain -------------------------------------------------------

    async def _first_success(
        self, operation: str, strategies: Sequence[Strategy]
    ) -> CanonicalAnimal | None:
        """Run *strategies* in order and return the first successful record."""
        for source, strategy in strategies:
            try:
                resolution = await strategy()
            except Exception as exc:  # noqa: BLE001
                self._logger.warning(
                    "resolution_strategy_crashed",
                    operation=operation,
                    source=source,
                    error=str(exc),
                    exc_info=True,
                )
                resolution = Resolution.failed(source, str(exc))

            if resolution.ok:
                self._logger.info("resolution_succeeded", operation=operation, source=source)
                return resolution.animal

            self._logger.info(
                "resolution_fallthrough",
                operation=operation,
                source=source,
                status=resolution.status.value,
                error=resolution.error,
            )

        self._logger.error("resolution_exhausted", operation=operation)
        return None

    async def _from_random_source(self) -> Resolution:
        if self._random_source is None:
            return Resolution.absent(SOURCE_ZOO)
        try:
            record = await self._random_source.fetch_random()
        except SourceUnavailableError as exc:
            return Resolution.failed(SOURCE_ZOO, str(exc))

        animal = from_zoo_record(record)
        if animal is None:
            return Resolution.failed(SOURCE_ZOO, "record has no usable name")
        return Resolution.success(SOURCE_ZOO, await self._backfill_image(animal))

    async def _from_wikipedia_sample(self) -> Resolution:
        results = await self.search_species(self._fallback_query)
        if not results:
            return Resolution.absent(SOURCE_WIKIPEDIA)
        return Resolution.success(SOURCE_WIKIPEDIA, self._rng.choice(results))

    async def _from_local_dataset(self) -> Resolution:
        entries = self._dataset.entries()
        if not entries:
            return Resolution.absent(SOURCE_LOCAL)
        position, local = self._rng.choice(entries)
        animal = from_local(local, position)
        if animal is None:
            return Resolution.absent(SOURCE_LOCAL)
        return Resolution.success(
            SOURCE_LOCAL, await self._backfill_image(animal, local.common_names)
        )

    # -- Per-title resolution -------------------------------------------------

    async def _resolve_title(self, title: str) -> CanonicalAnimal | None:
        """Fetch page info and a Commons photo for *title* concurrently."""
        page, commons_image = await asyncio.gather(
            self._encyclopedia.get_page_info(title),
            self._images.fetch_image(title),
            return_exceptions=True,
        )
        if isinstance(page, BaseException):
            self._logger.warning("page_info_failed", title=title, error=str(page))
            return None
        if page is None:
            return None
        if isinstance(commons_image, BaseException):
            self._logger.warning("commons_image_failed", title=title, error=str(commons_image))
            commons_image = ""

        image = resolve_image(page.thumbnail, commons_image)
        return from_page_info(page, image)

    async def _backfill_image(
        self, animal: CanonicalAnimal, alternate_names: Sequence[str] = ()
    ) -> CanonicalAnimal:
        """Fill a missing image from the first species-search hit for the animal.

        The display name is tried first, then each alternate name in order.
        Returns *animal* unchanged when nothing turns up.
        """
        if animal.image:
            return animal

        for name in (animal.name, *alternate_names):
            results = await self.search_species(name)
            if results and results[0].image:
                self._logger.debug("image_backfilled", name=animal.name, via=name)
                return animal.model_copy(update={"image": results[0].image})

        self._logger.debug("image_backfill_empty", name=animal.name)
        return animal

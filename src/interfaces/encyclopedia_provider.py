"""Abstract base class for encyclopedia sources (Wikipedia).

Defines the two lookups the pipeline needs from an encyclopedia: a ranked
title search and an exact-title page-info lookup.  Neither raises; transport
problems degrade to an empty list or ``None``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.models.animal import PageInfo


@dataclass(frozen=True)
class SearchHit:
    """A single title returned by an encyclopedia search.

    Attributes
    ----------
    title:
        The page title, usable as input to ``get_page_info``.
    page_id:
        Source page id when the search result carries one.
    snippet:
        Optional highlighted text excerpt.
    """

    title: str
    page_id: int | None = None
    snippet: str | None = None


# Concrete implementation: WikipediaProvider (src/providers/wiki/)
class IEncyclopediaProvider(ABC):
    """Contract for encyclopedia search and page-info lookups."""

    @abstractmethod
    async def search(self, query: str, limit: int = 5) -> list[SearchHit]:
        """Return up to *limit* hits for *query* in relevance order.

        An empty query returns ``[]`` without contacting the source; so does
        any transport error.
        """

    @abstractmethod
    async def get_page_info(self, title: str) -> PageInfo | None:
        """Return page info for the exact *title*, or ``None`` if absent.

        Implementations consult their cache first and record both found and
        definitively-missing pages.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this source."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the source is configured for use."""

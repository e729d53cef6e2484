"""Abstract base class for image-search sources (Wikimedia Commons)."""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: CommonsImageProvider (src/providers/wiki/)
class IImageProvider(ABC):
    """Contract for services that find a photo URL for a free-text query."""

    @abstractmethod
    async def fetch_image(self, query: str) -> str:
        """Return the first suitable image URL for *query*.

        Returns an empty string when nothing qualifies or the lookup fails.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this source."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the source is configured for use."""

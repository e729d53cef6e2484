"""Abstract base class for random-animal sources.

A random-animal source returns one arbitrary animal record per call.  The
raw record is source-specific; mapping it to a canonical record is the
normalizer's job.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


# Concrete implementation: ZooAnimalProvider (src/providers/animal/)
class IRandomAnimalProvider(ABC):
    """Contract for services that hand out a random animal record."""

    @abstractmethod
    async def fetch_random(self) -> dict[str, Any]:
        """Fetch one random animal record.

        Returns
        -------
        dict[str, Any]
            The raw, source-specific record.

        Raises
        ------
        src.utils.errors.SourceUnavailableError
            On network error, timeout, non-2xx status, or a body that is not
            a JSON object.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this source."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the source is configured for use."""

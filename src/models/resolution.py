"""Tagged result type for the pipeline's fallback chains.

Each stage of a fallback chain (random-animal API, Wikipedia sample, local
dataset, ...) returns a :class:`Resolution` instead of raising.  The
pipeline walks its strategies in order and stops at the first
``SUCCESS``; ``ABSENT`` and ``FAILED`` both mean "try the next one", the
difference only matters for logging.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.models.animal import CanonicalAnimal


class ResolutionStatus(str, Enum):  # noqa: UP042
    """Outcome of a single resolution strategy."""

    SUCCESS = "SUCCESS"  # produced a usable record
    ABSENT = "ABSENT"    # ran fine, but the source had nothing to offer
    FAILED = "FAILED"    # the source errored; the error text is attached


@dataclass(frozen=True)
class Resolution:
    """Result of one strategy in a fallback chain.

    Attributes
    ----------
    status:
        Whether the strategy succeeded, found nothing, or failed.
    source:
        Short identifier of the strategy (e.g. ``"zoo_animal_api"``).
    animal:
        The resolved record; only set when ``status`` is ``SUCCESS``.
    error:
        Human-readable failure description for ``FAILED`` results.
    """

    status: ResolutionStatus
    source: str
    animal: CanonicalAnimal | None = None
    error: str | None = None

    @classmethod
    def success(cls, source: str, animal: CanonicalAnimal) -> Resolution:
        return cls(status=ResolutionStatus.SUCCESS, source=source, animal=animal)

    @classmethod
    def absent(cls, source: str) -> Resolution:
        return cls(status=ResolutionStatus.ABSENT, source=source)

    @classmethod
    def failed(cls, source: str, error: str) -> Resolution:
        return cls(status=ResolutionStatus.FAILED, source=source, error=error)

    @property
    def ok(self) -> bool:
        return self.status is ResolutionStatus.SUCCESS and self.animal is not None

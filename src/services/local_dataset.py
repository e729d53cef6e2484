"""Bundled local animal dataset — the last resort of every fallback chain.

The dataset ships with the package (``src/data/animals.json``) and is read
once at startup.  A missing or unreadable file is a configuration error;
individual records that fail validation or have no name are skipped with a
warning so one bad entry cannot disable the fallback.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from src.models.animal import LocalAnimal
from src.utils.errors import ConfigurationError
from src.utils.logging import get_logger

BUNDLED_DATASET_PATH = Path(__file__).resolve().parent.parent / "data" / "animals.json"


class LocalDataset:
    """Read-only, in-memory collection of :class:`LocalAnimal` records.

    Lookups return ``(position, animal)`` pairs; the position is stable for
    the lifetime of the dataset and is used to build record ids.
    """

    def __init__(self, animals: Sequence[LocalAnimal]) -> None:
        self._animals: tuple[LocalAnimal, ...] = tuple(a for a in animals if a.name)

    @classmethod
    def from_file(cls, path: str | Path | None = None) -> LocalDataset:
        """Load the dataset from *path*, or the bundled file when ``None``.

        Raises
        ------
        ConfigurationError
            If the file cannot be read or is not a JSON array.
        """
        dataset_path = Path(path) if path else BUNDLED_DATASET_PATH
        logger = get_logger(__name__)
        try:
            raw = json.loads(dataset_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigurationError(
                message=f"Cannot load local dataset from {dataset_path}: {exc}",
                provider_name="local_dataset",
            ) from exc

        if not isinstance(raw, list):
            raise ConfigurationError(
                message=f"Local dataset {dataset_path} must be a JSON array",
                provider_name="local_dataset",
            )

        animals: list[LocalAnimal] = []
        for index, item in enumerate(raw):
            try:
                animal = LocalAnimal.model_validate(item)
            except ValidationError as exc:
                logger.warning("dataset_record_invalid", index=index, error=str(exc))
                continue
            if not animal.name:
                logger.warning("dataset_record_nameless", index=index)
                continue
            animals.append(animal)

        logger.info("dataset_loaded", path=str(dataset_path), records=len(animals))
        return cls(animals)

    # -- Queries -------------------------------------------------------------

    def entries(self) -> list[tuple[int, LocalAnimal]]:
        """All records with their positions."""
        return list(enumerate(self._animals))

    def filter_by_category(self, category: str) -> list[tuple[int, LocalAnimal]]:
        """Records whose category equals *category*, ignoring case."""
        wanted = (category or "").strip().lower()
        return [
            (position, animal)
            for position, animal in enumerate(self._animals)
            if animal.category.lower() == wanted
        ]

    def search(self, query: str) -> list[tuple[int, LocalAnimal]]:
        """Records whose name or any common name contains *query*, ignoring case."""
        needle = (query or "").strip().lower()
        if not needle:
            return []
        return [
            (position, animal)
            for position, animal in enumerate(self._animals)
            if needle in animal.name.lower()
            or any(needle in alt.lower() for alt in animal.common_names)
        ]

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        seen: dict[str, None] = {}
        for animal in self._animals:
            if animal.category:
                seen.setdefault(animal.category, None)
        return list(seen)

    def __len__(self) -> int:
        return len(self._animals)

"""Mapping from source-specific records to :class:`CanonicalAnimal`.

Each source describes an animal differently: the Zoo Animal API returns a
flat JSON record, Wikipedia a page summary, and the bundled dataset its own
schema.  The functions here turn each of them into the single canonical
shape and enforce the "every record has a name" rule by returning ``None``
for nameless input.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from src.models.animal import CanonicalAnimal, LocalAnimal, PageInfo

SOURCE_ZOO = "zoo_animal_api"
SOURCE_WIKIPEDIA = "wikipedia"
SOURCE_LOCAL = "local"


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def from_zoo_record(record: dict[str, Any]) -> CanonicalAnimal | None:
    """Map a Zoo Animal API record; the latin name stands in for a missing name."""
    name = _text(record.get("name")) or _text(record.get("latin_name"))
    if not name:
        return None

    geo_range = _text(record.get("geo_range"))
    return CanonicalAnimal(
        id=f"zoo-{name}",
        name=name,
        category=record.get("animal_type"),
        habitat=record.get("habitat"),
        diet=record.get("diet"),
        lifespan=record.get("lifespan"),
        image=record.get("image_link"),
        fact=f"{name} is found in {geo_range}." if geo_range else "",
        source=SOURCE_ZOO,
    )


def from_page_info(page: PageInfo, image: str) -> CanonicalAnimal | None:
    """Map a Wikipedia page summary plus its already-resolved display image."""
    if not page.title.strip():
        return None
    return CanonicalAnimal(
        id=str(page.page_id),
        name=page.title,
        fact=page.extract,
        image=image,
        source_url=page.url or None,
        source=SOURCE_WIKIPEDIA,
    )


def from_local(animal: LocalAnimal, position: int) -> CanonicalAnimal | None:
    """Map a bundled dataset entry; *position* keeps ids distinct within a batch."""
    if not animal.name:
        return None
    return CanonicalAnimal(
        id=f"local-{position}",
        name=animal.name,
        fact=animal.fact,
        image=animal.image,
        category=animal.category,
        habitat=animal.habitat,
        diet=animal.diet,
        lifespan=animal.lifespan,
        danger=animal.danger,
        source=SOURCE_LOCAL,
    )


def finalize_batch(animals: Iterable[CanonicalAnimal | None]) -> list[CanonicalAnimal]:
    """Drop nameless entries and make ids unique within the batch.

    Order is preserved.  A repeated id gets a ``-<n>`` suffix, so two
    Wikipedia hits resolving to the same page stay distinguishable.
    """
    seen: dict[str, int] = {}
    batch: list[CanonicalAnimal] = []
    for animal in animals:
        if animal is None or not animal.name:
            continue
        count = seen.get(animal.id, 0)
        seen[animal.id] = count + 1
        if count:
            animal = animal.model_copy(update={"id": f"{animal.id}-{count}"})
        batch.append(animal)
    return batch

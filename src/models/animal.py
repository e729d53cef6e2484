"""Animal domain models for the wildfacts resolution pipeline.

Defines Pydantic v2 models for every record shape that moves through the
pipeline.  All models use frozen config; "changes" (e.g. backfilling an
image) produce new instances via ``model_copy(update={...})``.

Record flow:
    - ``LocalAnimal``       — one entry of the bundled dataset
    - ``PageInfo``          — normalized subset of a Wikipedia page lookup
    - ``CachedPageInfo``    — a PageInfo (or "known absent") plus its timestamp
    - ``CanonicalAnimal``   — the only shape handed to consumers
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN = "Unknown"


def _blank_to_empty(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


# ---------------------------------------------------------------------------
# CanonicalAnimal: crosses the pipeline/consumer boundary.
# ---------------------------------------------------------------------------
class CanonicalAnimal(BaseModel):
    """Normalized animal record returned by every pipeline operation.

    Descriptive fields default to ``"Unknown"`` when a source leaves them
    out or blank.  ``name`` is required and must be non-empty; the
    normalizer filters nameless records before they get this far.

    ``source_url`` is only set for Wikipedia-derived records and serializes
    as ``sourceUrl`` when dumped ``by_alias``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str = Field(min_length=1)
    fact: str = ""
    image: str = ""
    category: str = UNKNOWN
    habitat: str = UNKNOWN
    diet: str = UNKNOWN
    lifespan: str = UNKNOWN
    danger: str = UNKNOWN
    source_url: str | None = Field(default=None, alias="sourceUrl")
    source: str = ""

    @field_validator("name", "fact", "image", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> str:
        return _blank_to_empty(value)

    @field_validator("category", "habitat", "diet", "lifespan", "danger", mode="before")
    @classmethod
    def _default_unknown(cls, value: Any) -> str:
        text = _blank_to_empty(value)
        return text or UNKNOWN

    @property
    def description(self) -> str:
        """Alias for ``fact``; Wikipedia records call their text a description."""
        return self.fact

    @property
    def has_image(self) -> bool:
        return bool(self.image)


# ---------------------------------------------------------------------------
# LocalAnimal: bundled dataset entry.
# ---------------------------------------------------------------------------
class LocalAnimal(BaseModel):
    """One record of the bundled, read-only local dataset."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    common_names: list[str] = Field(default_factory=list)
    category: str = ""
    habitat: str = ""
    diet: str = ""
    lifespan: str = ""
    image: str = ""
    fact: str = ""
    danger: str = ""

    @field_validator(
        "name", "category", "habitat", "diet", "lifespan", "image", "fact", "danger",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        return _blank_to_empty(value)

    @field_validator("common_names", mode="before")
    @classmethod
    def _clean_common_names(cls, value: Any) -> list[str]:
        if not value:
            return []
        if isinstance(value, str):
            value = [value]
        return [str(v).strip() for v in value if v and str(v).strip()]


# ---------------------------------------------------------------------------
# Wikipedia page info and its cache envelope.
# ---------------------------------------------------------------------------
class PageInfo(BaseModel):
    """Normalized subset of a Wikipedia page-info response.

    Attributes
    ----------
    page_id:
        Wikipedia's numeric page id.
    title:
        Canonical page title (may differ from the requested title after
        normalization or redirects).
    extract:
        Plain-text intro section.
    thumbnail:
        Page image thumbnail URL, or empty string.
    terms:
        Wikidata page terms (``label``, ``description``, ``alias`` lists).
    url:
        Canonical ``?curid=`` URL, used for attribution.
    """

    model_config = ConfigDict(frozen=True)

    page_id: int
    title: str
    extract: str = ""
    thumbnail: str = ""
    terms: dict[str, list[str]] = Field(default_factory=dict)
    url: str = ""


class CachedPageInfo(BaseModel):
    """A cache entry: the page info for a title, or ``None`` for "known absent"."""

    model_config = ConfigDict(frozen=True)

    timestamp: float
    payload: PageInfo | None = None

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        """Return ``True`` while the entry is younger than *ttl_seconds*."""
        return now - self.timestamp < ttl_seconds

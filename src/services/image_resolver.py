"""Image URL selection rules.

Wikipedia page thumbnails are sometimes vector icons (range maps, taxonomy
diagrams) that look wrong in a photo slot, and Commons search happily
returns locator maps.  These helpers decide which candidate URL a record
should display.
"""

from __future__ import annotations

from urllib.parse import urlsplit

_VECTOR_SUFFIXES = (".svg", ".svgz")
_LOCATOR_MAP_MARKER = "locator_map"


def _path_of(url: str) -> str:
    # Thumbnail URLs may carry query strings (?width=...); only the path matters.
    return urlsplit(url).path.lower() if url else ""


def is_vector_image(url: str) -> bool:
    """Return ``True`` if *url* points at a vector-graphics file."""
    return _path_of(url).endswith(_VECTOR_SUFFIXES)


def is_locator_map(url: str) -> bool:
    """Return ``True`` if *url* names a locator map (e.g. ``Kenya_locator_map.png``)."""
    return _LOCATOR_MAP_MARKER in (url or "").lower()


def is_usable_photo(url: str) -> bool:
    """A non-empty raster image that is not a locator map."""
    return bool(url) and not is_vector_image(url) and not is_locator_map(url)


def resolve_image(primary: str, fallback: str) -> str:
    """Pick the display image from a primary and a fallback candidate.

    The primary wins unless it is empty or a vector graphic, in which case
    the fallback is returned as-is (it may itself be empty).

    >>> resolve_image("foo.svg", "bar.png")
    'bar.png'
    >>> resolve_image("foo.png", "bar.png")
    'foo.png'
    >>> resolve_image("", "")
    ''
    """
    if not primary or is_vector_image(primary):
        return fallback or ""
    return primary

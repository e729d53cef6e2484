"""Shared pytest fixtures for the wildfacts test suite."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.encyclopedia_provider import IEncyclopediaProvider, SearchHit
from src.interfaces.image_provider import IImageProvider
from src.interfaces.random_animal_provider import IRandomAnimalProvider
from src.models.animal import LocalAnimal, PageInfo
from src.services.local_dataset import LocalDataset

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Sample records
# ---------------------------------------------------------------------------


def _make_page(
    title: str = "Lion",
    page_id: int = 36896,
    extract: str = "The lion is a large cat of the genus Panthera.",
    thumbnail: str = "https://upload.wikimedia.org/lion.jpg",
) -> PageInfo:
    return PageInfo(
        page_id=page_id,
        title=title,
        extract=extract,
        thumbnail=thumbnail,
        url=f"https://en.wikipedia.org/?curid={page_id}",
    )


@pytest.fixture
def sample_page() -> PageInfo:
    return _make_page()


@pytest.fixture
def zoo_record() -> dict[str, Any]:
    """A typical Zoo Animal API response body."""
    return {
        "name": "Red Panda",
        "latin_name": "Ailurus fulgens",
        "animal_type": "Mammal",
        "habitat": "Temperate forest",
        "diet": "Bamboo, fruit and eggs",
        "lifespan": "8",
        "geo_range": "Himalayas and southwestern China",
        "image_link": "https://example.org/red-panda.jpg",
    }


@pytest.fixture
def local_animals() -> list[LocalAnimal]:
    return [
        LocalAnimal(
            name="Lion",
            common_names=["Panthera leo"],
            category="Mammal",
            habitat="Savanna",
            diet="Carnivore",
            lifespan="10-14 years",
            fact="A lion's roar can be heard up to 8 kilometres away.",
            danger="High",
        ),
        LocalAnimal(
            name="Barn Owl",
            common_names=["Tyto alba"],
            category="Bird",
            fact="Barn owls swallow their prey whole.",
        ),
        LocalAnimal(
            name="Snow Leopard",
            category="Mammal",
            image="https://example.org/snow-leopard.jpg",
            fact="Snow leopards cannot roar.",
        ),
    ]


@pytest.fixture
def dataset(local_animals: list[LocalAnimal]) -> LocalDataset:
    return LocalDataset(local_animals)


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random generator."""
    return random.Random(1234)


# ---------------------------------------------------------------------------
# Source mocks
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_encyclopedia() -> MagicMock:
    """Encyclopedia mock with no hits and no pages by default."""
    mock = MagicMock(spec=IEncyclopediaProvider)
    mock.search = AsyncMock(return_value=[])
    mock.get_page_info = AsyncMock(return_value=None)
    mock.get_provider_name.return_value = "wikipedia"
    mock.is_available.return_value = True
    return mock


@pytest.fixture
def mock_image_source() -> MagicMock:
    mock = MagicMock(spec=IImageProvider)
    mock.fetch_image = AsyncMock(return_value="")
    mock.get_provider_name.return_value = "commons"
    mock.is_available.return_value = True
    return mock


@pytest.fixture
def mock_random_source(zoo_record: dict[str, Any]) -> MagicMock:
    mock = MagicMock(spec=IRandomAnimalProvider)
    mock.fetch_random = AsyncMock(return_value=zoo_record)
    mock.get_provider_name.return_value = "zoo_animal_api"
    mock.is_available.return_value = True
    return mock


@pytest.fixture
def page_factory():
    """Build PageInfo records with overridable fields."""
    return _make_page


@pytest.fixture
def hits_factory():
    """Build a ranked SearchHit list from titles."""

    def _hits(*titles: str) -> list[SearchHit]:
        return [SearchHit(title=t, page_id=i + 1) for i, t in enumerate(titles)]

    return _hits

"""Public interface definitions for every external source and store.

Each external API or storage backend used by the resolution pipeline is
accessed exclusively through the abstract base classes defined here.
Concrete adapters implement these interfaces and are injected by
``src/main.py``, so the pipeline can be tested against fakes and a source
can be swapped without touching business logic.

CONCRETE PROVIDER MAP:
    Interface                  →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────────
    IRandomAnimalProvider      →  ZooAnimalProvider
    IEncyclopediaProvider      →  WikipediaProvider
    IImageProvider             →  CommonsImageProvider
    ICacheStore                →  MemoryCacheStore, SQLiteCacheStore
"""

from src.interfaces.cache_provider import ICacheStore
from src.interfaces.encyclopedia_provider import IEncyclopediaProvider, SearchHit
from src.interfaces.image_provider import IImageProvider
from src.interfaces.random_animal_provider import IRandomAnimalProvider

__all__ = [
    "ICacheStore",
    "IEncyclopediaProvider",
    "IImageProvider",
    "IRandomAnimalProvider",
    "SearchHit",
]

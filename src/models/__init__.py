"""wildfacts domain models — re-exports all public model classes.

The models are organized across two submodules:
    - animal.py      — canonical, local, and Wikipedia record shapes
    - resolution.py  — tagged result type for fallback-chain strategies
"""

from __future__ import annotations

from src.models.animal import (
    UNKNOWN,
    CachedPageInfo,
    CanonicalAnimal,
    LocalAnimal,
    PageInfo,
)
from src.models.resolution import Resolution, ResolutionStatus

__all__ = [
    "UNKNOWN",
    "CachedPageInfo",
    "CanonicalAnimal",
    "LocalAnimal",
    "PageInfo",
    "Resolution",
    "ResolutionStatus",
]

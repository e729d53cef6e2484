"""Utility modules for wildfacts.

- **errors** -- Exception hierarchy rooted at WildlifeFactsError; each
  failure kind (transport, not-found, malformed body, cache storage,
  configuration) has its own subclass.
- **concurrency** -- semaphore-throttled ``asyncio.gather`` used for the
  per-title fan-out in species search.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from src.utils.concurrency import throttled_gather
from src.utils.errors import (
    CacheStoreError,
    ConfigurationError,
    MalformedResponseError,
    RecordNotFoundError,
    SourceUnavailableError,
    WildlifeFactsError,
)
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "CacheStoreError",
    "ConfigurationError",
    "MalformedResponseError",
    "RecordNotFoundError",
    "SourceUnavailableError",
    "WildlifeFactsError",
    "configure_logging",
    "get_logger",
    "throttled_gather",
]

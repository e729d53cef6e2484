"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values are read from two sources (in priority order):
#
#   1. **Environment variables**: e.g., RANDOM_SOURCE_BLOCKED=true
#   2. **.env file**: key=value lines in the project root .env file
#
# Field ``cache_db_path`` maps to env var ``CACHE_DB_PATH``; defaults apply
# when neither source sets a value.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """wildfacts application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Sources ===
    random_animal_url: str = "https://zoo-animal-api.herokuapp.com/animals/rand"
    wikipedia_api_url: str = "https://en.wikipedia.org/w/api.php"
    commons_api_url: str = "https://commons.wikimedia.org/w/api.php"
    request_timeout: float = 5.0
    # Wikimedia asks API clients to identify themselves.
    user_agent: str = "wildfacts/0.1.0 (https://github.com/wildfacts/wildfacts)"
    # True on hosts where the random-animal API is blocked by cross-origin
    # policy; the random-fact chain then starts at the Wikipedia stage.
    random_source_blocked: bool = False

    # === Resolution ===
    search_limit: int = 6
    commons_limit: int = 5
    thumbnail_size: int = 800
    fallback_query: str = "animal"
    max_concurrent_lookups: int = 8

    # === Cache ===
    cache_backend: str = "sqlite"  # "sqlite" or "memory"
    cache_db_path: str = "data/wiki_cache.db"
    cache_key: str = "wiki_cache_v1"
    cache_ttl_days: int = 30
    memory_cache_max_entries: int = 10000

    # === Local dataset ===
    # Empty string = use the dataset bundled with the package.
    dataset_path: str = ""

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    @property
    def cache_ttl_seconds(self) -> float:
        """Page-info TTL expressed in seconds."""
        return self.cache_ttl_days * 24 * 60 * 60

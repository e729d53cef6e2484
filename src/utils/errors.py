"""Custom exception hierarchy for wildfacts.

All application exceptions inherit from :class:`WildlifeFactsError`, which
carries an optional ``provider_name`` so log handlers can identify which
external source (e.g. "wikipedia", "commons", "sqlite_cache") caused the
failure.

    WildlifeFactsError  (base -- catch-all for any wildfacts error)
    +-- SourceUnavailableError  (network error, timeout, non-2xx)
    +-- RecordNotFoundError     (source reports no such page/record)
    +-- MalformedResponseError  (body does not have the expected shape)
    +-- CacheStoreError         (persistent cache read/write failure)
    +-- ConfigurationError      (startup / missing config or dataset)

Adapters raise these internally and absorb them at their own boundary; only
:class:`SourceUnavailableError` from the random-animal source reaches the
resolution pipeline, which turns it into a failed resolution on the spot.
"""


class WildlifeFactsError(Exception):
    """Base exception for all wildfacts errors.

    The ``__str__`` method prefixes the provider name in brackets for log
    output, e.g. ``[wikipedia] Request timed out``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Source errors
# ---------------------------------------------------------------------------

class SourceUnavailableError(WildlifeFactsError):
    """Raised when an external source is unreachable or answers non-2xx.

    The pipeline's fallback chain catches this to move on to the next
    strategy in priority order.
    """

    def __init__(
        self,
        message: str = "External source is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RecordNotFoundError(WildlifeFactsError):
    """Raised when a source explicitly reports that a page or record is missing."""

    def __init__(
        self,
        message: str = "Record not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class MalformedResponseError(WildlifeFactsError):
    """Raised when a response body cannot be decoded or lacks expected fields."""

    def __init__(
        self,
        message: str = "Malformed response body",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Storage / configuration errors
# ---------------------------------------------------------------------------

class CacheStoreError(WildlifeFactsError):
    """Raised inside cache backends when storage cannot be read or written.

    Never escapes a cache store: ``get`` and ``put`` catch it and degrade
    to "absent" / no-op.
    """

    def __init__(
        self,
        message: str = "Cache storage failure",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(WildlifeFactsError):
    """Raised when configuration or the bundled dataset is invalid or missing."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)

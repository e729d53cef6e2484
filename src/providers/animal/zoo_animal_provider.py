"""Zoo Animal API provider implementing IRandomAnimalProvider.

The Zoo Animal API serves one random animal per ``GET /animals/rand``.  The
host is a free-tier deployment that is often asleep or gone, so requests use
a short fixed timeout and every failure surfaces as
:class:`SourceUnavailableError` for the pipeline to fall back on.
"""

from __future__ import annotations

from typing import Any

import httpx

from src.interfaces.random_animal_provider import IRandomAnimalProvider
from src.utils.errors import MalformedResponseError, SourceUnavailableError
from src.utils.logging import get_logger

_DEFAULT_URL = "https://zoo-animal-api.herokuapp.com/animals/rand"
_DEFAULT_USER_AGENT = "wildfacts/0.1.0 (https://github.com/wildfacts/wildfacts)"


class ZooAnimalProvider(IRandomAnimalProvider):
    """Random-animal source backed by the Zoo Animal API.

    The ``httpx.AsyncClient`` is injected for testability.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        url: str = _DEFAULT_URL,
        timeout: float = 5.0,
        user_agent: str = _DEFAULT_USER_AGENT,
    ) -> None:
        self._http = http_client
        self._url = url
        self._timeout = timeout
        self._user_agent = user_agent
        self._logger = get_logger(__name__)

    async def fetch_random(self) -> dict[str, Any]:
        """Fetch one random animal record from the API."""
        headers = {"User-Agent": self._user_agent, "Accept": "application/json"}
        try:
            response = await self._http.get(self._url, headers=headers, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            self._logger.warning("zoo_animal_request_failed", url=self._url, error=str(exc))
            raise SourceUnavailableError(
                message=f"Random animal request failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        try:
            record = self._decode(response)
        except MalformedResponseError as exc:
            self._logger.warning("zoo_animal_malformed_body", url=self._url, error=str(exc))
            raise SourceUnavailableError(
                message=str(exc.message),
                provider_name=self.get_provider_name(),
            ) from exc

        self._logger.debug("zoo_animal_fetched", name=record.get("name"))
        return record

    def get_provider_name(self) -> str:
        return "zoo_animal_api"

    def is_available(self) -> bool:
        return bool(self._url)

    def _decode(self, response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError(
                message=f"Random animal body is not JSON: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(data, dict):
            raise MalformedResponseError(
                message="Random animal body is not a JSON object",
                provider_name=self.get_provider_name(),
            )
        if not (data.get("name") or data.get("latin_name")):
            raise MalformedResponseError(
                message="Random animal record has neither name nor latin_name",
                provider_name=self.get_provider_name(),
            )
        return data

"""Shared request helper for the MediaWiki action API.

Wikipedia and Wikimedia Commons expose the same ``api.php`` endpoint shape,
so both providers issue their GETs through :func:`fetch_mediawiki_json`,
which turns every transport or decoding problem into a typed error.
"""

from __future__ import annotations

from typing import Any

import httpx

from src.utils.errors import MalformedResponseError, SourceUnavailableError


async def fetch_mediawiki_json(
    http_client: httpx.AsyncClient,
    url: str,
    params: dict[str, Any],
    *,
    timeout: float,
    user_agent: str,
    provider_name: str,
) -> dict[str, Any]:
    """GET *url* with *params* and return the decoded JSON object.

    ``format=json`` is always requested.

    Raises
    ------
    SourceUnavailableError
        On connection errors, timeouts, or non-2xx responses.
    MalformedResponseError
        When the body is not a JSON object.
    """
    query = {**params, "format": "json"}
    headers = {"User-Agent": user_agent, "Accept": "application/json"}
    try:
        response = await http_client.get(url, params=query, headers=headers, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise SourceUnavailableError(
            message=f"Request to {url} failed: {exc}",
            provider_name=provider_name,
        ) from exc

    try:
        data = response.json()
    except ValueError as exc:
        raise MalformedResponseError(
            message=f"Response from {url} is not JSON: {exc}",
            provider_name=provider_name,
        ) from exc

    if not isinstance(data, dict):
        raise MalformedResponseError(
            message=f"Response from {url} is not a JSON object",
            provider_name=provider_name,
        )
    return data

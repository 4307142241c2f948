"""Google Maps Platform web-service client.

One GET per call against ``https://maps.googleapis.com/maps/api/<capability>/json``.
The response JSON is returned as-is, including Google's own error payloads
(``status: REQUEST_DENIED`` and friends), which are relayed to the browser
untouched. Only transport failures and undecodable bodies raise.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://maps.googleapis.com/maps/api"

NEARBY_SEARCH = "place/nearbysearch"
TEXT_SEARCH = "place/textsearch"
PLACE_DETAILS = "place/details"
PLACE_AUTOCOMPLETE = "place/autocomplete"
GEOCODE = "geocode"
DIRECTIONS = "directions"
DISTANCE_MATRIX = "distancematrix"


class UpstreamFetchError(Exception):
    """Network failure or non-JSON body from Google."""


class GoogleMapsClient:
    """Thin async wrapper around a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._client = http_client
        self._base_url = base_url.rstrip("/")

    def url_for(self, capability: str) -> str:
        return f"{self._base_url}/{capability}/json"

    async def fetch(self, capability: str, params: dict[str, str]) -> Any:
        """GET ``capability`` with ``params`` (which carry the API key).

        Raises UpstreamFetchError on network errors, a query that cannot be
        encoded, or an undecodable body.
        The request URL is never put in the error, since it holds the key.
        """
        try:
            response = await self._client.get(self.url_for(capability), params=params)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
            # InvalidURL and UnicodeEncodeError come from building the query,
            # e.g. a lone surrogate in a forwarded field
            raise UpstreamFetchError(
                f"{capability}: {type(exc).__name__}: {exc}"
            ) from None

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamFetchError(
                f"{capability}: HTTP {response.status_code} returned a non-JSON body"
            ) from exc

    async def close(self) -> None:
        await self._client.aclose()

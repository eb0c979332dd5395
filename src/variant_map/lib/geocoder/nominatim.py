"""OpenStreetMap Nominatim autocomplete provider.

Uses the Nominatim search API (https://nominatim.org/release-docs/develop/api/Search/).
Free but rate-limited to 1 req/sec; used as the fallback provider.
"""

import httpx
from loguru import logger

from variant_map.lib.geocoder.base import AddressSuggestion, BaseAutocompleter, GeocodingProviderError

NOMINATIM_API_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "variant-map/0.1"


class NominatimAutocompleter(BaseAutocompleter):
    """OpenStreetMap Nominatim provider."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self._timeout = timeout
        self._user_agent = user_agent

    @property
    def provider_name(self) -> str:
        return "nominatim"

    async def suggest(self, query: str, limit: int = 5) -> list[AddressSuggestion]:
        params: dict[str, str | int] = {"q": query, "format": "json", "limit": limit}
        headers = {"Accept": "application/json", "User-Agent": self._user_agent}

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(NOMINATIM_API_URL, params=params, headers=headers)
                response.raise_for_status()

            return self._parse_response(response.json())

        except httpx.TimeoutException as e:
            logger.warning("Nominatim autocomplete timeout")
            raise GeocodingProviderError("nominatim", "Autocomplete request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Nominatim autocomplete HTTP error {e.response.status_code}")
            raise GeocodingProviderError(
                "nominatim",
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"Nominatim autocomplete transport error: {type(e).__name__}")
            raise GeocodingProviderError("nominatim", f"Transport error: {type(e).__name__}") from e

    def _parse_response(self, data: object) -> list[AddressSuggestion]:
        if not isinstance(data, list):
            raise GeocodingProviderError("nominatim", "Unexpected response shape")
        try:
            return [
                AddressSuggestion(
                    address=item.get("display_name", ""),
                    lat=float(item["lat"]),
                    lng=float(item["lon"]),
                )
                for item in data
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingProviderError("nominatim", f"Malformed candidate: {e}") from e

"""Geoapify autocomplete provider.

Uses the Geoapify autocomplete API
(https://apidocs.geoapify.com/docs/geocoding/address-autocomplete/).
Requires an API key; preferred over Nominatim when configured.
"""

import httpx
from loguru import logger

from variant_map.lib.geocoder.base import AddressSuggestion, BaseAutocompleter, GeocodingProviderError

GEOAPIFY_API_URL = "https://api.geoapify.com/v1/geocode/autocomplete"
DEFAULT_TIMEOUT = 10.0


class GeoapifyAutocompleter(BaseAutocompleter):
    """Geoapify provider."""

    def __init__(self, api_key: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._api_key = api_key
        self._timeout = timeout

    @property
    def provider_name(self) -> str:
        return "geoapify"

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def suggest(self, query: str, limit: int = 5) -> list[AddressSuggestion]:
        params: dict[str, str | int] = {
            "text": query,
            "limit": limit,
            "format": "json",
            "apiKey": self._api_key,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(GEOAPIFY_API_URL, params=params, headers={"Accept": "application/json"})
                response.raise_for_status()

            return self._parse_response(response.json())

        except httpx.TimeoutException as e:
            logger.warning("Geoapify autocomplete timeout")
            raise GeocodingProviderError("geoapify", "Autocomplete request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Geoapify autocomplete HTTP error {e.response.status_code}")
            raise GeocodingProviderError(
                "geoapify",
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"Geoapify autocomplete transport error: {type(e).__name__}")
            raise GeocodingProviderError("geoapify", f"Transport error: {type(e).__name__}") from e

    def _parse_response(self, data: object) -> list[AddressSuggestion]:
        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            raise GeocodingProviderError("geoapify", "Unexpected response shape")
        try:
            return [
                AddressSuggestion(
                    address=_format_address(item),
                    lat=float(item["lat"]),
                    lng=float(item["lon"]),
                )
                for item in data["results"]
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingProviderError("geoapify", f"Malformed candidate: {e}") from e


def _format_address(item: dict) -> str:
    """Join Geoapify's two display lines, skipping whichever is missing."""
    parts = [item[key] for key in ("address_line1", "address_line2") if item.get(key)]
    return ", ".join(parts)

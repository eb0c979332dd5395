"""Geocoder library: address autocomplete providers and result caching.

Public API:
    - BaseAutocompleter: Abstract provider interface
    - AddressSuggestion: Candidate dataclass
    - GeocodingProviderError: Provider transport/service failure
    - GeoapifyAutocompleter: Geoapify provider (API key required)
    - NominatimAutocompleter: OpenStreetMap Nominatim provider
    - TTLCache: Bounded in-memory cache with expiry
    - get_configured_autocompleters: Providers enabled by settings, in fallback order
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from variant_map.lib.geocoder.base import AddressSuggestion, BaseAutocompleter, GeocodingProviderError
from variant_map.lib.geocoder.cache import TTLCache
from variant_map.lib.geocoder.geoapify import GeoapifyAutocompleter
from variant_map.lib.geocoder.nominatim import NominatimAutocompleter

if TYPE_CHECKING:
    from variant_map.core.config import Settings


def get_configured_autocompleters(settings: Settings) -> list[BaseAutocompleter]:
    """Build the provider chain from settings.

    Geoapify is tried first when an API key is configured; Nominatim is always
    appended as the fallback.

    Args:
        settings: Application settings.

    Returns:
        Configured providers, in fallback order.
    """
    providers: list[BaseAutocompleter] = []
    if settings.geocoder_geoapify_api_key:
        providers.append(
            GeoapifyAutocompleter(
                api_key=settings.geocoder_geoapify_api_key,
                timeout=settings.geocoder_timeout,
            )
        )
    providers.append(
        NominatimAutocompleter(
            timeout=settings.geocoder_timeout,
            user_agent=settings.geocoder_nominatim_user_agent,
        )
    )
    return [p for p in providers if p.is_configured]


__all__ = [
    "AddressSuggestion",
    "BaseAutocompleter",
    "GeoapifyAutocompleter",
    "GeocodingProviderError",
    "NominatimAutocompleter",
    "TTLCache",
    "get_configured_autocompleters",
]

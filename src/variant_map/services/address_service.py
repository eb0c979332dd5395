"""Address autocomplete service.

Queries the configured providers in fallback order and memoizes results per
query string in a bounded TTL cache owned by the service instance.
"""

from loguru import logger

from variant_map.core.config import Settings
from variant_map.lib.geocoder import (
    AddressSuggestion,
    BaseAutocompleter,
    GeocodingProviderError,
    TTLCache,
    get_configured_autocompleters,
)

MIN_QUERY_LENGTH = 2


class AddressSearchService:
    """Provider fallback chain with a query-keyed result cache.

    Args:
        providers: Autocomplete providers, tried in order.
        cache: Result cache keyed by the raw query string.
        limit: Maximum number of suggestions requested from a provider.
    """

    def __init__(
        self,
        providers: list[BaseAutocompleter],
        cache: TTLCache[list[AddressSuggestion]],
        limit: int = 5,
    ) -> None:
        self._providers = providers
        self._cache = cache
        self._limit = limit

    @classmethod
    def from_settings(cls, settings: Settings) -> "AddressSearchService":
        """Build the service from application settings."""
        return cls(
            providers=get_configured_autocompleters(settings),
            cache=TTLCache(
                ttl_seconds=settings.address_cache_ttl,
                max_entries=settings.address_cache_max_entries,
            ),
            limit=settings.address_suggestion_limit,
        )

    @property
    def cache(self) -> TTLCache[list[AddressSuggestion]]:
        return self._cache

    async def search(self, query: str) -> list[AddressSuggestion]:
        """Return address suggestions for a partial query.

        Queries shorter than two characters return an empty list without
        contacting any provider. A provider failure falls through to the next
        provider; successful answers (including empty ones) are cached.

        Args:
            query: Free text typed by the user.

        Returns:
            Suggestions from the first provider that answered.

        Raises:
            GeocodingProviderError: If every provider failed.
        """
        if len(query) < MIN_QUERY_LENGTH:
            return []

        cached = self._cache.get(query)
        if cached is not None:
            return cached

        last_error: GeocodingProviderError | None = None
        for provider in self._providers:
            try:
                suggestions = await provider.suggest(query, limit=self._limit)
            except GeocodingProviderError as e:
                logger.warning(f"Autocomplete provider {provider.provider_name} failed, trying next: {e.message}")
                last_error = e
                continue
            self._cache.set(query, suggestions)
            return suggestions

        if last_error is None:
            last_error = GeocodingProviderError("none", "No autocomplete providers configured")
        raise last_error

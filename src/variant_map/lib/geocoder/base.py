"""Abstract address autocomplete interface for pluggable provider support."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AddressSuggestion:
    """One address candidate offered to the submit form."""

    address: str
    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not (-90 <= self.lat <= 90):
            msg = f"lat must be between -90 and 90, got {self.lat}"
            raise ValueError(msg)
        if not (-180 <= self.lng <= 180):
            msg = f"lng must be between -180 and 180, got {self.lng}"
            raise ValueError(msg)


class GeocodingProviderError(Exception):
    """Raised when an autocomplete provider experiences a transport or service error.

    Distinguishes provider failures (timeout, HTTP error, malformed payload)
    from a successful response with no candidates (which returns an empty list).

    Args:
        provider_name: Name of the failing provider.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the provider.
    """

    def __init__(self, provider_name: str, message: str, status_code: int | None = None) -> None:
        self.provider_name = provider_name
        self.message = message
        self.status_code = status_code
        super().__init__(f"{provider_name}: {message}")


class BaseAutocompleter(ABC):
    """Abstract autocomplete provider. All providers must implement this."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this provider."""

    @property
    def is_configured(self) -> bool:
        """Whether this provider has all required configuration (e.g., API keys)."""
        return True

    @abstractmethod
    async def suggest(self, query: str, limit: int = 5) -> list[AddressSuggestion]:
        """Return address candidates for a partial query.

        Args:
            query: Free text typed by the user.
            limit: Maximum number of candidates.

        Returns:
            Candidate list, possibly empty.

        Raises:
            GeocodingProviderError: On transport or service errors.
        """

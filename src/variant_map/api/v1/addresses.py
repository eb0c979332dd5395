"""Address autocomplete endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from variant_map.core.dependencies import get_address_service
from variant_map.lib.geocoder import GeocodingProviderError
from variant_map.schemas.address import AddressSuggestionResponse
from variant_map.services.address_service import AddressSearchService

addresses_router = APIRouter(prefix="/addresses", tags=["addresses"])


@addresses_router.get("/search")
async def search(
    service: Annotated[AddressSearchService, Depends(get_address_service)],
    q: Annotated[str, Query(max_length=200)] = "",
) -> list[AddressSuggestionResponse]:
    """Suggest addresses for a partial query (at least two characters)."""
    try:
        suggestions = await service.search(q)
    except GeocodingProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch address suggestions",
        ) from e
    return [AddressSuggestionResponse.model_validate(s) for s in suggestions]

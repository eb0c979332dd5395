"""Pydantic v2 schemas for address autocomplete."""

from pydantic import BaseModel


class AddressSuggestionResponse(BaseModel):
    """One autocomplete candidate."""

    model_config = {"from_attributes": True}

    address: str
    lat: float
    lng: float

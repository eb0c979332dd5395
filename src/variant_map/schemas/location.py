"""Pydantic v2 schemas for location submission, editing and browsing."""

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, field_validator


VariantName = Annotated[str, Field(min_length=1, max_length=255)]


def _dedupe_variant_names(names: list[str]) -> list[str]:
    """Drop exact duplicates keeping first-seen order. Names are not trimmed or case-folded."""
    if any(not name.strip() for name in names):
        msg = "variant names must not be blank"
        raise ValueError(msg)
    return list(dict.fromkeys(names))


class LocationSubmitRequest(BaseModel):
    """Request body for submitting a location and the variants seen there."""

    name: str = Field(min_length=1, max_length=255)
    address: str = Field(min_length=1, max_length=500)
    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)
    variants: list[VariantName] = Field(default_factory=list, description="Variant names seen at the location")

    @field_validator("name", "address")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "must not be blank"
            raise ValueError(msg)
        return v

    @field_validator("variants")
    @classmethod
    def normalize_variants(cls, v: list[str]) -> list[str]:
        return _dedupe_variant_names(v)


class LocationUpdateRequest(BaseModel):
    """Request body for editing a location.

    Omitted or empty ``name``/``address`` keep their stored value.
    ``coordinates`` is ``[latitude, longitude]``. ``variants``, when present,
    replaces the stored variant set (an empty list removes them all).
    """

    name: str | None = Field(default=None, max_length=255)
    address: str | None = Field(default=None, max_length=500)
    coordinates: tuple[float, float] | None = Field(default=None)
    variants: list[VariantName] | None = None

    @field_validator("coordinates")
    @classmethod
    def validate_coordinates(cls, v: tuple[float, float] | None) -> tuple[float, float] | None:
        if v is None:
            return None
        latitude, longitude = v
        if not (-90 <= latitude <= 90):
            msg = f"latitude must be between -90 and 90, got {latitude}"
            raise ValueError(msg)
        if not (-180 <= longitude <= 180):
            msg = f"longitude must be between -180 and 180, got {longitude}"
            raise ValueError(msg)
        return v

    @field_validator("variants")
    @classmethod
    def normalize_variants(cls, v: list[str] | None) -> list[str] | None:
        return _dedupe_variant_names(v) if v is not None else None


class LocationSubmitResponse(BaseModel):
    """Result of a submission."""

    location_id: uuid.UUID


class VariantChangeSummary(BaseModel):
    """Variant names touched by an edit."""

    added: list[str] = Field(default_factory=list)
    reconfirmed: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)


class LocationUpdateResponse(BaseModel):
    """Result of an edit."""

    location_id: uuid.UUID
    variants: VariantChangeSummary | None = None


class LocationResponse(BaseModel):
    """A location with the names of the variants reported there."""

    location_id: uuid.UUID
    name: str
    address: str
    latitude: float
    longitude: float
    variants: list[str]


class VariantResponse(BaseModel):
    """A variant with its reporting provenance."""

    model_config = {"from_attributes": True}

    variant_name: str
    first_reported_by: str
    first_reported_at: datetime
    last_confirmed_by: str
    last_confirmed_at: datetime
    confirmation_count: int


class LocationDetailResponse(BaseModel):
    """A location with full variant provenance."""

    location_id: uuid.UUID
    name: str
    address: str
    latitude: float
    longitude: float
    created_at: datetime
    updated_at: datetime
    variants: list[VariantResponse]


class SubmissionResponse(BaseModel):
    """One entry of a location's submission history."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    submitted_by: str
    submission_time: datetime
    is_update: bool
    variants: list[str]

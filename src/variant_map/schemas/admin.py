"""Pydantic v2 schemas for the admin gate."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from variant_map.schemas.location import LocationResponse


class AdminAuthRequest(BaseModel):
    """Request body for exchanging the admin secret for a token."""

    secret: str = Field(min_length=1)


class AdminTokenResponse(BaseModel):
    """Bearer token issued to the admin."""

    token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Validity window in seconds")


class NoteUpdateRequest(BaseModel):
    """Request body for annotating a location."""

    note: str


class AdminLocationResponse(LocationResponse):
    """A location as shown in the moderation panel."""

    note: str | None = None
    created_at: datetime


class AdminActionResponse(BaseModel):
    """Acknowledgement of a moderation write."""

    location_id: uuid.UUID
    success: bool = True

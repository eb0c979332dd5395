"""Admin gate endpoints: token issuance and moderation."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from variant_map.core.config import Settings, get_settings
from variant_map.core.dependencies import get_async_session, require_admin
from variant_map.schemas.admin import (
    AdminActionResponse,
    AdminAuthRequest,
    AdminLocationResponse,
    AdminTokenResponse,
    NoteUpdateRequest,
)
from variant_map.services.admin_service import delete_location, issue_credential, set_note
from variant_map.services.location_service import list_locations

admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.post("/auth")
async def authenticate(
    body: AdminAuthRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> AdminTokenResponse:
    """Exchange the admin secret for a bearer token."""
    token = issue_credential(body.secret, settings)
    return AdminTokenResponse(token=token, expires_in=settings.admin_token_expire_hours * 3600)


@admin_router.get("/locations")
async def list_admin_locations(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _admin: Annotated[dict, Depends(require_admin)],
) -> list[AdminLocationResponse]:
    """List every location with its note, for moderation."""
    rows = await list_locations(session)
    return [
        AdminLocationResponse(
            location_id=location.id,
            name=location.name,
            address=location.address,
            latitude=location.latitude,
            longitude=location.longitude,
            variants=[v.variant_name for v in variants],
            note=location.note,
            created_at=location.created_at,
        )
        for location, variants in rows
    ]


@admin_router.delete("/locations/{location_id}")
async def remove_location(
    location_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _admin: Annotated[dict, Depends(require_admin)],
) -> AdminActionResponse:
    """Delete a location together with its variants and submissions."""
    await delete_location(session, location_id)
    logger.info(f"Admin deleted location {location_id}")
    return AdminActionResponse(location_id=location_id)


@admin_router.put("/locations/{location_id}/note")
async def annotate_location(
    location_id: uuid.UUID,
    body: NoteUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _admin: Annotated[dict, Depends(require_admin)],
) -> AdminActionResponse:
    """Attach a free-text note to a location."""
    await set_note(session, location_id, body.note)
    return AdminActionResponse(location_id=location_id)

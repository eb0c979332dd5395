"""Public location endpoints: browse, submit, edit."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from variant_map.core.config import Settings, get_settings
from variant_map.core.dependencies import get_async_session
from variant_map.schemas.location import (
    LocationDetailResponse,
    LocationResponse,
    LocationSubmitRequest,
    LocationSubmitResponse,
    LocationUpdateRequest,
    LocationUpdateResponse,
    SubmissionResponse,
    VariantChangeSummary,
    VariantResponse,
)
from variant_map.services.location_service import (
    get_location,
    list_locations,
    list_submissions,
    submit_location,
    update_location,
)

locations_router = APIRouter(prefix="/locations", tags=["locations"])


@locations_router.get("", response_model=list[LocationResponse])
async def list_all_locations(
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> list[LocationResponse]:
    """List every location with the names of its variants, ordered by name."""
    rows = await list_locations(session)
    return [
        LocationResponse(
            location_id=location.id,
            name=location.name,
            address=location.address,
            latitude=location.latitude,
            longitude=location.longitude,
            variants=[v.variant_name for v in variants],
        )
        for location, variants in rows
    ]


@locations_router.post("/submit", status_code=status.HTTP_201_CREATED)
async def submit(
    body: LocationSubmitRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LocationSubmitResponse:
    """Submit a location and the variants seen there.

    Resubmitting the same name, address and coordinates updates the existing
    location instead of creating a new one.
    """
    location_id = await submit_location(
        session,
        name=body.name,
        address=body.address,
        latitude=body.latitude,
        longitude=body.longitude,
        variants=body.variants,
        reporter=settings.anonymous_reporter,
    )
    return LocationSubmitResponse(location_id=location_id)


@locations_router.get("/{location_id}", response_model=LocationDetailResponse)
async def get_location_detail(
    location_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> LocationDetailResponse:
    """Get one location with full variant provenance."""
    location, variants = await get_location(session, location_id)
    return LocationDetailResponse(
        location_id=location.id,
        name=location.name,
        address=location.address,
        latitude=location.latitude,
        longitude=location.longitude,
        created_at=location.created_at,
        updated_at=location.updated_at,
        variants=[VariantResponse.model_validate(v) for v in variants],
    )


@locations_router.put("/{location_id}")
async def edit_location(
    location_id: uuid.UUID,
    body: LocationUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LocationUpdateResponse:
    """Edit a location. Empty or omitted fields keep their stored value."""
    diff = await update_location(
        session,
        location_id,
        name=body.name,
        address=body.address,
        coordinates=body.coordinates,
        variants=body.variants,
        reporter=settings.anonymous_reporter,
    )
    return LocationUpdateResponse(
        location_id=location_id,
        variants=VariantChangeSummary(**diff.summary()) if diff is not None else None,
    )


@locations_router.get("/{location_id}/submissions", response_model=list[SubmissionResponse])
async def get_submission_history(
    location_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> list[SubmissionResponse]:
    """List the submissions recorded for a location, oldest first."""
    await get_location(session, location_id)
    submissions = await list_submissions(session, location_id)
    return [SubmissionResponse.model_validate(s) for s in submissions]

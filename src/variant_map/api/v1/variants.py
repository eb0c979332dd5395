"""Variant name search endpoint backing the submit form's suggestions."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from variant_map.core.dependencies import get_async_session
from variant_map.services.location_service import search_variants

variants_router = APIRouter(prefix="/variants", tags=["variants"])


@variants_router.get("/search")
async def search(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    q: Annotated[str, Query(max_length=100)] = "",
) -> list[str]:
    """Suggest known variant names containing ``q``, most confirmed first."""
    return await search_variants(session, q)

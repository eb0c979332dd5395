"""FastAPI dependency injection for database sessions, admin auth, and shared services."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from variant_map.core.config import Settings, get_settings
from variant_map.core.database import get_session_factory
from variant_map.core.errors import AuthError
from variant_map.services.address_service import AddressSearchService
from variant_map.services.admin_service import verify_credential

bearer_scheme = HTTPBearer(auto_error=False)

_address_service: AddressSearchService | None = None


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


async def require_admin(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    """Verify the admin bearer token and return its payload.

    Raises:
        HTTPException: 401 if the token is missing, invalid, or expired.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return verify_credential(credentials.credentials, settings)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


def get_address_service() -> AddressSearchService:
    """Get or create the process-wide address search service (and its cache)."""
    global _address_service  # noqa: PLW0603
    if _address_service is None:
        _address_service = AddressSearchService.from_settings(get_settings())
    return _address_service

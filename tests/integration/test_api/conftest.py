"""Fixtures for HTTP-level tests against a real in-memory SQLite store."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from variant_map.api.router import create_router
from variant_map.core.config import Settings, get_settings
from variant_map.core.dependencies import get_address_service, get_async_session
from variant_map.main import register_exception_handlers


@pytest.fixture
def address_service() -> MagicMock:
    service = MagicMock()
    service.search = AsyncMock(return_value=[])
    return service


@pytest.fixture
def app(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
    address_service: MagicMock,
) -> FastAPI:
    async def _session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(create_router(settings))
    app.dependency_overrides[get_async_session] = _session
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_address_service] = lambda: address_service
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers(admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}

"""Shared test fixtures for async database, sessions, settings, and admin tokens."""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from variant_map.core.config import Settings
from variant_map.core.database import enable_sqlite_foreign_keys
from variant_map.core.security import create_admin_token
from variant_map.models import Location  # noqa: F401  (registers all tables on Base.metadata)
from variant_map.models.base import Base

TEST_ADMIN_SECRET = "open-sesame"
TEST_JWT_SECRET = "test-secret-key-not-for-production-use"


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        admin_secret=TEST_ADMIN_SECRET,
        jwt_secret_key=TEST_JWT_SECRET,
        jwt_algorithm="HS256",
        admin_token_expire_hours=24,
    )


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory async SQLite engine with FK enforcement."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(async_engine, expire_on_commit=False)


@pytest.fixture
async def async_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    """Create a per-test async session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def admin_token(settings: Settings) -> str:
    """Generate a valid admin bearer token."""
    return create_admin_token(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_hours=settings.admin_token_expire_hours,
    )

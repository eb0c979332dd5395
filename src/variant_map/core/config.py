"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        description="Async SQLAlchemy connection string (postgresql+asyncpg or sqlite+aiosqlite)",
    )

    # Admin gate
    admin_secret: str = Field(
        min_length=1,
        description="Shared secret exchanged for an admin bearer token",
    )
    jwt_secret_key: str = Field(min_length=32, description="Secret key for signing JWTs (minimum 32 characters)")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    admin_token_expire_hours: int = Field(
        default=24,
        description="Admin token validity window in hours",
        gt=0,
    )

    # Reconciliation
    anonymous_reporter: str = Field(
        default="anonymous",
        max_length=100,
        description="Reporter identity recorded for unauthenticated submissions",
    )

    @field_validator("anonymous_reporter")
    @classmethod
    def validate_anonymous_reporter(cls, v: str) -> str:
        if not v.strip():
            msg = "anonymous_reporter must not be blank"
            raise ValueError(msg)
        return v

    # Address autocomplete
    geocoder_geoapify_api_key: str | None = Field(
        default=None,
        description="Geoapify API key; when unset only Nominatim is queried",
    )
    geocoder_nominatim_user_agent: str = Field(
        default="variant-map/0.1",
        description="User-Agent sent to Nominatim per its usage policy",
    )
    geocoder_timeout: float = Field(
        default=10.0,
        description="Autocomplete provider request timeout in seconds",
        gt=0,
    )
    address_suggestion_limit: int = Field(
        default=5,
        description="Maximum number of address suggestions returned",
        gt=0,
        le=20,
    )
    address_cache_ttl: int = Field(
        default=3600,
        description="Address suggestion cache TTL in seconds",
        gt=0,
    )
    address_cache_max_entries: int = Field(
        default=1000,
        description="Maximum number of cached address queries",
        gt=0,
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins (must be explicitly configured)",
    )

    # Environment
    environment: str = Field(
        default="production",
        description="Deployment environment name (e.g. production, dev, staging)",
    )

    # API
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API version prefix",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()  # type: ignore[call-arg]

"""Root API router with /api/v1 prefix and middleware registration."""

from fastapi import APIRouter, FastAPI

from variant_map.api.middleware import RequestLoggingMiddleware, setup_cors
from variant_map.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from variant_map.api.v1.addresses import addresses_router
    from variant_map.api.v1.admin import admin_router
    from variant_map.api.v1.health import health_router
    from variant_map.api.v1.locations import locations_router
    from variant_map.api.v1.variants import variants_router

    root_router = APIRouter(prefix=settings.api_v1_prefix)
    root_router.include_router(health_router)
    root_router.include_router(locations_router)
    root_router.include_router(variants_router)
    root_router.include_router(addresses_router)
    root_router.include_router(admin_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    setup_cors(app, settings)
    app.add_middleware(RequestLoggingMiddleware)

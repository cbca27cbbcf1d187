# 📄 File: plantlens/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts the plant identification app, connects the plant store,
# the AI identifier and the map lookup, and gets everything ready to answer the phone app.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point with lifespan-managed services
# (record store, identification gateway, reverse geocoder), middleware, exception
# handlers, router registration and static serving of stored images.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - plantlens.shared.config.settings
# - plantlens.modules.plant_records (store factory, identifier factory)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup (plantlens.main:app)
# - plantlens-api console script
# - tests (create_application with injected services)

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from plantlens.api.middleware import RequestLoggingMiddleware, register_exception_handlers
from plantlens.api.v1.health import health_router
from plantlens.api.v1.router import api_v1_router
from plantlens.modules.plant_records.domain.repositories.plant_store import PlantStore
from plantlens.modules.plant_records.domain.services.plant_identifier import PlantIdentifier
from plantlens.modules.plant_records.infrastructure.external.reverse_geocoder import ReverseGeocoder
from plantlens.modules.plant_records.infrastructure.storage.factory import create_plant_store
from plantlens.modules.plant_records.presentation.dependencies import create_plant_identifier
from plantlens.shared.config.settings import Settings, get_settings
from plantlens.shared.utils.logging import (
    get_logger,
    log_shutdown_event,
    log_startup_event,
    setup_logging,
)

logger = get_logger(__name__)

IMAGES_MOUNT_PATH = "/data/images"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Builds the services not injected by the caller, initializes them and
    releases them on shutdown.
    """
    settings: Settings = app.state.settings
    log_startup_event(settings.APP_NAME, settings.APP_VERSION, extra={'storage_backend': settings.STORAGE_BACKEND})
    logger.info("🌱 PlantLens API starting up...")

    if getattr(app.state, "plant_store", None) is None:
        app.state.plant_store = create_plant_store(settings)
    if getattr(app.state, "plant_identifier", None) is None:
        app.state.plant_identifier = create_plant_identifier(settings)
    if getattr(app.state, "reverse_geocoder", None) is None and settings.REVERSE_GEOCODING_ENABLED:
        app.state.reverse_geocoder = ReverseGeocoder(settings)

    try:
        await app.state.plant_store.initialize()
        logger.info("✅ Plant store initialized")

        await app.state.plant_identifier.initialize()
        logger.info(f"✅ Plant identifier ready ({app.state.plant_identifier.provider_name})")

        logger.info("✅ PlantLens API startup complete")
        yield

    except Exception as e:
        logger.error(f"❌ Startup failed: {e}")
        raise

    finally:
        logger.info("🔄 PlantLens API shutting down...")
        for name in ("reverse_geocoder", "plant_identifier", "plant_store"):
            service = getattr(app.state, name, None)
            if service is None:
                continue
            try:
                await service.close()
            except Exception as e:
                logger.error(f"❌ Error closing {name}: {e}")
        log_shutdown_event(settings.APP_NAME)


def create_application(
    settings: Optional[Settings] = None,
    plant_store: Optional[PlantStore] = None,
    plant_identifier: Optional[PlantIdentifier] = None,
    reverse_geocoder: Optional[ReverseGeocoder] = None,
) -> FastAPI:
    """
    Application factory function.

    Args:
        settings: Settings to use, defaults to the cached environment settings
        plant_store: Record store to use instead of the configured backend
        plant_identifier: Identifier to use instead of the configured one
        reverse_geocoder: Geocoder to use instead of Nominatim

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    app.state.settings = settings
    app.state.plant_store = plant_store
    app.state.plant_identifier = plant_identifier
    app.state.reverse_geocoder = reverse_geocoder

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    register_exception_handlers(app)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(health_router)
    app.include_router(api_v1_router, prefix=settings.API_PREFIX)

    if settings.STORAGE_BACKEND == "filesystem":
        app.mount(
            IMAGES_MOUNT_PATH,
            StaticFiles(directory=Path(settings.DATA_DIR) / "images", check_dir=False),
            name="plant-images",
        )

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        """Favicon endpoint to prevent 404 errors."""
        return Response(status_code=204)

    return app


# Create the FastAPI application
app = create_application()


def run():
    """Run the application with uvicorn (``plantlens-api`` console script)."""
    settings = get_settings()
    uvicorn.run(
        "plantlens.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_config=None,
    )


if __name__ == "__main__":
    run()

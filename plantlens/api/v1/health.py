# 📄 File: plantlens/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# A quick "are you alive?" check for the app, also saying which storage and identifier it is using.
# 🧪 Purpose (Technical Summary):
# Health check endpoint for load balancers and monitoring.
# 🔗 Dependencies:
# FastAPI, settings
# 🔄 Connected Modules / Calls From:
# plantlens.api.v1.router, plantlens.main, monitoring systems

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from plantlens.shared.config.settings import get_settings

# Create router for health endpoints
health_router = APIRouter()


@health_router.get("/health",
                   summary="Basic Health Check",
                   description="Basic health check endpoint for load balancers and monitoring",
                   tags=["Health Check"])
async def health_check(request: Request) -> JSONResponse:
    """
    Basic health check endpoint

    Returns OK status with the configured backends.
    """
    settings = getattr(request.app.state, "settings", None) or get_settings()
    identifier = getattr(request.app.state, "plant_identifier", None)
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "plantlens-api",
            "version": settings.APP_VERSION,
            "storage_backend": settings.STORAGE_BACKEND,
            "identifier": getattr(identifier, "provider_name", None),
        }
    )

# 📄 File: plantlens/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# Catches errors anywhere in the app and turns them into short, consistent messages for the phone app,
# like "Plant not found" or "Failed to identify plant. Please try again."
# 🧪 Purpose (Technical Summary):
# Global FastAPI exception handlers rendering PlantLensException, request validation errors,
# HTTP errors and unexpected exceptions as JSON bodies with a top-level "message".
# 🔗 Dependencies:
# FastAPI, starlette, plantlens.shared.core.exceptions, structured logging
# 🔄 Connected Modules / Calls From:
# plantlens.main (handler registration), all API endpoints

from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from plantlens.shared.core.exceptions import PlantLensException, is_client_error
from plantlens.shared.utils.logging import get_logger, request_id_var

logger = get_logger(__name__)


def create_error_response(status_code: int, message: str, error: Dict[str, Any] = None) -> JSONResponse:
    """
    Build a JSON error response.

    Args:
        status_code: HTTP status code
        message: User-facing message, always at the top level of the body
        error: Optional structured error block
    """
    content: Dict[str, Any] = {"message": message}
    if error:
        content["error"] = error

    response = JSONResponse(status_code=status_code, content=jsonable_encoder(content))
    request_id = request_id_var.get('')
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


async def plantlens_exception_handler(request: Request, exc: PlantLensException) -> JSONResponse:
    """Render application exceptions with their own status code."""
    log_extra = {
        'error_code': exc.error_code,
        'status_code': exc.status_code,
        'path': request.url.path,
        'method': request.method,
    }
    if is_client_error(exc):
        logger.warning(f"{exc.error_code}: {exc.message}", extra=log_extra)
    else:
        logger.error(f"{exc.error_code}: {exc.message}", extra=log_extra)

    return create_error_response(exc.status_code, exc.message, exc.to_dict()["error"])


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters are reported as 400."""
    errors = exc.errors()
    logger.warning(
        "Request validation failed",
        extra={'path': request.url.path, 'method': request.method, 'error_count': len(errors)}
    )
    return create_error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request",
        {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request",
            "details": {"errors": errors},
            "status_code": status.HTTP_400_BAD_REQUEST,
        }
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return create_error_response(exc.status_code, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception: {exc}",
        extra={'path': request.url.path, 'method': request.method, 'exception_type': type(exc).__name__},
        exc_info=True
    )
    return create_error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every exception handler to the application."""
    app.add_exception_handler(PlantLensException, plantlens_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

# 📄 File: plantlens/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a diary of every request made to the app: what was asked for, how long it took
# and whether it worked, tagged with a request number so related log lines can be found together.
# 🧪 Purpose (Technical Summary):
# Request logging middleware binding a correlation ID (X-Request-ID) to the logging context
# and emitting structured timing records for every HTTP request.
# 🔗 Dependencies:
# FastAPI, starlette BaseHTTPMiddleware, plantlens.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# plantlens.main (middleware registration)

import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from plantlens.shared.utils.logging import get_logger, log_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
EXCLUDED_PATHS = {"/health", "/favicon.ico"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware.

    Features:
    - Correlation ID taken from X-Request-ID or generated, echoed on the response
    - Request/response timing
    - Slow request warnings
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER.lower()) or str(uuid.uuid4())
        request.state.request_id = request_id

        with log_context(request_id):
            if request.url.path in EXCLUDED_PATHS:
                response = await call_next(request)
                response.headers[REQUEST_ID_HEADER] = request_id
                return response

            start_time = time.time()
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    f"Request failed: {request.method} {request.url.path}",
                    extra={'error_type': type(e).__name__, 'duration_ms': (time.time() - start_time) * 1000},
                )
                raise

            duration = time.time() - start_time
            logger.performance.log_request(
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=duration * 1000,
                extra={'client': request.client.host if request.client else None},
            )
            if duration > self.slow_request_threshold:
                logger.warning(
                    f"Slow request: {request.method} {request.url.path} took {duration:.2f}s",
                    extra={'duration_ms': duration * 1000},
                )

            response.headers[REQUEST_ID_HEADER] = request_id
            return response

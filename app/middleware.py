# =============================================================================
# app/middleware.py - Request Logging Middleware
# =============================================================================
# Logs one line per request: method, path, status and duration.
# Request bodies and headers are never logged.
# =============================================================================

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.logging_config import REQUEST_LOGGER

logger = logging.getLogger(REQUEST_LOGGER)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request after its response has been produced."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        # Unhandled exceptions propagate past this middleware and become a 500
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = round((time.perf_counter() - started) * 1000, 1)
            logger.info(
                f"{request.method} {request.url.path} {status_code} {duration_ms}ms",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                    "client": request.client.host if request.client else None,
                },
            )

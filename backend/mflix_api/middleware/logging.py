"""
Mflix API — Request Logging Middleware
=======================================

What:  One access log line per HTTP request with status and duration.
How:   Measures time around the downstream call and logs at a level chosen
       from the status class.
When:  After RequestIDMiddleware (the request ID is already set).

Example line:
    2024-01-15T12:00:00 [WARNING] mflix_api.access [a1b2c3d4]: GET /api/movies/123 400 2.1ms from 10.0.0.7

Not logged: request bodies (comments carry names and email addresses).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("mflix_api.access")

# Probed every few seconds by orchestration; not worth a log line each
SKIPPED_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status, duration and client IP for each request.

    Duration covers everything downstream of this middleware: body
    validation, the MongoDB call, and envelope serialization.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms from %s",
            request.method,
            path,
            status,
            duration_ms,
            client_ip,
            extra={
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response

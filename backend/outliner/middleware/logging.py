"""
Outliner Backend — Request Logging Middleware
===============================================

What:  One access-log line per HTTP request.
How:   Times the request, then logs method, path, status, duration, request
       ID and client address at a level chosen from the status code.
Who:   Applied to every request via Starlette middleware.
When:  After RequestIDMiddleware, whose ID it reads.

Logged:      method, path, status, duration, client IP, request ID
Not logged:  request and response bodies
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from outliner.middleware.request_id import request_id_var

logger = logging.getLogger("outliner.access")

# Probes that would drown out real traffic
SKIPPED_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each HTTP request with its response status and duration.

    Levels:
        5xx → ERROR
        4xx → WARNING
        otherwise → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        # request.client is None under some test transports
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        if path in SKIPPED_PATHS:
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
        )

        return response

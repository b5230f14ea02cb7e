"""
HealthTrack Backend — Request Logging Middleware
=================================================

What:  One access-log line per HTTP request.
How:   Logs method, path, status, duration, request ID, the authenticated
       user (protected routes only) and client IP once the response is
       ready. Level follows the status class.

The user id is read from request.state after the handler ran; it is set
by security.get_current_user_id only when a token verified, so failed and
anonymous requests log "-".

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, IP, request ID, user id
    ❌ Don't log: request bodies (passwords, health data), Authorization headers
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("healthtrack.access")

ANONYMOUS = "-"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request, attributed to the caller when authenticated."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Probes hit /health every few seconds
        if request.url.path == "/health":
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        # request.client may be None in testing
        client_ip = request.client.host if request.client else "unknown"
        user_id = getattr(request.state, "user_id", None)
        rid = request_id_var.get("")
        status = response.status_code

        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] user=%s from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            ANONYMOUS if user_id is None else user_id,
            client_ip,
            extra={
                "request_id": rid,
                "user_id": user_id,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response

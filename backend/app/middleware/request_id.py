"""
HealthTrack Backend — Request ID Middleware
============================================

What:  Assigns a short ID to each incoming request and echoes it in the response.
Why:   Every log entry and error body from one request shares the same ID,
       so a support ticket quoting a report ID failure leads straight to the
       server logs.
How:   Uses the client's X-Request-ID when it is a plain token (letters,
       digits, `.`, `_`, `-`, at most 64 chars), otherwise generates one;
       stores it in a ContextVar and on request.state.

Client-supplied values are written verbatim into access and error logs, so
anything that could forge or split a log line is replaced.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def new_request_id() -> str:
    # 8 chars is enough for correlation and stays readable in logs
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a correlation ID to each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        supplied = request.headers.get("X-Request-ID", "")
        rid = supplied if CLIENT_ID_PATTERN.fullmatch(supplied) else new_request_id()

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response

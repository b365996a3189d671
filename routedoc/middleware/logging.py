"""
Routedoc — Access Log Middleware
==================================

What:  One log line per request: method, path, status, duration, request ID,
       and the error code when the route tree rejected the request.
How:   Wraps the downstream app, times it with perf_counter, picks the log
       level from the status class (5xx ERROR, 4xx WARNING, else INFO).

Not logged: request bodies and header values (they may carry api_key or
passwords from /user/login).
"""

import logging
import time
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from routedoc.middleware.request_id import request_id_var

logger = logging.getLogger("routedoc.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Access logging for the dispatched API.

    Args:
        quiet_paths: Paths served at DEBUG level only (the document and the
                     viewer page are fetched often and carry no API traffic).
    """

    def __init__(self, app, quiet_paths: Iterable[str] = ()):
        super().__init__(app)
        self.quiet_paths = frozenset(quiet_paths)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        path = request.url.path
        status = response.status_code
        if path in self.quiet_paths:
            log_level = logging.DEBUG
        elif status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        error_code = getattr(request.state, "error_code", "")
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s]%s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            f" {error_code}" if error_code else "",
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response

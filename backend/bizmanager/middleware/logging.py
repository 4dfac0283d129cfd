"""
Business Manager Backend — Access Log Middleware
================================================

What:  One access-log line per API call: method, path, status, duration,
       request id and the shop / role the caller claimed.
When:  Runs inside RequestIDMiddleware so the request id is already set.

Privacy:
    ✅ Logged: method, path, shopName / userRole, status, duration, IP
    ❌ Never logged: bodies (passwords, client phone numbers and addresses)
       and userId
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from bizmanager.middleware.request_id import request_id_var

logger = logging.getLogger("bizmanager.access")

_QUIET_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})
_SCOPE_KEYS = ("shopName", "userRole")


def level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Probes and API docs are served without a log line."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in _QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get("")
        scope = " ".join(
            f"{key}={request.query_params[key]}"
            for key in _SCOPE_KEYS
            if request.query_params.get(key)
        )
        logger.log(
            level_for(response.status_code),
            "%s %s -> %d in %.1fms [%s] %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            rid,
            scope or "unscoped",
            extra={
                "request_id": rid,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
        return response

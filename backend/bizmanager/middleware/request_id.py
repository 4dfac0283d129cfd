"""
Business Manager Backend — Request ID Middleware
================================================

What:  Tags every request with a correlation id, echoed back in the
       `X-Request-ID` response header and in every error body.
How:   A caller-supplied `X-Request-ID` is kept; otherwise an 8-character
       hex id is generated. The id lives in a ContextVar that loggers and
       the exception handlers in main.py read.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = request.headers.get(HEADER) or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[HEADER] = rid
        return response

"""
GameShelf Backend — Request ID Middleware
===========================================

What:  Tags each request with a short correlation ID.
How:   Reuses a client-sent X-Request-ID header when it is short and made
       of safe characters, otherwise generates one. The ID is stored
       in a ContextVar and on request.state, and echoed in the response.
Who:   Read by RequestLoggingMiddleware and by the exception handlers, which
       include it in every error body.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

# Client IDs end up in log lines and error bodies; anything else is replaced
_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._:-]{1,64}")


def resolve_request_id(header_value: Optional[str]) -> str:
    """Returns the client's ID when it is short and log-safe, else a new one."""
    if header_value and _CLIENT_ID_PATTERN.fullmatch(header_value):
        return header_value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a request ID and returns it in the X-Request-ID header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response

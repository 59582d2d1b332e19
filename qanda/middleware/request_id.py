"""
Q&A Backend: Request ID Middleware
===================================

What:  Tags each request with a short correlation ID and returns it in the
       X-Request-ID response header.
How:   Reuses the client's X-Request-ID when present, otherwise generates
       one. The ID lives in a ContextVar so loggers and exception handlers
       running in the same coroutine can read it.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        # Left set after the response: the catch-all error handler runs
        # outside this middleware and still reads it
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response

"""
Noteful API: Request ID Middleware
==================================

What:  Assigns a correlation id to each request and echoes it in the
       X-Request-ID response header, including on unexpected 500s.
How:   Uses the client's X-Request-ID when present, otherwise a short UUID;
       stores it in a ContextVar for loggers and exception handlers.

Unhandled exceptions escape call_next() before Starlette's outermost
ServerErrorMiddleware sees them, by which point the ContextVar is reset and
no header can be attached. They are answered here instead:

    HTTP/1.1 500
    X-Request-ID: 1f2e3d4c
    {"error": "internal_server_error", "message": "...", "request_id": "1f2e3d4c"}
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Coroutine-local storage for the current request id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def internal_error_response(rid: str) -> JSONResponse:
    """The 500 body shared by this middleware and the app's catch-all handler."""
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again or contact support.",
            "request_id": rid,
        },
    )


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags every request and response with a correlation id."""

    header_name = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(self.header_name) or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                rid, request.method, request.url.path, str(e), exc_info=True,
            )
            response = internal_error_response(rid)
        finally:
            request_id_var.reset(token)

        response.headers[self.header_name] = rid
        return response

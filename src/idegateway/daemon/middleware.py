"""HTTP middleware for request correlation."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from idegateway.core.logging import clear_request_id, set_request_id

REQUEST_ID_HEADER = "X-Request-ID"

# Type alias for the call_next function
CallNext = Callable[[Request], Awaitable[Response]]


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach a correlation id to each request's logs and response."""

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        rid = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_request_id()
        response.headers[REQUEST_ID_HEADER] = rid
        return response

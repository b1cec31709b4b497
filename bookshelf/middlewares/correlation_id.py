"""
Middleware for request correlation ID tracking.

Every request gets a short id that is echoed in the ``X-Correlation-ID``
response header and printed by the log formatters.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

CORRELATION_ID_HEADER = "X-Correlation-ID"
CORRELATION_ID_LENGTH = 8

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def new_correlation_id() -> str:
    return uuid.uuid4().hex[:CORRELATION_ID_LENGTH]


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Attach a correlation ID to each request.

    The id is taken from the ``X-Correlation-ID`` request header when the
    client sends one and generated otherwise. Either way it is cut to
    8 characters, stored in ``request.state.request_id`` and in a context
    variable, and returned in the response header.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        cid = request.headers.get(CORRELATION_ID_HEADER) or new_correlation_id()
        cid = cid[:CORRELATION_ID_LENGTH]

        request.state.request_id = cid
        token = correlation_id.set(cid)
        try:
            response = await call_next(request)
        finally:
            correlation_id.reset(token)

        response.headers[CORRELATION_ID_HEADER] = cid
        return response


def get_correlation_id() -> str:
    """
    Get the correlation ID for the current request context.

    Returns:
        The correlation ID string, or empty string outside a request.
    """
    return correlation_id.get()

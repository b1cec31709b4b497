"""
Middleware for injecting contextual fields into structured logs.

Fields set here are added to every JSON log record written while the
request is processed.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from bookshelf.logging import clear_log_context, logger, set_log_context
from bookshelf.settings import app_settings


class LoggingContextMiddleware(BaseHTTPMiddleware):  # type: ignore[misc]
    """
    Middleware to inject endpoint, method and status_code into log context.

    Also writes one access line per request, except for the paths listed
    in ``LOG_EXCLUDED_PATHS``.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        set_log_context(endpoint=request.url.path, method=request.method)

        try:
            response = await call_next(request)
            set_log_context(status_code=response.status_code)

            if request.url.path not in app_settings.LOG_EXCLUDED_PATHS:
                logger.info(
                    f"{request.method} {request.url.path} {response.status_code}"
                )
            return response
        finally:
            clear_log_context()

"""
Prometheus metrics middleware for HTTP requests.

Requests are labelled by their route template (``/v0/authors/{id}``) rather
than the concrete path, so the number of label values stays bounded. The
template is only known once routing has run, so in-progress requests are
labelled by method alone.
"""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from bookshelf.settings import app_settings
from bookshelf.utils.metrics import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)

UNMATCHED_ROUTE = "<unmatched>"


def route_template(request: Request) -> str:
    """
    Path template of the route that handled the request.

    Must be called after the request went through routing.

    Returns:
        The route path such as ``/v0/books/{id}``, or ``<unmatched>``
        when no route matched.
    """
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ROUTE)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware to track Prometheus metrics for HTTP requests.

    Tracks the following metrics:
    - http_requests_total: Counter of total requests by method, endpoint, and status
    - http_request_duration_seconds: Histogram of request durations
    - http_requests_in_progress: Gauge of in-progress requests by method
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in app_settings.LOG_EXCLUDED_PATHS:
            return await call_next(request)

        method = request.method
        http_requests_in_progress.labels(method=method).inc()
        start_time = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            endpoint = route_template(request)
            http_request_duration_seconds.labels(
                method=method, endpoint=endpoint
            ).observe(time.perf_counter() - start_time)
            http_requests_total.labels(
                method=method, endpoint=endpoint, status_code=status_code
            ).inc()
            http_requests_in_progress.labels(method=method).dec()

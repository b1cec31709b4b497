"""
Prometheus metrics definitions.

Metrics are registered once per process on the default registry and
exposed by the ``/metrics`` endpoint.
"""

from prometheus_client import REGISTRY, Counter, Gauge, Histogram


def _get_or_create(metric_cls, name: str, doc: str, labels: list[str] | None = None, **kwargs):
    """
    Get existing metric or create new one.

    Prevents duplicate registration errors during development with --reload
    and when tests build the application more than once.
    """
    try:
        return metric_cls(name, doc, labels or [], **kwargs)
    except ValueError:
        # Metric already exists, retrieve it from registry
        return REGISTRY._names_to_collectors[name]


# HTTP Request Metrics
http_requests_total = _get_or_create(
    Counter,
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = _get_or_create(
    Histogram,
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_in_progress = _get_or_create(
    Gauge,
    "http_requests_in_progress",
    "HTTP requests currently being processed",
    ["method"],
)

# Database Metrics
db_query_errors_total = _get_or_create(
    Counter,
    "db_query_errors_total",
    "Total database query errors",
    ["method", "error_type"],
)

# Application Metrics
app_errors_total = _get_or_create(
    Counter,
    "app_errors_total",
    "Total application errors returned to clients",
    ["error_type", "status_code"],
)

app_info = _get_or_create(
    Gauge,
    "app_info",
    "Application information",
    ["version", "python_version", "environment"],
)

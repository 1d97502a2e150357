"""
Reusable ASGI / Starlette middleware for HTTP request metrics.

Usage::

    from arbor_common.observability.middleware import MetricsMiddleware
    from arbor_common.observability import create_counter, create_histogram

    HTTP_REQUESTS = create_counter(
        "http_requests_total", "Total HTTP requests", ["method", "path", "status"]
    )
    HTTP_LATENCY = create_histogram(
        "http_request_duration_seconds", "HTTP latency", labelnames=["method", "path"]
    )

    app.add_middleware(MetricsMiddleware, counter=HTTP_REQUESTS, histogram=HTTP_LATENCY)

Only ``http`` scopes pass through ``BaseHTTPMiddleware``; WebSocket
traffic is not counted here.
"""

import time

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class MetricsMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that records a labelled Counter (and optionally
    a latency Histogram) per request.

    Args:
        app: The ASGI application.
        counter: A ``prometheus_client.Counter`` with labels
            ``["method", "path", "status"]``.
        histogram: Optional ``prometheus_client.Histogram`` with labels
            ``["method", "path"]``.
        ignored_paths: Optional set of paths to skip
            (e.g. ``{"/metrics"}``).
    """

    def __init__(
        self,
        app,
        counter: Counter,
        histogram: Histogram | None = None,
        ignored_paths: set[str] | None = None,
    ):
        super().__init__(app)
        self.counter = counter
        self.histogram = histogram
        self.ignored_paths = ignored_paths or set()

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        path = request.url.path
        if path in self.ignored_paths:
            return response

        self.counter.labels(
            method=request.method,
            path=path,
            status=response.status_code,
        ).inc()
        if self.histogram is not None:
            self.histogram.labels(method=request.method, path=path).observe(elapsed)

        return response

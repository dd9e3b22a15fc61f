"""Prometheus metrics & middleware for the statistics service.

Collects per-endpoint request count, error count and latency, and exposes
them on /metrics for Prometheus to scrape.
"""
from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)
import time

REQUEST_COUNT_NAME = "stats_analyzer_request_total"
REQUEST_LATENCY_NAME = "stats_analyzer_request_duration_seconds"
REQUEST_ERROR_COUNT_NAME = "stats_analyzer_request_errors_total"
SAMPLE_SIZE_NAME = "stats_analyzer_sample_size"

# -----------------------------------------------------------------------------
# Metric objects
# -----------------------------------------------------------------------------
# Registered once per process in the default registry.
REQUEST_COUNT = Counter(
    name=REQUEST_COUNT_NAME,
    documentation="Total HTTP requests",
    labelnames=["path", "method", "status"],
)

# Exposed as _bucket, _count and _sum series.
REQUEST_LATENCY = Histogram(
    name=REQUEST_LATENCY_NAME,
    documentation="Request latency in seconds",
    labelnames=["path", "method"],
)

# Responses with status >= 400, including rejected sample sets.
REQUEST_ERROR_COUNT = Counter(
    name=REQUEST_ERROR_COUNT_NAME,
    documentation="Total HTTP error responses (status >= 400)",
    labelnames=["path", "method", "status"],
)

# Size of each sample set accepted by /summary or /statistics/{name}.
SAMPLE_SIZE = Histogram(
    name=SAMPLE_SIZE_NAME,
    documentation="Number of samples per analyzed request",
    labelnames=["path"],
    buckets=(1, 10, 100, 1_000, 10_000, 100_000),
)

# -----------------------------------------------------------------------------
# ASGI middleware
# -----------------------------------------------------------------------------
def route_label(scope) -> str:
    """Route template ("/statistics/{name}") when routed, raw path otherwise."""
    route = scope.get("route")
    return getattr(route, "path", None) or scope.get("path", "")


def record_response(path: str, method: str, status: int, elapsed: float) -> None:
    REQUEST_COUNT.labels(path, method, status).inc()
    if status >= 400:
        REQUEST_ERROR_COUNT.labels(path, method, status).inc()
    REQUEST_LATENCY.labels(path, method).observe(elapsed)


class MetricsMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        # Lifespan and websocket scopes pass straight through
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started_at = time.perf_counter()

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                record_response(
                    route_label(scope),
                    scope["method"],
                    int(message["status"]),
                    time.perf_counter() - started_at,
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)

# -----------------------------------------------------------------------------
# /metrics endpoint
# -----------------------------------------------------------------------------
metrics_router = APIRouter()

@metrics_router.get("/metrics")
async def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

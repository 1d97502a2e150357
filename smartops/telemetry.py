"""
Service-specific telemetry for smartops-core.

Domain metrics and FastAPI instrumentation that sit on top of the
shared ``arbor_common.observability`` module.
"""

import logging

from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from arbor_common.observability import (
    create_counter,
    create_gauge,
    create_histogram,
    MetricsMiddleware,
)

logger = logging.getLogger("telemetry")

# ── HTTP ──────────────────────────────────────────────────────────

HTTP_REQUESTS = create_counter(
    "http_requests_total",
    "Total HTTP requests by method and path",
    ["method", "path", "status"],
)

HTTP_REQUEST_DURATION = create_histogram(
    "http_request_duration_seconds",
    "HTTP request latency by method and path",
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
    labelnames=["method", "path"],
)

# ── Push channel ─────────────────────────────────────────────────

CHANNEL_CONNECTIONS_ACTIVE = create_gauge(
    "channel_connections_active",
    "Currently open push-channel connections",
)

CHANNEL_CONNECTIONS_TOTAL = create_counter(
    "channel_connections_total",
    "Push-channel connections accepted since start",
)

METRICS_BROADCASTS = create_counter(
    "metrics_broadcasts_total",
    "Broadcast ticks that pushed a metrics sample",
)

METRICS_BROADCAST_DURATION = create_histogram(
    "metrics_broadcast_duration_seconds",
    "Time spent delivering one metrics sample to all connections",
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25],
)

CHAT_MESSAGES = create_counter(
    "chat_messages_total",
    "Chat queries answered, by matched reply category",
    ["category"],
)

CHANNEL_MESSAGES_REJECTED = create_counter(
    "channel_messages_rejected_total",
    "Inbound channel frames dropped as malformed or unknown",
    ["reason"],
)

# ── Site API ─────────────────────────────────────────────────────

CONTACT_SUBMISSIONS = create_counter(
    "contact_submissions_total",
    "Contact form submissions by outcome",
    ["outcome"],
)


# ── Initialization ───────────────────────────────────────────────

def init(app):
    """Wire service-specific telemetry into the FastAPI app.

    * Adds the HTTP-metrics middleware.
    * Instruments FastAPI with OpenTelemetry auto-instrumentation.
    """
    app.add_middleware(
        MetricsMiddleware,
        counter=HTTP_REQUESTS,
        histogram=HTTP_REQUEST_DURATION,
        ignored_paths={"/metrics"},
    )

    # FastAPI auto-instrumentation (creates spans for every route)
    try:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI instrumentation enabled")
    except Exception as e:
        logger.warning("FastAPI instrumentation failed: %s", e)

    logger.info("Service telemetry initialised")

"""OpenTelemetry tracing bootstrap (OTLP over HTTP)."""

import logging
import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)

_TRACES_PATH = "/v1/traces"


def _traces_endpoint(endpoint: str) -> str:
    endpoint = endpoint.rstrip("/")
    if endpoint.endswith(_TRACES_PATH):
        return endpoint
    return endpoint + _TRACES_PATH


def init_tracing(service_name: str, endpoint: str | None = None) -> None:
    """
    Install a global TracerProvider that batches spans to an OTLP collector.

    Args:
        service_name: Name of the service (e.g. "smartops-core").
        endpoint: OTLP HTTP base URL (e.g. "http://collector:4318").
            Falls back to ``OTEL_EXPORTER_OTLP_ENDPOINT``, then
            ``http://localhost:4318``.
    """
    if endpoint is None:
        endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318")
    traces_endpoint = _traces_endpoint(endpoint)

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=traces_endpoint)))
    trace.set_tracer_provider(provider)

    logger.info("Tracing initialized for %s (exporting to %s)", service_name, traces_endpoint)


def shutdown_tracing() -> None:
    """Flush and shutdown the global tracer provider."""
    provider = trace.get_tracer_provider()
    if not hasattr(provider, "shutdown"):
        return
    try:
        provider.shutdown()
        logger.info("Tracer shutdown complete")
    except Exception as exc:
        logger.warning("Tracer shutdown warning: %s", exc)

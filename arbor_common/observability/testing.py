"""
Test utilities for the observability stack.

Provides helpers to set up an in-memory tracing exporter, query exported
spans, and reset the Prometheus collector registry between tests.
"""

from prometheus_client import REGISTRY
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import ReadableSpan, TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter


def setup_test_tracing(service_name: str = "test-service") -> InMemorySpanExporter:
    """
    Install a TracerProvider backed by an InMemorySpanExporter.

    Forcefully replaces any existing global provider so it works across
    multiple tests, and returns the exporter so spans can be inspected.
    """
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    exporter = InMemorySpanExporter()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    # Bypass the "provider already set" guard
    trace._TRACER_PROVIDER = None
    trace._TRACER_PROVIDER_SET_ONCE._done = False
    trace.set_tracer_provider(provider)
    return exporter


def get_spans_by_name(exporter: InMemorySpanExporter, name: str) -> list[ReadableSpan]:
    """Filter exported spans by operation name."""
    return [s for s in exporter.get_finished_spans() if s.name == name]


def reset_metrics() -> None:
    """
    Unregister all user-created collectors from the default Prometheus
    registry so the next test gets a clean slate.

    Keeps platform collectors (``gc``, ``process``, ``platform``) intact.
    """
    user_collectors = {
        collector
        for collector in REGISTRY._names_to_collectors.values()
        # Platform / internal collectors don't have _name
        if hasattr(collector, "_name")
    }
    for collector in user_collectors:
        try:
            REGISTRY.unregister(collector)
        except KeyError:
            continue

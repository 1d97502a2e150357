"""
Prometheus metrics factory functions with idempotent registration.

Provides ``create_counter``, ``create_histogram``, ``create_info``,
``create_gauge`` wrappers that return the already-registered collector
when a module is imported twice (e.g. by the app and by a test), plus
``create_service_info`` for the standard service-metadata pattern and
``metrics_response`` for generating a Prometheus HTTP response.
"""

import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)


def _lookup(name: str):
    """Find a registered collector by the name it was declared with."""
    # Counters store their name with ``_total`` stripped
    candidates = {name, name.removesuffix("_total")}
    for collector in set(REGISTRY._names_to_collectors.values()):
        if getattr(collector, "_name", None) in candidates:
            return collector
    return None


def _get_or_create(metric_cls, name, documentation, **kwargs):
    """Create a metric or return the existing one if already registered."""
    try:
        return metric_cls(name, documentation, **kwargs)
    except ValueError:
        existing = _lookup(name)
        if existing is None:
            raise
        return existing


def create_counter(name: str, documentation: str, labelnames: list[str] | None = None) -> Counter:
    """Create (or retrieve) a Prometheus Counter."""
    return _get_or_create(Counter, name, documentation, labelnames=labelnames or [])


def create_histogram(
    name: str,
    documentation: str,
    buckets: list[float] | None = None,
    labelnames: list[str] | None = None,
) -> Histogram:
    """Create (or retrieve) a Prometheus Histogram."""
    kwargs = {}
    if buckets:
        kwargs["buckets"] = buckets
    if labelnames:
        kwargs["labelnames"] = labelnames
    return _get_or_create(Histogram, name, documentation, **kwargs)


def create_info(name: str, documentation: str) -> Info:
    """Create (or retrieve) a Prometheus Info metric."""
    return _get_or_create(Info, name, documentation)


def create_gauge(name: str, documentation: str, labelnames: list[str] | None = None) -> Gauge:
    """Create (or retrieve) a Prometheus Gauge."""
    return _get_or_create(Gauge, name, documentation, labelnames=labelnames or [])


def create_service_info(service_name: str, version: str, environment: str | None = None) -> Info:
    """
    Create and populate a service-metadata Info metric.

    Args:
        service_name: Prometheus metric name prefix (e.g. ``"smartops_core"``).
        version: Service version string (e.g. ``"1.0.0"``).
        environment: Deployment environment.  Falls back to the
            ``ENVIRONMENT`` env-var, then ``"development"``.

    Returns:
        The populated ``Info`` collector.
    """
    info = create_info(service_name, "Service metadata")
    info.info({
        "version": version,
        "environment": environment or os.environ.get("ENVIRONMENT", "development"),
    })
    return info


def metrics_response() -> tuple[bytes, str]:
    """
    Return Prometheus exposition-format bytes and the matching content-type.

    Returns:
        tuple[bytes, str]: ``(body, content_type)`` ready for an HTTP response.
    """
    return generate_latest(), CONTENT_TYPE_LATEST

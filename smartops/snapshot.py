"""
Monitoring snapshot for the dashboard endpoint.

Uses its own random source, independent of the live broadcast, and
regenerates every field on each call.
"""

import random
from datetime import datetime, timezone

from smartops.models import MetricRecord, MonitoringSnapshot, RegionRecord

GLOBAL_UPTIME = 99.97

# (region, latency floor in ms, uptime, active instances)
REGIONS = (
    ("US-East (Virginia)", 10, 99.99, 1247),
    ("US-West (Oregon)", 15, 99.98, 892),
    ("EU-West (Ireland)", 20, 99.97, 654),
    ("APAC-Southeast (Singapore)", 25, 99.96, 423),
    ("APAC-Northeast (Tokyo)", 25, 99.95, 389),
)

METRIC_NAMES = (
    "Global CPU Usage",
    "Memory Utilization",
    "Network Throughput",
    "API Response Time",
    "Error Rate",
    "Database Connections",
)

_rng = random.Random()


def _regions(rng: random.Random) -> list[RegionRecord]:
    return [
        RegionRecord(
            region=name,
            status="operational",
            latency=floor + rng.randrange(10),
            uptime=uptime,
            activeInstances=instances,
            incidents=0,
        )
        for name, floor, uptime, instances in REGIONS
    ]


def _metrics(rng: random.Random) -> list[MetricRecord]:
    def pct(low: float, span: float) -> float:
        return round(rng.random() * span + low, 1)

    def drift(scale: float) -> float:
        return round((rng.random() - 0.5) * scale, 1)

    rows = [
        (pct(30, 30), "%", "stable", drift(5)),
        (pct(50, 30), "%", "stable", drift(3)),
        (pct(10, 10), "Gbps", "up", round(rng.random() * 2, 1)),
        (rng.randrange(100, 150), "ms", "down", round(rng.random() * -10, 1)),
        (round(rng.random() * 0.1, 2), "%", "stable", 0),
        (rng.randrange(1100, 1300), "active", "up", rng.randrange(30)),
    ]
    return [
        MetricRecord(name=name, value=value, unit=unit, status="healthy", trend=trend, change=change)
        for name, (value, unit, trend, change) in zip(METRIC_NAMES, rows)
    ]


def generate_snapshot(rng: random.Random | None = None) -> MonitoringSnapshot:
    """Build a fresh ``MonitoringSnapshot`` with 6 metrics and 5 regions."""
    rng = rng or _rng
    return MonitoringSnapshot(
        success=True,
        timestamp=datetime.now(timezone.utc),
        metrics=_metrics(rng),
        regions=_regions(rng),
        autoRemediations=rng.randrange(100, 150),
        globalUptime=GLOBAL_UPTIME,
    )

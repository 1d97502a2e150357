"""
Synthetic metrics generator.

Every field of a ``MetricsSample`` is drawn independently on each call.
Pass a seeded ``random.Random`` to get reproducible samples in tests.
"""

import random
from datetime import datetime, timezone

from smartops.models import MetricsSample

DEFAULT_INSIGHT = "System stable. No anomalies detected."

INSIGHTS = (
    "Traffic spike detected in US-East region. Auto-scaling triggered.",
    "Database latency optimizing. Query cache refreshed.",
    "Security scan complete. zero vulnerabilities found.",
    "New container deployment successful.",
    DEFAULT_INSIGHT,
    "Memory usage elevated in Pod-42. Garbage collection initiated.",
)

# The non-default insights, in display order
NOTABLE_INSIGHTS = tuple(i for i in INSIGHTS if i != DEFAULT_INSIGHT)

ERROR_PROBABILITY = 0.1
INSIGHT_PROBABILITY = 0.3
MAX_ERROR_RATE = 5.0

_rng = random.Random()


def _error_rate(rng: random.Random) -> float:
    if rng.random() < ERROR_PROBABILITY:
        return round(rng.random() * MAX_ERROR_RATE, 2)
    return 0.0


def _insight(rng: random.Random) -> str:
    if rng.random() < INSIGHT_PROBABILITY:
        return rng.choice(NOTABLE_INSIGHTS)
    return DEFAULT_INSIGHT


def generate_metrics(rng: random.Random | None = None) -> MetricsSample:
    """Produce one metrics sample.

    Ranges: cpuLoad [20, 80), memoryUsage [30, 70), activeUsers
    [1000, 6000), responseTime [20, 120]. ``errorRate`` is 0 except on a
    10% branch where it is a 2-decimal value in [0, 5]; ``insight`` is
    the stable message except on a 30% branch that picks one of the
    notable insights.
    """
    rng = rng or _rng
    return MetricsSample(
        timestamp=datetime.now(timezone.utc),
        status="UP",
        cpuLoad=rng.randrange(20, 80),
        memoryUsage=rng.randrange(30, 70),
        activeUsers=rng.randrange(1000, 6000),
        responseTime=rng.randint(20, 120),
        errorRate=_error_rate(rng),
        insight=_insight(rng),
    )

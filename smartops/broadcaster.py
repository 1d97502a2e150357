"""
Background metrics broadcaster.

Every ``BROADCAST_INTERVAL_SECONDS`` seconds a fresh metrics sample is
generated and pushed to every open channel connection. Ticks are
independent; a failing tick is logged and the next one runs on schedule.
"""

import asyncio
import logging
import random
import time

from opentelemetry import trace

from smartops.config import BROADCAST_INTERVAL_SECONDS
from smartops.connections import METRICS_EVENT, ConnectionManager
from smartops.connections import manager as default_manager
from smartops.generator import generate_metrics
from smartops.telemetry import METRICS_BROADCASTS, METRICS_BROADCAST_DURATION

logger = logging.getLogger("broadcaster")


async def run_broadcast_tick(
    manager: ConnectionManager,
    rng: random.Random | None = None,
) -> int:
    """Generate one sample and push it to every connection.

    Extracted from the loop so tests can drive a single tick.

    Returns:
        Number of connections the sample reached.
    """
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span("broadcast metrics") as span:
        start = time.perf_counter()
        sample = generate_metrics(rng)
        delivered = await manager.broadcast(METRICS_EVENT, sample)
        METRICS_BROADCAST_DURATION.observe(time.perf_counter() - start)
        span.set_attribute("channel.delivered", delivered)

    METRICS_BROADCASTS.inc()
    logger.debug(
        "Broadcast tick: cpu=%d%% users=%d delivered=%d",
        sample.cpuLoad,
        sample.activeUsers,
        delivered,
    )
    return delivered


async def broadcast_loop(
    manager: ConnectionManager | None = None,
    interval: float | None = None,
) -> None:
    """Run ``run_broadcast_tick`` every *interval* seconds, forever.

    The first tick fires one interval after start. Designed to be
    launched via ``asyncio.create_task`` inside the FastAPI lifespan.
    """
    if manager is None:
        manager = default_manager
    interval = interval or BROADCAST_INTERVAL_SECONDS

    logger.info("Metrics broadcaster started (interval=%.1fs)", interval)

    while True:
        try:
            await asyncio.sleep(interval)
            await run_broadcast_tick(manager)
        except asyncio.CancelledError:
            logger.info("Metrics broadcaster cancelled, shutting down")
            raise
        except Exception:
            logger.exception("Broadcast tick failed")

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from arbor_common.observability import init_observability, get_logger, shutdown_tracing

from smartops import __version__
from smartops.config import CORS_ALLOW_ORIGINS, LOG_LEVEL
from smartops.connections import manager
from smartops.routes import channel_router, contact_router, health_router, monitoring_router
from smartops.routes.contact import validation_exception_handler

# Bootstrap logging + tracing + service-info in one call
init_observability("smartops-core", __version__, log_level=LOG_LEVEL)

logger = get_logger("smartops-core")

_broadcast_task = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _broadcast_task

    # Start the process-wide metrics broadcaster
    from smartops.broadcaster import broadcast_loop
    _broadcast_task = asyncio.create_task(broadcast_loop(manager))
    logger.info("Metrics broadcaster scheduled")

    yield

    # Shutdown: stop the timer, then close the channel
    if _broadcast_task:
        _broadcast_task.cancel()
        try:
            await _broadcast_task
        except asyncio.CancelledError:
            pass
        _broadcast_task = None

    await manager.close_all()

    # Flush remaining traces before shutdown
    shutdown_tracing()


app = FastAPI(
    title="SmartOps Core",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(contact_router)
app.include_router(health_router)
app.include_router(monitoring_router)
app.include_router(channel_router)

# Initialize telemetry at module level (before requests start)
try:
    from smartops import telemetry
    telemetry.init(app)
except Exception as e:
    logger.warning(f"Telemetry init skipped: {e}")

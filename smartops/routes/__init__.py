from .contact import router as contact_router
from .health import router as health_router
from .monitoring import router as monitoring_router
from .channel import router as channel_router

__all__ = ["contact_router", "health_router", "monitoring_router", "channel_router"]

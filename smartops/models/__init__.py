from .metrics import MetricsSample
from .chat import ChannelEvent, ChatQuery, ChatReply
from .contact import ContactSubmission, ContactResponse
from .monitoring import MetricRecord, RegionRecord, MonitoringSnapshot
from .health import HealthResponse

__all__ = [
    "MetricsSample",
    "ChannelEvent",
    "ChatQuery",
    "ChatReply",
    "ContactSubmission",
    "ContactResponse",
    "MetricRecord",
    "RegionRecord",
    "MonitoringSnapshot",
    "HealthResponse",
]

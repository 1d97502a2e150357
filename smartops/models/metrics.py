"""Pydantic model for the live metrics pushed over the channel."""

from datetime import datetime
from pydantic import BaseModel, Field


class MetricsSample(BaseModel):
    """One synthetic metrics sample. Generated per tick, never stored."""

    timestamp: datetime
    status: str = "UP"
    cpuLoad: int = Field(ge=20, lt=80, description="Percent")
    memoryUsage: int = Field(ge=30, lt=70, description="Percent")
    activeUsers: int = Field(ge=1000, lt=6000)
    responseTime: int = Field(ge=20, le=120, description="Milliseconds")
    errorRate: float = Field(ge=0, le=5, description="Percent, 0 unless a warning fired")
    insight: str

"""Pydantic models for the on-demand monitoring snapshot."""

from datetime import datetime
from pydantic import BaseModel, Field


class MetricRecord(BaseModel):
    """A single named platform metric."""

    name: str
    value: int | float
    unit: str
    status: str = Field(description="healthy, degraded, or down")
    trend: str = Field(description="up, down, or stable")
    change: int | float


class RegionRecord(BaseModel):
    """Per-region availability figures."""

    region: str
    status: str
    latency: int = Field(description="Milliseconds")
    uptime: float
    activeInstances: int
    incidents: int = 0


class MonitoringSnapshot(BaseModel):
    """Freshly generated dashboard payload. Never cached."""

    success: bool = True
    timestamp: datetime
    metrics: list[MetricRecord]
    regions: list[RegionRecord]
    autoRemediations: int = Field(ge=100, lt=150)
    globalUptime: float = 99.97

from fastapi import APIRouter

from smartops.models import MonitoringSnapshot
from smartops.snapshot import generate_snapshot

router = APIRouter(prefix="/api", tags=["Monitoring"])


@router.get("/monitoring", response_model=MonitoringSnapshot)
def monitoring():
    """Fresh dashboard snapshot: 6 platform metrics and 5 regions, never cached."""
    return generate_snapshot()

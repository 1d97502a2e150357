from fastapi import APIRouter, Response

from arbor_common.observability import metrics_response
from smartops.config import SERVICE_NAME
from smartops.models import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/api/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="OK", message=f"{SERVICE_NAME} Core Online")


@router.get("/metrics")
def metrics():
    body, content_type = metrics_response()
    return Response(content=body, media_type=content_type)

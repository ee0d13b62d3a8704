"""
Prometheus metrics endpoint
"""
from app.core.metrics import get_metrics, get_metrics_content_type
from fastapi import APIRouter
from fastapi.responses import Response

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
async def metrics():
    """
    Prometheus metrics endpoint

    Returns metrics in Prometheus text format
    """
    return Response(content=get_metrics(), media_type=get_metrics_content_type())

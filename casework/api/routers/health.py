# casework/api/routers/health.py

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from casework.api.dependencies import get_app_settings, get_metrics, get_policy_pack
from casework.config.settings import AppSettings
from casework.domain.models.policy import PolicyPack
from casework.observability.metrics import MetricsCollector

router = APIRouter()


@router.get("/health")
async def health(
    request: Request,
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    pack: Annotated[PolicyPack, Depends(get_policy_pack)],
):
    """Health check with correlation ID and the loaded policy pack."""
    return {
        "status": "ok",
        "correlation_id": request.state.correlation_id,
        "environment": settings.environment,
        "version": settings.version,
        "policy_pack_id": pack.pack_id,
    }


@router.get("/metrics")
async def metrics(collector: Annotated[MetricsCollector, Depends(get_metrics)]):
    return collector.export_metrics()

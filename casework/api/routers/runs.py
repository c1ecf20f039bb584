"""Runs router: POST /runs generates and replays a scenario batch, then summarizes it."""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from casework.api.dependencies import get_app_settings, get_metrics, get_policy_pack
from casework.config.settings import AppSettings
from casework.domain.exceptions import DomainValidationError
from casework.domain.models.policy import PolicyPack
from casework.domain.schemas.requests import RunRequest
from casework.observability.metrics import MetricsCollector
from casework.observability.run_summary import compute_run_summary
from casework.runner.case_runner import run_scenario

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
def create_run(
    request: Request,
    body: RunRequest,
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    pack: Annotated[PolicyPack, Depends(get_policy_pack)],
    metrics: Annotated[MetricsCollector, Depends(get_metrics)],
):
    """Synchronous handler; FastAPI runs it on its worker thread pool."""
    count = body.count if body.count is not None else settings.default_run_count
    if count > settings.max_run_count:
        raise DomainValidationError(f"count must be between 1 and {settings.max_run_count}")

    run_id = str(uuid.uuid4())
    logger.info(
        "run_requested",
        extra={"scenario": body.scenario, "count": count, "seed": body.seed},
    )
    result = run_scenario(
        body.scenario,
        count,
        body.seed,
        pack,
        start_date=settings.simulation_start_date,
        max_workers=settings.max_workers,
        metrics=metrics if settings.enable_metrics else None,
        run_id=run_id,
    )
    response = {
        "run_id": result.run_id,
        "scenario": result.scenario,
        "seed": result.seed,
        "correlation_id": getattr(request.state, "correlation_id", None),
        "summary": compute_run_summary(result).model_dump(mode="json"),
    }
    if body.include_cases:
        response["cases"] = [cr.model_dump(mode="json") for cr in result.case_results]
    return response

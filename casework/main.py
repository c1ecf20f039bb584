# casework/main.py

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from casework.api.middleware import AuditTriggerMiddleware, CorrelationIdMiddleware
from casework.api.routers import artifacts, health, oracle, runs, transitions
from casework.api.routers import policy_pack as policy_pack_router
from casework.config.logging import configure_logging
from casework.config.settings import AppSettings, get_settings
from casework.domain.exceptions import DomainError, DomainValidationError, PolicyPackLoadError
from casework.domain.models.policy import PolicyPack
from casework.infrastructure.policy_pack_loader import load_policy_pack
from casework.observability.metrics import MetricsCollector

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    policy_pack: Optional[PolicyPack] = None,
    metrics: Optional[MetricsCollector] = None,
) -> FastAPI:
    """Build the API. The policy pack is loaded once here; a broken pack fails startup."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.policy_pack = policy_pack or load_policy_pack(settings.policy_pack_dir)
    app.state.metrics = metrics or MetricsCollector()

    # Middleware order: last added runs first (outermost). Request flow: CorrelationId -> AuditTrigger.
    app.add_middleware(AuditTriggerMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    @app.exception_handler(DomainValidationError)
    async def domain_validation_error_handler(request, exc: DomainValidationError):
        return JSONResponse(status_code=422, content={"detail": exc.message})

    @app.exception_handler(PolicyPackLoadError)
    async def policy_pack_load_error_handler(request, exc: PolicyPackLoadError):
        return JSONResponse(status_code=500, content={"detail": exc.message})

    @app.exception_handler(DomainError)
    async def domain_error_handler(request, exc: DomainError):
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request, exc: Exception):
        logger.error("unhandled_error", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # Routers: /health, /metrics, /policy-pack, /oracle, /transitions, /artifacts, /runs
    app.include_router(health.router)
    app.include_router(policy_pack_router.router, prefix="/policy-pack")
    app.include_router(oracle.router, prefix="/oracle")
    app.include_router(transitions.router, prefix="/transitions")
    app.include_router(artifacts.router, prefix="/artifacts")
    app.include_router(runs.router, prefix="/runs")
    return app


app = create_app()

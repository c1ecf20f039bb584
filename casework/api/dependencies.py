"""FastAPI dependency injection: loaded policy pack, metrics collector, settings, correlation_id."""

from fastapi import Request

from casework.config.settings import AppSettings
from casework.domain.models.policy import PolicyPack
from casework.observability.metrics import MetricsCollector


def get_policy_pack(request: Request) -> PolicyPack:
    """Policy pack loaded once by create_app and shared read-only."""
    return request.app.state.policy_pack


def get_metrics(request: Request) -> MetricsCollector:
    return request.app.state.metrics


def get_app_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""

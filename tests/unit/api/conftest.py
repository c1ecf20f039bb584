"""Fixtures for API unit tests: app built around the session policy pack, AsyncClient."""

import pytest
from httpx import ASGITransport, AsyncClient

from casework.config.settings import AppSettings
from casework.main import create_app
from casework.observability.metrics import MetricsCollector


@pytest.fixture
def settings():
    return AppSettings(environment="test", max_run_count=200)


@pytest.fixture
def metrics():
    return MetricsCollector()


@pytest.fixture
def test_app(settings, policy_pack, metrics):
    return create_app(settings=settings, policy_pack=policy_pack, metrics=metrics)


@pytest.fixture
async def async_client(test_app):
    """Async HTTP client for testing."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def household():
    return {
        "household_size": 1,
        "household_members": [{"age": 35}],
        "application_date": "2026-01-15",
        "policy_pack_id": "snap-illinois-fy2026-v1",
    }

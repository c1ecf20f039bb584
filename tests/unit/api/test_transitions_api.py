"""Tests for POST /transitions: success, citation validation, rejected transitions."""

import pytest
from httpx import AsyncClient


def _body(**overrides):
    body = {
        "case_id": "case-api-1",
        "current_state": "PENDING_VERIFICATION",
        "action": "verification_complete",
        "role": "caseworker",
        "agent_id": "worker-1",
        "citations": ["VER-MAND-001"],
        "timestamp": "2026-01-09T00:00:00Z",
        "case_data": {
            "applicant_name": "Linda Brown",
            "household_size": 2,
            "application_date": "2026-01-01T00:00:00Z",
            "required_verifications": ["identity", "income"],
            "verified_items": ["identity", "income"],
        },
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_transition_success(async_client: AsyncClient, metrics):
    r = await async_client.post("/transitions", json=_body())
    assert r.status_code == 200
    data = r.json()
    assert data["to_state"] == "READY_FOR_DETERMINATION"
    assert data["guard_results"] == [
        {"name": "verification_complete", "passed": True, "reason": None, "citation": None}
    ]
    assert metrics.export_metrics()["counters"]["transitions_applied"] == 1


@pytest.mark.asyncio
async def test_transition_requires_citation(async_client: AsyncClient):
    r = await async_client.post("/transitions", json=_body(citations=[]))
    assert r.status_code == 422
    assert r.json()["detail"] == "At least one citation is required"


@pytest.mark.asyncio
async def test_transition_unknown_citation(async_client: AsyncClient):
    r = await async_client.post("/transitions", json=_body(citations=["VER-MAND-001", "MADE-UP-9"]))
    assert r.status_code == 422
    assert r.json()["detail"] == "Unknown ruleIds: MADE-UP-9"


@pytest.mark.asyncio
async def test_transition_guard_failure_returns_409(async_client: AsyncClient):
    body = _body()
    body["case_data"]["verified_items"] = ["identity"]
    r = await async_client.post("/transitions", json=body)
    assert r.status_code == 409
    data = r.json()
    assert data["kind"] == "GUARD_FAILURE"
    assert data["guard_results"][0]["reason"] == "Missing verified items: income"


@pytest.mark.asyncio
async def test_transition_role_violation_returns_409(async_client: AsyncClient, metrics):
    r = await async_client.post("/transitions", json=_body(role="intake_clerk"))
    assert r.status_code == 409
    assert r.json()["kind"] == "ROLE_VIOLATION"
    labels = metrics.export_metrics()["counters_by_labels"]["transitions_rejected"]
    assert labels["transitions_rejected:category=ROLE_VIOLATION"] == 1


@pytest.mark.asyncio
async def test_transition_invalid_case_data_returns_422(async_client: AsyncClient):
    body = _body()
    body["case_data"]["missing_items"] = ["citizenship"]
    r = await async_client.post("/transitions", json=body)
    assert r.status_code == 422
    assert "citizenship" in r.json()["detail"]

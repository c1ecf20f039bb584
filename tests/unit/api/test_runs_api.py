"""Tests for POST /runs."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_run_missing_docs(async_client: AsyncClient):
    r = await async_client.post("/runs", json={"scenario": "missing_docs", "count": 20, "seed": 42})
    assert r.status_code == 200
    data = r.json()
    assert data["scenario"] == "missing_docs"
    assert data["summary"]["total_cases"] == 20
    assert data["summary"]["errors"] == []
    assert "cases" not in data


@pytest.mark.asyncio
async def test_run_include_cases(async_client: AsyncClient):
    r = await async_client.post(
        "/runs",
        json={"scenario": "appeal_reversal", "count": 5, "seed": 1, "include_cases": True},
    )
    data = r.json()
    assert len(data["cases"]) == 5
    assert data["summary"]["appeal_metrics"]["cases_appealed"] == 5


@pytest.mark.asyncio
async def test_run_default_count(async_client: AsyncClient, settings):
    r = await async_client.post("/runs", json={"scenario": "missing_docs"})
    assert r.json()["summary"]["total_cases"] == settings.default_run_count


@pytest.mark.asyncio
async def test_run_is_reproducible(async_client: AsyncClient):
    body = {"scenario": "missing_docs", "count": 15, "seed": 7}
    first = (await async_client.post("/runs", json=body)).json()["summary"]
    second = (await async_client.post("/runs", json=body)).json()["summary"]
    first.pop("run_id")
    second.pop("run_id")
    assert first == second


@pytest.mark.asyncio
async def test_run_unknown_scenario(async_client: AsyncClient):
    r = await async_client.post("/runs", json={"scenario": "fraud_ring", "count": 5})
    assert r.status_code == 422
    assert r.json()["detail"].startswith("Unknown scenario 'fraud_ring'")


@pytest.mark.asyncio
async def test_run_count_bounds(async_client: AsyncClient):
    too_many = await async_client.post("/runs", json={"scenario": "missing_docs", "count": 201})
    assert too_many.status_code == 422
    assert too_many.json()["detail"] == "count must be between 1 and 200"
    zero = await async_client.post("/runs", json={"scenario": "missing_docs", "count": 0})
    assert zero.status_code == 422


@pytest.mark.asyncio
async def test_run_records_metrics(async_client: AsyncClient, metrics):
    await async_client.post("/runs", json={"scenario": "missing_docs", "count": 3})
    labels = metrics.export_metrics()["counters_by_labels"]["cases_completed"]
    assert labels["cases_completed:scenario=missing_docs"] == 3

"""Integration tests for revenue projection endpoints."""

from __future__ import annotations

import pytest


def _projection(month: str, **overrides) -> dict:
    body = {"month": month, "projectedRevenue": 1000, "actualRevenue": 800, "confidence": 70}
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_create_and_get(client):
    created = await client.post("/api/revenue-projections", json=_projection("2024-05"))

    assert created.status_code == 201
    data = created.json()
    assert data["month"] == "2024-05"
    assert "updatedAt" not in data

    fetched = await client.get(f"/api/revenue-projections/{data['id']}")
    assert fetched.json() == data


@pytest.mark.asyncio
async def test_bad_month_format(client):
    response = await client.post("/api/revenue-projections", json=_projection("May 2024"))

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "month"


@pytest.mark.asyncio
async def test_month_range_filter(client):
    for month in ("2024-01", "2024-02", "2024-03", "2024-04"):
        await client.post("/api/revenue-projections", json=_projection(month))

    data = (
        await client.get(
            "/api/revenue-projections", params={"startMonth": "2024-02", "endMonth": "2024-03"}
        )
    ).json()

    assert [p["month"] for p in data] == ["2024-02", "2024-03"]


@pytest.mark.asyncio
async def test_single_bound_returns_everything(client):
    for month in ("2024-01", "2024-02"):
        await client.post("/api/revenue-projections", json=_projection(month))

    data = (await client.get("/api/revenue-projections", params={"startMonth": "2024-02"})).json()

    assert len(data) == 2


@pytest.mark.asyncio
async def test_invalid_range_parameter(client):
    response = await client.get(
        "/api/revenue-projections", params={"startMonth": "2024", "endMonth": "2024-03"}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_patch_and_delete(client, store):
    created = (await client.post("/api/revenue-projections", json=_projection("2024-01"))).json()

    patched = await client.patch(
        f"/api/revenue-projections/{created['id']}", json={"actualRevenue": 950}
    )
    assert patched.status_code == 200
    assert patched.json()["actualRevenue"] == 950
    assert patched.json()["projectedRevenue"] == 1000

    deleted = await client.delete(f"/api/revenue-projections/{created['id']}")
    assert deleted.status_code == 204
    assert len(store.revenue_projections) == 0

    entity_types = {log.entity_type for log in store.audit_logs.get_all()}
    assert entity_types == {"RevenueProjection"}


@pytest.mark.asyncio
async def test_unknown_projection(client):
    response = await client.get("/api/revenue-projections/missing")

    assert response.status_code == 404
    assert response.json() == {"error": "Revenue projection not found"}

"""Tests for the audit trail: recorder behaviour and /api/audit-logs."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from src.bizstudio.audit.recorder import Actor, AuditRecorder
from src.bizstudio.schemas.audit import AuditAction
from src.bizstudio.store.memory import Store


# ── Recorder ────────────────────────────────────────────────────────────────


def test_recorder_uses_default_actor(store):
    recorder = AuditRecorder(store.audit_logs, Actor("hr-manager-1", "HR Manager"))

    log = recorder.record(AuditAction.DELETE, "Deal", "d1", old={"value": 1})

    assert log is not None
    assert log.user_id == "hr-manager-1"
    assert log.user_name == "HR Manager"
    assert json.loads(log.old_data) == {"value": 1}
    assert log.new_data is None


def test_recorder_swallows_store_failure(store):
    recorder = AuditRecorder(store.audit_logs, Actor("u1", "User"))

    with patch.object(store.audit_logs, "create", side_effect=RuntimeError("disk full")):
        result = recorder.record(AuditAction.CREATE, "Deal", "d1", new={"value": 1})

    assert result is None
    assert len(store.audit_logs) == 0


# ── One entry per mutation ──────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_each_mutation_writes_one_entry(client, store, clock, deal_payload):
    created = (await client.post("/api/deals", json=deal_payload())).json()
    clock.advance()
    await client.patch(f"/api/deals/{created['id']}", json={"value": 20000})
    clock.advance()
    await client.delete(f"/api/deals/{created['id']}")

    logs = (await client.get("/api/audit-logs")).json()

    assert [log["action"] for log in logs] == ["DELETE", "UPDATE", "CREATE"]
    assert all(log["entityType"] == "Deal" for log in logs)
    assert all(log["entityId"] == created["id"] for log in logs)

    delete, update, create = logs
    assert create["oldData"] is None
    assert json.loads(create["newData"])["value"] == 10000
    assert json.loads(update["oldData"])["value"] == 10000
    assert json.loads(update["newData"])["value"] == 20000
    assert json.loads(delete["oldData"])["id"] == created["id"]
    assert delete["newData"] is None


@pytest.mark.asyncio
async def test_failed_mutations_write_nothing(client, store, deal_payload):
    await client.post("/api/deals", json=deal_payload(probability=150))
    await client.patch("/api/deals/missing", json={"value": 1})
    await client.delete("/api/deals/missing")

    assert len(store.audit_logs) == 0


@pytest.mark.asyncio
async def test_actor_from_headers(client, deal_payload):
    await client.post(
        "/api/deals",
        json=deal_payload(),
        headers={"X-User-Id": "rep-7", "X-User-Name": "Rep Seven"},
    )

    log = (await client.get("/api/audit-logs")).json()[0]

    assert log["userId"] == "rep-7"
    assert log["userName"] == "Rep Seven"
    assert log["ipAddress"]


@pytest.mark.asyncio
async def test_default_actor_without_headers(client, deal_payload):
    await client.post("/api/deals", json=deal_payload())

    log = (await client.get("/api/audit-logs")).json()[0]

    assert log["userId"] == "hr-manager-1"
    assert log["userName"] == "HR Manager"


@pytest.mark.asyncio
async def test_mutation_succeeds_when_audit_write_fails(client, store, deal_payload):
    with patch.object(store.audit_logs, "create", side_effect=RuntimeError("boom")):
        response = await client.post("/api/deals", json=deal_payload())

    assert response.status_code == 201
    assert len(store.deals) == 1
    assert len(store.audit_logs) == 0


# ── Filters ─────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_filter_by_entity(client, deal_payload):
    first = (await client.post("/api/deals", json=deal_payload())).json()
    await client.post("/api/deals", json=deal_payload())

    logs = (
        await client.get(
            "/api/audit-logs", params={"entityType": "Deal", "entityId": first["id"]}
        )
    ).json()

    assert len(logs) == 1
    assert logs[0]["entityId"] == first["id"]


@pytest.mark.asyncio
async def test_entity_filter_takes_precedence_over_user(client, deal_payload):
    first = (await client.post("/api/deals", json=deal_payload())).json()
    await client.post("/api/deals", json=deal_payload(), headers={"X-User-Id": "rep-2"})

    logs = (
        await client.get(
            "/api/audit-logs",
            params={"entityType": "Deal", "entityId": first["id"], "userId": "rep-2"},
        )
    ).json()

    assert [log["entityId"] for log in logs] == [first["id"]]


@pytest.mark.asyncio
async def test_filter_by_user(client, deal_payload):
    await client.post("/api/deals", json=deal_payload(), headers={"X-User-Id": "rep-1"})
    await client.post("/api/deals", json=deal_payload(), headers={"X-User-Id": "rep-2"})

    logs = (await client.get("/api/audit-logs", params={"userId": "rep-2"})).json()

    assert [log["userId"] for log in logs] == ["rep-2"]


@pytest.mark.asyncio
async def test_filter_by_date_range(client, clock, deal_payload):
    await client.post("/api/deals", json=deal_payload())
    clock.advance(86400 * 10)
    await client.post("/api/deals", json=deal_payload())

    logs = (
        await client.get(
            "/api/audit-logs",
            params={"startDate": "2024-01-15T00:00:00Z", "endDate": "2024-01-16T00:00:00Z"},
        )
    ).json()

    assert len(logs) == 1


@pytest.mark.asyncio
async def test_lone_entity_type_returns_everything(client, deal_payload):
    await client.post("/api/deals", json=deal_payload())
    await client.post("/api/users", json={"email": "a@example.com", "name": "A"})

    logs = (await client.get("/api/audit-logs", params={"entityType": "User"})).json()

    assert len(logs) == 2


@pytest.mark.asyncio
async def test_invalid_date_is_400(client):
    response = await client.get(
        "/api/audit-logs", params={"startDate": "yesterday", "endDate": "today"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


@pytest.mark.asyncio
async def test_audit_summary(client, deal_payload):
    created = (await client.post("/api/deals", json=deal_payload())).json()
    await client.patch(f"/api/deals/{created['id']}", json={"notes": "call back"})
    await client.post("/api/users", json={"email": "a@example.com", "name": "A"})

    summary = (await client.get("/api/audit-logs/summary")).json()

    assert summary["totalEntries"] == 3
    assert summary["byAction"] == {"CREATE": 2, "UPDATE": 1}
    assert summary["byEntityType"] == {"Deal": 2, "User": 1}


def test_store_starts_with_empty_trail():
    assert Store().audit_logs.get_all() == []

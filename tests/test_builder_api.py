"""Integration tests for users, projects and templates."""

from __future__ import annotations

import pytest


# ── Users ───────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_user_defaults(client):
    response = await client.post("/api/users", json={"email": "ada@example.com", "name": "Ada"})

    assert response.status_code == 201
    data = response.json()
    assert data["role"] == "member"
    assert data["avatarUrl"] is None


@pytest.mark.asyncio
async def test_duplicate_email_rejected(client, store):
    await client.post("/api/users", json={"email": "ada@example.com", "name": "Ada"})

    response = await client.post("/api/users", json={"email": "ADA@example.com", "name": "Ada 2"})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "email"
    assert len(store.users) == 1


@pytest.mark.asyncio
async def test_update_user_email_clash(client):
    await client.post("/api/users", json={"email": "a@example.com", "name": "A"})
    b = (await client.post("/api/users", json={"email": "b@example.com", "name": "B"})).json()

    clash = await client.patch(f"/api/users/{b['id']}", json={"email": "a@example.com"})
    own = await client.patch(f"/api/users/{b['id']}", json={"email": "b@example.com", "role": "admin"})

    assert clash.status_code == 400
    assert own.status_code == 200
    assert own.json()["role"] == "admin"


@pytest.mark.asyncio
async def test_user_lifecycle(client):
    user = (await client.post("/api/users", json={"email": "c@example.com", "name": "C"})).json()

    assert (await client.get(f"/api/users/{user['id']}")).status_code == 200
    assert len((await client.get("/api/users")).json()) == 1
    assert (await client.delete(f"/api/users/{user['id']}")).status_code == 204
    missing = await client.get(f"/api/users/{user['id']}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "User not found"}


# ── Projects ────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_project_defaults(client):
    response = await client.post("/api/projects", json={"userId": "u1", "name": "Shop"})

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "draft"
    assert data["uiLibrary"] == "tailwind"
    assert data["generationType"] == "full-stack"


@pytest.mark.asyncio
async def test_project_filters(client):
    await client.post("/api/projects", json={"userId": "u1", "name": "One"})
    await client.post("/api/projects", json={"userId": "u2", "name": "Two", "status": "completed"})

    by_user = (await client.get("/api/projects", params={"userId": "u1"})).json()
    by_status = (await client.get("/api/projects", params={"status": "completed"})).json()

    assert [p["name"] for p in by_user] == ["One"]
    assert [p["name"] for p in by_status] == ["Two"]


@pytest.mark.asyncio
async def test_invalid_project_status(client):
    response = await client.post(
        "/api/projects", json={"userId": "u1", "name": "X", "status": "shipping"}
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "status"


@pytest.mark.asyncio
async def test_update_project(client):
    project = (await client.post("/api/projects", json={"userId": "u1", "name": "Old"})).json()

    response = await client.patch(f"/api/projects/{project['id']}", json={"name": "New"})

    assert response.json()["name"] == "New"
    assert response.json()["userId"] == "u1"


# ── Templates ───────────────────────────────────────────────────────────────


def _template(name: str, category: str = "landing", popularity: int = 0) -> dict:
    return {"name": name, "category": category, "popularity": popularity, "createdBy": "u1"}


@pytest.mark.asyncio
async def test_create_template_defaults(client):
    response = await client.post("/api/templates", json=_template("Hero"))

    assert response.status_code == 201
    data = response.json()
    assert data["isPublic"] is True
    assert data["tags"] == []
    assert data["frontendTemplate"] == "{}"
    assert "updatedAt" not in data


@pytest.mark.asyncio
async def test_templates_by_category_and_popularity(client):
    await client.post("/api/templates", json=_template("A", "landing", 3))
    await client.post("/api/templates", json=_template("B", "portfolio", 10))
    await client.post("/api/templates", json=_template("C", "landing", 7))

    landing = (await client.get("/api/templates", params={"category": "landing"})).json()
    popular = (await client.get("/api/templates", params={"popular": "2"})).json()
    everything = (await client.get("/api/templates")).json()

    assert [t["name"] for t in landing] == ["A", "C"]
    assert [t["name"] for t in popular] == ["B", "C"]
    assert [t["name"] for t in everything] == ["A", "B", "C"]


@pytest.mark.asyncio
async def test_popular_without_number_uses_default_limit(client):
    for i in range(12):
        await client.post("/api/templates", json=_template(f"T{i}", popularity=i))

    popular = (await client.get("/api/templates", params={"popular": "true"})).json()

    assert len(popular) == 10
    assert popular[0]["name"] == "T11"


@pytest.mark.asyncio
async def test_negative_popularity_rejected(client):
    response = await client.post("/api/templates", json=_template("X", popularity=-1))

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_template_delete_is_audited(client, store):
    template = (await client.post("/api/templates", json=_template("Gone"))).json()

    await client.delete(f"/api/templates/{template['id']}")

    actions = [(log.action.value, log.entity_type) for log in store.audit_logs.get_all()]
    assert actions == [("DELETE", "Template"), ("CREATE", "Template")]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("popular", "expected"),
    [
        ("²", 10),
        ("0", 10),
        ("-3", 10),
        ("3abc", 3),
        ("abc", 10),
    ],
)
async def test_popular_limit_parsing(client, popular, expected):
    for i in range(12):
        await client.post("/api/templates", json=_template(f"T{i}", popularity=i))

    response = await client.get("/api/templates", params={"popular": popular})

    assert response.status_code == 200
    assert len(response.json()) == expected


@pytest.mark.asyncio
async def test_empty_popular_lists_everything(client):
    for i in range(12):
        await client.post("/api/templates", json=_template(f"T{i}", popularity=i))

    everything = (await client.get("/api/templates", params={"popular": ""})).json()

    assert [t["name"] for t in everything] == [f"T{i}" for i in range(12)]


@pytest.mark.asyncio
async def test_template_fields_are_not_coerced(client, store):
    response = await client.post(
        "/api/templates",
        json={**_template("X"), "popularity": "5", "isPublic": "yes", "tags": [1]},
    )

    assert response.status_code == 400
    fields = {d["field"] for d in response.json()["details"]}
    assert {"popularity", "isPublic", "tags.0"} <= fields
    assert len(store.templates) == 0


@pytest.mark.asyncio
async def test_template_tags_roundtrip_through_update(client, store):
    template = (
        await client.post("/api/templates", json={**_template("Tagged"), "tags": ["a"]})
    ).json()

    response = await client.patch(f"/api/templates/{template['id']}", json={"tags": ["a", "b"]})

    assert response.json()["tags"] == ["a", "b"]
    assert store.templates.get_by_id(template["id"]).tags == ("a", "b")

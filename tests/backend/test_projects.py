"""Endpoint tests for project commands, search and statistics."""

from __future__ import annotations

from httpx import AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from writeflow.backend.managers.projects import MAX_PAGE_SIZE

PROJECT_PAYLOAD = {
    "name": "Novel",
    "description": "A long story",
    "icon": "book",
    "color": "#3366ff",
}


async def _create(client: AsyncClient, workspace_id: str, **overrides: object) -> dict:
    resp = await client.post("/api/projects/create", json={**PROJECT_PAYLOAD, "workspace_id": workspace_id, **overrides})
    assert resp.status_code == 201
    return resp.json()


async def test_create_project_defaults(client: AsyncClient, workspace: dict) -> None:
    project = await _create(client, workspace["id"])
    assert project["status"] == "Active"
    assert project["progress"] == 0
    assert project["documents_count"] == 0
    assert project["words_count"] == 0
    assert project["workspace_id"] == workspace["id"]


async def test_create_project_increments_workspace_count(client: AsyncClient, workspace: dict) -> None:
    await _create(client, workspace["id"], name="One")
    await _create(client, workspace["id"], name="Two")

    resp = await client.get(f"/api/workspaces/{workspace['id']}/get")
    assert resp.json()["projects_count"] == 2


async def test_create_project_missing_workspace(client: AsyncClient) -> None:
    resp = await client.post("/api/projects/create", json={**PROJECT_PAYLOAD, "workspace_id": "ghost"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Workspace 'ghost' not found."

    resp = await client.get("/api/projects/list")
    assert resp.json() == []


async def test_delete_project_keeps_workspace_count(client: AsyncClient, workspace: dict, project: dict) -> None:
    resp = await client.post(f"/api/projects/{project['id']}/delete")
    assert resp.status_code == 204

    resp = await client.get(f"/api/workspaces/{workspace['id']}/get")
    assert resp.json()["projects_count"] == 1


async def test_delete_project_cascades_documents(client: AsyncClient, project: dict) -> None:
    for title in ("Chapter 1", "Chapter 2"):
        resp = await client.post("/api/documents/create", json={"title": title, "project_id": project["id"]})
        assert resp.status_code == 201
    doc_id = resp.json()["id"]

    resp = await client.post(f"/api/projects/{project['id']}/delete")
    assert resp.status_code == 204

    assert (await client.get(f"/api/projects/{project['id']}/get")).json() is None
    assert (await client.get(f"/api/documents/{doc_id}/get")).json() is None
    assert (await client.get(f"/api/documents/by-project/{project['id']}")).json() == []


async def test_update_project(client: AsyncClient, project: dict) -> None:
    body = {
        **project,
        "name": "Renamed",
        "status": "Completed",
        "progress": 100,
        "documents_count": 99,  # counters are not editable
    }
    resp = await client.post(f"/api/projects/{project['id']}/update", json=body)
    assert resp.status_code == 204

    stored = (await client.get(f"/api/projects/{project['id']}/get")).json()
    assert stored["name"] == "Renamed"
    assert stored["status"] == "Completed"
    assert stored["progress"] == 100
    assert stored["documents_count"] == 0
    assert stored["created_at"] == project["created_at"]
    assert stored["updated_at"] != project["updated_at"]


async def test_update_missing_project_is_noop(client: AsyncClient, project: dict) -> None:
    resp = await client.post("/api/projects/missing/update", json={**project, "id": "missing"})
    assert resp.status_code == 204
    assert (await client.get("/api/projects/missing/get")).json() is None


async def test_list_projects_by_workspace(client: AsyncClient, workspace: dict) -> None:
    other = (await client.post("/api/workspaces/create", json={"name": "Other"})).json()
    mine = await _create(client, workspace["id"])
    await _create(client, other["id"])

    resp = await client.get(f"/api/projects/by-workspace/{workspace['id']}")
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()] == [mine["id"]]

    resp = await client.get("/api/projects/list")
    assert len(resp.json()) == 2


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


async def test_search_sort_by_name_ascending(client: AsyncClient, workspace: dict) -> None:
    for name in ("Charlie", "alpha", "Bravo"):
        await _create(client, workspace["id"], name=name)

    resp = await client.get("/api/projects/search", params={"sort": "name", "order": "ASC"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 3
    # SQLite compares text by byte value: uppercase sorts before lowercase.
    assert [p["name"] for p in data["items"]] == ["Bravo", "Charlie", "alpha"]

    resp = await client.get("/api/projects/search", params={"sort": "name", "order": "DESC"})
    assert [p["name"] for p in resp.json()["items"]] == ["alpha", "Charlie", "Bravo"]


async def test_search_query_matches_name_or_description(client: AsyncClient, workspace: dict) -> None:
    await _create(client, workspace["id"], name="Space opera", description="ships")
    await _create(client, workspace["id"], name="Memoir", description="a life in space")
    await _create(client, workspace["id"], name="Cookbook", description="recipes")

    resp = await client.get("/api/projects/search", params={"query": "space", "sort": "name", "order": "ASC"})
    data = resp.json()
    assert data["total"] == 2
    assert [p["name"] for p in data["items"]] == ["Memoir", "Space opera"]


async def test_search_status_filter(client: AsyncClient, workspace: dict) -> None:
    done = await _create(client, workspace["id"], name="Done")
    await _create(client, workspace["id"], name="Ongoing")
    await client.post(f"/api/projects/{done['id']}/update", json={**done, "status": "Completed"})

    resp = await client.get("/api/projects/search", params={"status": "Completed"})
    data = resp.json()
    assert data["total"] == 1
    assert data["items"][0]["id"] == done["id"]

    # Unknown status values are ignored rather than rejected.
    resp = await client.get("/api/projects/search", params={"status": "Bogus"})
    assert resp.status_code == 200
    assert resp.json()["total"] == 2


async def test_search_workspace_filter(client: AsyncClient, workspace: dict) -> None:
    other = (await client.post("/api/workspaces/create", json={"name": "Other"})).json()
    await _create(client, workspace["id"])
    await _create(client, other["id"])

    resp = await client.get("/api/projects/search", params={"workspace_id": other["id"]})
    data = resp.json()
    assert data["total"] == 1
    assert data["items"][0]["workspace_id"] == other["id"]


async def test_search_pagination(client: AsyncClient, workspace: dict) -> None:
    for i in range(5):
        await _create(client, workspace["id"], name=f"P{i}")

    resp = await client.get("/api/projects/search", params={"sort": "name", "order": "ASC", "page": 2, "page_size": 2})
    data = resp.json()
    assert data["total"] == 5
    assert [p["name"] for p in data["items"]] == ["P2", "P3"]

    # Past the last page: no items, total still counts every match.
    resp = await client.get("/api/projects/search", params={"page": 10, "page_size": 2})
    data = resp.json()
    assert data["items"] == []
    assert data["total"] == 5


async def test_search_default_page_size(client: AsyncClient, workspace: dict) -> None:
    for i in range(10):
        await _create(client, workspace["id"], name=f"P{i}")

    resp = await client.get("/api/projects/search")
    data = resp.json()
    assert data["total"] == 10
    assert len(data["items"]) == 9


async def test_search_clamps_page_values(client: AsyncClient, workspace: dict) -> None:
    await _create(client, workspace["id"])

    resp = await client.get("/api/projects/search", params={"page": 0, "page_size": 0})
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 1
    assert len(data["items"]) == 1


async def test_search_huge_page_is_empty(client: AsyncClient, workspace: dict) -> None:
    await _create(client, workspace["id"])

    resp = await client.get("/api/projects/search", params={"page": 4611686018427387904, "page_size": 9})
    assert resp.status_code == 200
    assert resp.json() == {"items": [], "total": 1}


async def test_search_caps_page_size(client: AsyncClient, workspace: dict) -> None:
    for i in range(MAX_PAGE_SIZE + 1):
        await _create(client, workspace["id"], name=f"P{i:03d}")

    resp = await client.get("/api/projects/search", params={"page_size": 2**70})
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == MAX_PAGE_SIZE + 1
    assert len(data["items"]) == MAX_PAGE_SIZE


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


async def test_project_stats(client: AsyncClient, workspace: dict) -> None:
    a = await _create(client, workspace["id"], name="A")
    b = await _create(client, workspace["id"], name="B")
    await _create(client, workspace["id"], name="C")
    await client.post(f"/api/projects/{a['id']}/update", json={**a, "status": "Completed"})
    await client.post(f"/api/projects/{b['id']}/update", json={**b, "status": "Archived"})

    resp = await client.get("/api/projects/stats")
    assert resp.status_code == 200
    assert resp.json() == {"total": 3, "active": 1, "completed": 1, "archived": 1, "this_week": 3}


async def test_project_stats_empty(client: AsyncClient) -> None:
    resp = await client.get("/api/projects/stats")
    assert resp.json() == {"total": 0, "active": 0, "completed": 0, "archived": 0, "this_week": 0}


async def test_unreadable_project_status_is_reported(
    client: AsyncClient, db_session: AsyncSession, project: dict
) -> None:
    await db_session.execute(text("UPDATE projects SET status = 'Paused' WHERE id = :id"), {"id": project["id"]})
    await db_session.commit()
    db_session.expire_all()

    resp = await client.get(f"/api/projects/{project['id']}/get")
    assert resp.status_code == 500
    assert resp.json()["detail"].startswith("Operation failed:")

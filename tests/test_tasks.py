"""
Task endpoint tests.
"""

import pytest
from httpx import AsyncClient

from app.models.user import User


async def create_task(client: AsyncClient, **fields) -> dict:
    response = await client.post("/api/v1/tasks", json={"title": "Call Acme", **fields})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_defaults(auth_client: AsyncClient, test_user: User):
    task = await create_task(auth_client, assigned_to=test_user.id)

    assert task["status"] == "todo"
    assert task["priority"] == "medium"
    assert task["created_by"] == test_user.id


@pytest.mark.asyncio
async def test_unknown_assignee_is_404(auth_client: AsyncClient):
    response = await auth_client.post("/api/v1/tasks", json={"title": "Ghost", "assigned_to": 999})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_board_has_every_column(auth_client: AsyncClient, test_user: User):
    later = await create_task(auth_client, title="Later", due_date="2026-05-02")
    sooner = await create_task(auth_client, title="Sooner", due_date="2026-05-01")
    await create_task(auth_client, title="Review me", status="review", assigned_to=test_user.id)

    response = await auth_client.get("/api/v1/tasks/board")
    assert response.status_code == 200
    columns = response.json()

    assert [c["status"] for c in columns] == ["todo", "in_progress", "review", "done"]
    assert [t["id"] for t in columns[0]["tasks"]] == [sooner["id"], later["id"]]
    assert columns[1]["tasks"] == []
    assert [t["title"] for t in columns[2]["tasks"]] == ["Review me"]

    response = await auth_client.get("/api/v1/tasks/board", params={"assigned_to": test_user.id})
    assert sum(len(c["tasks"]) for c in response.json()) == 1


@pytest.mark.asyncio
async def test_move_between_columns(auth_client: AsyncClient):
    task = await create_task(auth_client)

    response = await auth_client.patch(f"/api/v1/tasks/{task['id']}/status", json={"status": "in_progress"})
    assert response.status_code == 200
    assert response.json()["status"] == "in_progress"

    response = await auth_client.patch(f"/api/v1/tasks/{task['id']}/status", json={"status": "archived"})
    assert response.status_code == 422

    response = await auth_client.get("/api/v1/tasks", params={"status": "in_progress"})
    assert response.json()["total"] == 1


@pytest.mark.asyncio
async def test_update_filter_and_delete(auth_client: AsyncClient):
    task = await create_task(auth_client)

    response = await auth_client.patch(f"/api/v1/tasks/{task['id']}", json={"priority": "urgent"})
    assert response.json()["priority"] == "urgent"

    response = await auth_client.get("/api/v1/tasks", params={"priority": "urgent"})
    assert response.json()["total"] == 1

    response = await auth_client.delete(f"/api/v1/tasks/{task['id']}")
    assert response.status_code == 200
    assert (await auth_client.get(f"/api/v1/tasks/{task['id']}")).status_code == 404

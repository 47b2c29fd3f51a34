"""
Employee endpoint tests.
"""

import pytest
from httpx import AsyncClient

from app.models.user import User


@pytest.fixture
async def colleague(client: AsyncClient) -> dict:
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "mehmet@example.com", "password": "password123", "first_name": "Mehmet", "last_name": "Kaya"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def manager(auth_client: AsyncClient, test_user: User) -> dict:
    response = await auth_client.post(
        "/api/v1/employees",
        json={"user_id": test_user.id, "department": "Sales", "roles": ["manager", "specialist"]},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_profile(manager, test_user: User):
    assert manager["user_id"] == test_user.id
    assert manager["full_name"] == "Test User"
    assert manager["email"] == "test@example.com"
    assert manager["is_active"] is True
    assert sorted(manager["active_roles"]) == ["manager", "specialist"]
    assert manager["manager_id"] is None


@pytest.mark.asyncio
async def test_default_role_and_duplicates(auth_client: AsyncClient, manager, colleague):
    response = await auth_client.post("/api/v1/employees", json={"user_id": colleague["id"]})
    assert response.status_code == 201
    assert response.json()["active_roles"] == ["employee"]

    response = await auth_client.post("/api/v1/employees", json={"user_id": colleague["id"]})
    assert response.status_code == 400

    response = await auth_client.post("/api/v1/employees", json={"user_id": 999})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_manager_assignment(auth_client: AsyncClient, manager, colleague):
    response = await auth_client.post(
        "/api/v1/employees",
        json={"user_id": colleague["id"], "manager_id": manager["id"]},
    )
    employee = response.json()
    assert employee["manager_id"] == manager["id"]

    response = await auth_client.patch(
        f"/api/v1/employees/{employee['id']}", json={"manager_id": employee["id"]}
    )
    assert response.status_code == 400

    response = await auth_client.patch(
        f"/api/v1/employees/{employee['id']}", json={"manager_id": None}
    )
    assert response.status_code == 200
    assert response.json()["manager_id"] is None

    response = await auth_client.patch(
        f"/api/v1/employees/{employee['id']}", json={"manager_id": 999}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_roles_are_replaced(auth_client: AsyncClient, manager):
    response = await auth_client.patch(
        f"/api/v1/employees/{manager['id']}", json={"roles": ["director"], "position": "Head of sales"}
    )
    assert response.status_code == 200
    assert response.json()["active_roles"] == ["director"]
    assert response.json()["position"] == "Head of sales"

    response = await auth_client.patch(f"/api/v1/employees/{manager['id']}", json={"roles": []})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_me(auth_client: AsyncClient):
    response = await auth_client.get("/api/v1/employees/me")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_me_and_soft_delete(auth_client: AsyncClient, manager):
    response = await auth_client.get("/api/v1/employees/me")
    assert response.status_code == 200
    assert response.json()["id"] == manager["id"]

    response = await auth_client.get("/api/v1/employees", params={"department": "Sales"})
    assert response.json()["total"] == 1

    response = await auth_client.delete(f"/api/v1/employees/{manager['id']}")
    assert response.status_code == 200

    assert (await auth_client.get(f"/api/v1/employees/{manager['id']}")).status_code == 404
    assert (await auth_client.get("/api/v1/employees")).json()["total"] == 0
    assert (await auth_client.get("/api/v1/employees/me")).status_code == 404

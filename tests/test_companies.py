"""
Company endpoint tests.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select, func

from app.models.company import Company


@pytest.mark.asyncio
async def test_create_company(auth_client: AsyncClient, test_user):
    response = await auth_client.post(
        "/api/v1/companies",
        json={
            "name": "Deniz Lojistik",
            "type": "supplier",
            "email": "info@deniz.example.com",
            "city": "Izmir",
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Deniz Lojistik"
    assert data["type"] == "supplier"
    assert data["created_by"] == test_user.id


@pytest.mark.asyncio
async def test_blank_name_is_rejected_without_insert(auth_client: AsyncClient, db_session):
    response = await auth_client.post("/api/v1/companies", json={"name": "   "})

    assert response.status_code == 422
    count = await db_session.execute(select(func.count(Company.id)))
    assert count.scalar() == 0


@pytest.mark.asyncio
async def test_list_search_and_type_filter(auth_client: AsyncClient):
    for name, kind in [("Alfa Yapi", "customer"), ("Beta Enerji", "supplier"), ("Alfa Kimya", "partner")]:
        await auth_client.post("/api/v1/companies", json={"name": name, "type": kind})

    response = await auth_client.get("/api/v1/companies", params={"search": "alfa"})
    data = response.json()
    assert data["total"] == 2
    # Newest first
    assert [c["name"] for c in data["items"]] == ["Alfa Kimya", "Alfa Yapi"]

    response = await auth_client.get("/api/v1/companies", params={"type": "supplier"})
    assert [c["name"] for c in response.json()["items"]] == ["Beta Enerji"]


@pytest.mark.asyncio
async def test_pagination(auth_client: AsyncClient):
    for i in range(5):
        await auth_client.post("/api/v1/companies", json={"name": f"Company {i}"})

    response = await auth_client.get("/api/v1/companies", params={"page": 2, "per_page": 2})
    data = response.json()
    assert data["total"] == 5
    assert data["pages"] == 3
    assert len(data["items"]) == 2


@pytest.mark.asyncio
async def test_update_company(auth_client: AsyncClient, company):
    response = await auth_client.patch(
        f"/api/v1/companies/{company['id']}",
        json={"phone": "+90 212 555 0000"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["phone"] == "+90 212 555 0000"
    assert data["name"] == company["name"]


@pytest.mark.asyncio
async def test_delete_company_with_quotation_is_refused(auth_client: AsyncClient, company):
    await auth_client.post(
        "/api/v1/quotations",
        json={"company_id": company["id"], "title": "Pump offer"},
    )

    response = await auth_client.delete(f"/api/v1/companies/{company['id']}")
    assert response.status_code == 400

    response = await auth_client.get(f"/api/v1/companies/{company['id']}")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_delete_and_missing_company(auth_client: AsyncClient, company):
    response = await auth_client.delete(f"/api/v1/companies/{company['id']}")
    assert response.status_code == 200

    response = await auth_client.get(f"/api/v1/companies/{company['id']}")
    assert response.status_code == 404

"""
Settings endpoint tests.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.settings import CompanyInfo


@pytest.mark.asyncio
async def test_single_default_company_info(auth_client: AsyncClient):
    url = "/api/v1/settings/company-info"
    first = (await auth_client.post(url, json={"name": "Tekel Muhendislik", "is_default": True})).json()
    response = await auth_client.post(url, json={"name": "Tekel Export", "is_default": True})
    assert response.status_code == 201
    second = response.json()

    rows = (await auth_client.get(url)).json()
    assert [(r["id"], r["is_default"]) for r in rows] == [(second["id"], True), (first["id"], False)]

    await auth_client.patch(f"{url}/{first['id']}", json={"is_default": True})
    rows = (await auth_client.get(url)).json()
    assert [r["id"] for r in rows if r["is_default"]] == [first["id"]]


@pytest.mark.asyncio
async def test_list_reads_are_cached(auth_client: AsyncClient, db_session: AsyncSession):
    url = "/api/v1/settings/company-info"
    await auth_client.post(url, json={"name": "Tekel Muhendislik"})
    assert len((await auth_client.get(url)).json()) == 1

    # Written behind the service's back, so the cached list stays stale
    db_session.add(CompanyInfo(name="Side door"))
    await db_session.commit()
    assert len((await auth_client.get(url)).json()) == 1

    await auth_client.post(url, json={"name": "Through the API"})
    assert len((await auth_client.get(url)).json()) == 3


@pytest.mark.asyncio
async def test_dictionary_defaults_and_uniqueness(auth_client: AsyncClient):
    url = "/api/v1/settings/dictionary"
    response = await auth_client.post(url, json={"key_name": "quotation", "value": "Teklif"})
    assert response.status_code == 201
    assert response.json()["language"] == "TR"

    response = await auth_client.post(url, json={"key_name": "quotation", "value": "Teklif 2"})
    assert response.status_code == 400

    response = await auth_client.post(url, json={"key_name": "quotation", "value": "Quotation", "language": "EN"})
    assert response.status_code == 201
    english = response.json()

    response = await auth_client.patch(f"{url}/{english['id']}", json={"language": "TR"})
    assert response.status_code == 400

    # Language filter defaults to TR
    rows = (await auth_client.get(url)).json()
    assert [r["value"] for r in rows] == ["Teklif"]

    response = await auth_client.get("/api/v1/settings/translations", params={"language": "EN"})
    assert response.json() == {"quotation": "Quotation"}


@pytest.mark.asyncio
async def test_quotation_parameter_visibility(auth_client: AsyncClient):
    url = "/api/v1/settings/quotation-parameters"
    response = await auth_client.post(
        url, json={"setting_type": "delivery_time", "name": "Delivery time", "value": {"name": "4 weeks"}}
    )
    assert response.status_code == 201
    parameter = response.json()
    assert parameter["show_in_pdf"] is True

    response = await auth_client.patch(f"{url}/{parameter['id']}/pdf-visibility", json={"show_in_pdf": False})
    assert response.status_code == 200
    assert response.json()["show_in_pdf"] is False
    assert response.json()["value"] == {"name": "4 weeks", "show_in_pdf": False}

    rows = (await auth_client.get(url, params={"setting_type": "delivery_time"})).json()
    assert rows[0]["show_in_pdf"] is False
    assert (await auth_client.get(url, params={"setting_type": "warranty"})).json() == []


@pytest.mark.asyncio
async def test_terms_methods_and_delete(auth_client: AsyncClient):
    url = "/api/v1/settings/payment-methods"
    await auth_client.post(url, json={"name": "Pesin"})
    response = await auth_client.post(url, json={"name": "Cash in advance", "language": "EN"})
    method = response.json()

    rows = (await auth_client.get(url, params={"language": "EN"})).json()
    assert [r["name"] for r in rows] == ["Cash in advance"]

    response = await auth_client.delete(f"{url}/{method['id']}")
    assert response.status_code == 200
    assert (await auth_client.get(f"{url}/{method['id']}")).status_code == 404
    assert len((await auth_client.get(url)).json()) == 1


@pytest.mark.asyncio
async def test_invalid_payload_is_422(auth_client: AsyncClient):
    response = await auth_client.post("/api/v1/settings/currencies", json={"name": "Euro"})
    assert response.status_code == 422

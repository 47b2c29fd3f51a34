"""
Product catalogue tests.
"""

from decimal import Decimal
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_categories_and_filter(auth_client: AsyncClient):
    response = await auth_client.post("/api/v1/products/categories", json={"name": "Pumps"})
    assert response.status_code == 201
    category = response.json()

    await auth_client.post(
        "/api/v1/products",
        json={"name": "Pump", "unit_price": "100.00", "category_id": category["id"]},
    )
    await auth_client.post("/api/v1/products", json={"name": "Cable", "unit_price": "5.00"})

    response = await auth_client.get("/api/v1/products", params={"category_id": category["id"]})
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["name"] == "Pump"

    response = await auth_client.patch(
        f"/api/v1/products/categories/{category['id']}", json={"name": "Water pumps"}
    )
    assert response.json()["name"] == "Water pumps"

    response = await auth_client.get("/api/v1/products/categories")
    assert [c["name"] for c in response.json()] == ["Water pumps"]


@pytest.mark.asyncio
async def test_product_defaults_and_search(auth_client: AsyncClient, product, second_product):
    assert product["currency"] == "TRY"
    assert product["unit"] == "adet"

    response = await auth_client.get("/api/v1/products", params={"search": "grundfos"})
    assert [p["id"] for p in response.json()["items"]] == [product["id"]]


@pytest.mark.asyncio
async def test_negative_price_is_rejected(auth_client: AsyncClient):
    response = await auth_client.post("/api/v1/products", json={"name": "Bad", "unit_price": "-1"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_with_unknown_category_is_404(auth_client: AsyncClient, product):
    response = await auth_client.patch(
        f"/api/v1/products/{product['id']}", json={"category_id": 999}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_properties(auth_client: AsyncClient, product):
    url = f"/api/v1/products/{product['id']}/properties"
    await auth_client.post(url, json={"property_name": "Flow", "property_value": "10 m3/h", "display_order": 2})
    response = await auth_client.post(url, json={"property_name": "Power", "property_value": "5 kW", "display_order": 1})
    assert response.status_code == 201
    power = response.json()
    assert power["language"] == "TR"
    assert power["show_in_quotation"] is True

    response = await auth_client.get(url)
    assert [p["property_name"] for p in response.json()] == ["Power", "Flow"]

    response = await auth_client.delete(f"{url}/{power['id']}")
    assert response.status_code == 200
    assert len((await auth_client.get(url)).json()) == 1

    response = await auth_client.get(f"/api/v1/products/{product['id']}")
    assert [p["property_name"] for p in response.json()["properties"]] == ["Flow"]


@pytest.mark.asyncio
async def test_sub_items(auth_client: AsyncClient, product, second_product):
    url = f"/api/v1/products/{product['id']}/sub-items"

    response = await auth_client.post(url, json={"sub_product_id": product["id"]})
    assert response.status_code == 400

    response = await auth_client.post(url, json={"sub_product_id": 999})
    assert response.status_code == 404

    response = await auth_client.post(url, json={"sub_product_id": second_product["id"], "quantity": "3"})
    assert response.status_code == 201
    sub_item = response.json()
    assert sub_item["sub_product_name"] == "Valve"
    assert Decimal(sub_item["sub_product_price"]) == Decimal("50.00")

    response = await auth_client.delete(f"{url}/{sub_item['id']}")
    assert response.status_code == 200
    assert (await auth_client.get(url)).json() == []


@pytest.mark.asyncio
async def test_matrix_values_and_lookup(auth_client: AsyncClient, product):
    response = await auth_client.post(
        f"/api/v1/products/{product['id']}/matrices",
        json={"name": "Size", "parameter_count": 2, "parameter_1_name": "Diameter", "parameter_2_name": "Length"},
    )
    assert response.status_code == 201
    matrix = response.json()
    values_url = f"/api/v1/products/{product['id']}/matrices/{matrix['id']}/values"

    response = await auth_client.post(values_url, json={"param_1_value": "DN50", "param_2_value": "1m", "price": "120"})
    assert response.status_code == 201
    response = await auth_client.post(
        values_url,
        json={"param_1_value": "DN50", "param_2_value": "1m", "param_3_value": "x", "price": "1"},
    )
    assert response.status_code == 400

    price_url = f"/api/v1/products/{product['id']}/matrices/{matrix['id']}/price"
    response = await auth_client.get(price_url, params={"param_1": "DN50", "param_2": "1m"})
    assert response.status_code == 200
    assert Decimal(response.json()["price"]) == Decimal("120")

    response = await auth_client.get(price_url, params={"param_1": "DN50", "param_2": "2m"})
    assert response.status_code == 404

    response = await auth_client.get(f"/api/v1/products/{product['id']}/matrices")
    assert len(response.json()[0]["values"]) == 1


@pytest.mark.asyncio
async def test_matrix_of_other_product_is_404(auth_client: AsyncClient, product, second_product):
    response = await auth_client.post(
        f"/api/v1/products/{product['id']}/matrices", json={"name": "Size"}
    )
    matrix = response.json()

    response = await auth_client.get(
        f"/api/v1/products/{second_product['id']}/matrices/{matrix['id']}/values"
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_product(auth_client: AsyncClient, product):
    response = await auth_client.delete(f"/api/v1/products/{product['id']}")
    assert response.status_code == 200

    response = await auth_client.get(f"/api/v1/products/{product['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_product_on_quotation_is_refused(auth_client: AsyncClient, company, product):
    await auth_client.post(
        "/api/v1/quotations",
        json={
            "company_id": company["id"],
            "title": "Pump offer",
            "items": [{"product_id": product["id"], "quantity": "1"}],
        },
    )

    response = await auth_client.delete(f"/api/v1/products/{product['id']}")
    assert response.status_code == 400
    assert "reference it" in response.json()["detail"]

    response = await auth_client.get(f"/api/v1/products/{product['id']}")
    assert response.status_code == 200

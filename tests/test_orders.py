"""
Order endpoint tests.
"""

from datetime import date
from decimal import Decimal
import pytest
from httpx import AsyncClient


async def create_order(client: AsyncClient, company_id: int, items=None, **fields) -> dict:
    response = await client.post(
        "/api/v1/orders",
        json={"company_id": company_id, "title": "Pump delivery", "items": items or [], **fields},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_order_with_items(auth_client: AsyncClient, company, product, second_product):
    order = await create_order(
        auth_client,
        company["id"],
        items=[
            {"product_id": product["id"], "quantity": "2"},
            {"product_id": second_product["id"], "quantity": "1", "unit_price": "45.50"},
        ],
    )

    assert order["order_number"] == f"SIP-{date.today():%Y%m%d}-001"
    assert order["status"] == "pending"
    assert order["currency"] == "TRY"
    assert order["company_name"] == "Acme Makina"
    assert Decimal(order["total_amount"]) == Decimal("245.50")
    assert [i["product_name"] for i in order["items"]] == ["Pump", "Valve"]


@pytest.mark.asyncio
async def test_unknown_product_leaves_no_order(auth_client: AsyncClient, company):
    response = await auth_client.post(
        "/api/v1/orders",
        json={"company_id": company["id"], "title": "Broken", "items": [{"product_id": 999}]},
    )
    assert response.status_code == 404

    response = await auth_client.get("/api/v1/orders")
    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_item_changes_update_total(auth_client: AsyncClient, company, product, second_product):
    order = await create_order(auth_client, company["id"], items=[{"product_id": product["id"]}])

    response = await auth_client.post(
        f"/api/v1/orders/{order['id']}/items",
        json={"product_id": second_product["id"], "quantity": "2"},
    )
    assert response.status_code == 201
    assert Decimal(response.json()["total_amount"]) == Decimal("200.00")

    first_item = response.json()["items"][0]
    response = await auth_client.delete(f"/api/v1/orders/{order['id']}/items/{first_item['id']}")
    assert response.status_code == 200
    assert Decimal(response.json()["total_amount"]) == Decimal("100.00")

    response = await auth_client.get(f"/api/v1/orders/{order['id']}/items")
    assert len(response.json()) == 1

    response = await auth_client.delete(f"/api/v1/orders/{order['id']}/items/999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_filter_and_update(auth_client: AsyncClient, company):
    first = await create_order(auth_client, company["id"], title="First")
    await create_order(auth_client, company["id"], title="Second")

    response = await auth_client.patch(
        f"/api/v1/orders/{first['id']}", json={"status": "confirmed", "delivery_date": "2026-12-01"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"
    assert response.json()["delivery_date"] == "2026-12-01"

    response = await auth_client.get("/api/v1/orders", params={"status": "confirmed"})
    assert [o["title"] for o in response.json()["items"]] == ["First"]

    response = await auth_client.get("/api/v1/orders", params={"search": "second"})
    assert response.json()["total"] == 1


@pytest.mark.asyncio
async def test_delete_order(auth_client: AsyncClient, company, product):
    order = await create_order(auth_client, company["id"], items=[{"product_id": product["id"]}])

    response = await auth_client.delete(f"/api/v1/orders/{order['id']}")
    assert response.status_code == 200

    response = await auth_client.get(f"/api/v1/orders/{order['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_number_after_delete_does_not_collide(auth_client: AsyncClient, company):
    first = await create_order(auth_client, company["id"])
    second = await create_order(auth_client, company["id"])
    await auth_client.delete(f"/api/v1/orders/{first['id']}")

    third = await create_order(auth_client, company["id"])

    assert second["order_number"].endswith("-002")
    assert third["order_number"] == f"SIP-{date.today():%Y%m%d}-003"

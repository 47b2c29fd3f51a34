"""
Quotation endpoint tests.
"""

from datetime import date
from decimal import Decimal
import pytest
from httpx import AsyncClient

from app.core.config import settings


async def create_quotation(client: AsyncClient, company_id: int, items=None, **fields) -> dict:
    response = await client.post(
        "/api/v1/quotations",
        json={"company_id": company_id, "title": "Pump station", "items": items or [], **fields},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_quotation_totals(auth_client: AsyncClient, company, product, second_product):
    quotation = await create_quotation(
        auth_client,
        company["id"],
        items=[
            {"product_id": product["id"], "quantity": "2", "discount_percentage": "10"},
            {"product_id": second_product["id"], "quantity": "1"},
        ],
    )

    assert Decimal(quotation["total_amount"]) == Decimal("230.00")
    assert quotation["status"] == "draft"
    assert quotation["currency"] == "TRY"
    assert quotation["company_name"] == "Acme Makina"
    assert quotation["quotation_number"] == f"TKL-{date.today():%Y%m%d}-001"
    assert [Decimal(i["total_price"]) for i in quotation["items"]] == [Decimal("180.00"), Decimal("50.00")]


@pytest.mark.asyncio
async def test_quotation_numbers_are_sequential(auth_client: AsyncClient, company):
    first = await create_quotation(auth_client, company["id"])
    second = await create_quotation(auth_client, company["id"])

    assert first["quotation_number"].endswith("-001")
    assert second["quotation_number"].endswith("-002")


@pytest.mark.asyncio
async def test_unknown_company_is_404(auth_client: AsyncClient):
    response = await auth_client.post(
        "/api/v1/quotations",
        json={"company_id": 999, "title": "Nobody"},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_validity_before_date_is_rejected(auth_client: AsyncClient, company):
    response = await auth_client.post(
        "/api/v1/quotations",
        json={
            "company_id": company["id"],
            "title": "Backwards",
            "quotation_date": "2026-05-10",
            "valid_until": "2026-05-01",
        },
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_item_changes_recompute_total(auth_client: AsyncClient, company, product, second_product):
    quotation = await create_quotation(
        auth_client,
        company["id"],
        items=[
            {"product_id": product["id"], "quantity": "2", "discount_percentage": "10"},
            {"product_id": second_product["id"], "quantity": "1"},
        ],
    )
    qid = quotation["id"]
    first_item, second_item = quotation["items"]

    response = await auth_client.delete(f"/api/v1/quotations/{qid}/items/{first_item['id']}")
    assert response.status_code == 200
    assert Decimal(response.json()["total_amount"]) == Decimal("50.00")

    response = await auth_client.patch(
        f"/api/v1/quotations/{qid}/items/{second_item['id']}",
        json={"quantity": "3"},
    )
    assert Decimal(response.json()["total_amount"]) == Decimal("150.00")

    response = await auth_client.post(
        f"/api/v1/quotations/{qid}/items",
        json={"product_id": product["id"], "unit_price": "10", "quantity": "5"},
    )
    assert response.status_code == 201
    assert Decimal(response.json()["total_amount"]) == Decimal("200.00")

    response = await auth_client.get(f"/api/v1/quotations/{qid}")
    assert Decimal(response.json()["total_amount"]) == Decimal("200.00")


@pytest.mark.asyncio
async def test_sub_items_follow_their_bundle(auth_client: AsyncClient, company, product, second_product):
    response = await auth_client.post(
        f"/api/v1/products/{product['id']}/sub-items",
        json={"sub_product_id": second_product["id"], "quantity": "2"},
    )
    assert response.status_code == 201

    quotation = await create_quotation(
        auth_client,
        company["id"],
        items=[{"product_id": product["id"], "quantity": "3", "include_sub_items": True}],
    )
    parent = next(i for i in quotation["items"] if not i["is_sub_item"])
    child = next(i for i in quotation["items"] if i["is_sub_item"])

    assert child["parent_item_id"] == parent["id"]
    assert Decimal(child["quantity"]) == Decimal("6")
    assert Decimal(quotation["total_amount"]) == Decimal("600.00")

    response = await auth_client.patch(
        f"/api/v1/quotations/{quotation['id']}/items/{parent['id']}",
        json={"quantity": "1"},
    )
    data = response.json()
    child = next(i for i in data["items"] if i["is_sub_item"])
    assert Decimal(child["quantity"]) == Decimal("2")
    assert Decimal(data["total_amount"]) == Decimal("200.00")

    response = await auth_client.delete(f"/api/v1/quotations/{quotation['id']}/items/{parent['id']}")
    data = response.json()
    assert data["items"] == []
    assert Decimal(data["total_amount"]) == Decimal("0")


@pytest.mark.asyncio
async def test_matrix_price(auth_client: AsyncClient, company, product):
    matrix = (await auth_client.post(
        f"/api/v1/products/{product['id']}/matrices",
        json={"name": "Size / pressure", "parameter_count": 2,
              "parameter_1_name": "Size", "parameter_2_name": "Pressure"},
    )).json()
    await auth_client.post(
        f"/api/v1/products/{product['id']}/matrices/{matrix['id']}/values",
        json={"param_1_value": "DN50", "param_2_value": "PN16", "price": "120.00"},
    )

    quotation = await create_quotation(
        auth_client,
        company["id"],
        items=[{
            "product_id": product["id"],
            "quantity": "2",
            "selected_matrix_id": matrix["id"],
            "matrix_parameters": ["DN50", "PN16"],
        }],
    )
    item = quotation["items"][0]
    assert Decimal(item["unit_price"]) == Decimal("120.00")
    assert item["custom_properties"]["matrix_parameters"] == ["DN50", "PN16"]
    assert Decimal(quotation["total_amount"]) == Decimal("240.00")

    response = await auth_client.post(
        f"/api/v1/quotations/{quotation['id']}/items",
        json={
            "product_id": product["id"],
            "selected_matrix_id": matrix["id"],
            "matrix_parameters": ["DN80", "PN16"],
        },
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_filters(auth_client: AsyncClient, company):
    await create_quotation(auth_client, company["id"], title="Boiler room")
    await create_quotation(auth_client, company["id"], title="Cooling", status="sent")

    response = await auth_client.get("/api/v1/quotations", params={"status": "sent"})
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["title"] == "Cooling"

    response = await auth_client.get("/api/v1/quotations", params={"search": "boiler"})
    assert [q["title"] for q in response.json()["items"]] == ["Boiler room"]


@pytest.mark.asyncio
async def test_revisions(auth_client: AsyncClient, company, product):
    quotation = await create_quotation(
        auth_client, company["id"], items=[{"product_id": product["id"], "quantity": "1"}]
    )

    response = await auth_client.post(f"/api/v1/quotations/{quotation['id']}/revise")
    assert response.status_code == 201
    first = response.json()
    assert first["quotation_number"] == f"{quotation['quotation_number']}-R1"
    assert first["revision_number"] == 1
    assert first["parent_quotation_id"] == quotation["id"]
    assert first["status"] == "draft"
    assert Decimal(first["total_amount"]) == Decimal(quotation["total_amount"])
    assert len(first["items"]) == 1

    response = await auth_client.post(f"/api/v1/quotations/{first['id']}/revise")
    assert response.json()["quotation_number"] == f"{quotation['quotation_number']}-R2"

    # Revisions do not take a number of the day
    fresh = await create_quotation(auth_client, company["id"])
    assert fresh["quotation_number"].endswith("-002")


@pytest.mark.asyncio
async def test_convert_to_order(auth_client: AsyncClient, company, product, second_product):
    await auth_client.post(
        f"/api/v1/products/{product['id']}/sub-items",
        json={"sub_product_id": second_product["id"], "quantity": "1"},
    )
    quotation = await create_quotation(
        auth_client,
        company["id"],
        items=[{"product_id": product["id"], "quantity": "2", "include_sub_items": True}],
    )
    qid = quotation["id"]

    response = await auth_client.post(f"/api/v1/quotations/{qid}/convert-to-order")
    assert response.status_code == 400

    await auth_client.patch(f"/api/v1/quotations/{qid}", json={"status": "accepted"})
    response = await auth_client.post(f"/api/v1/quotations/{qid}/convert-to-order")
    assert response.status_code == 201
    order = response.json()
    assert order["quotation_id"] == qid
    assert order["status"] == "pending"
    assert order["order_number"].startswith(f"SIP-{date.today():%Y%m%d}-")
    assert Decimal(order["total_amount"]) == Decimal("300.00")
    assert len(order["items"]) == 1
    assert Decimal(order["items"][0]["total_price"]) == Decimal("300.00")

    response = await auth_client.post(f"/api/v1/quotations/{qid}/convert-to-order")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_settings_and_responsibilities(auth_client: AsyncClient, company):
    quotation = await create_quotation(auth_client, company["id"])
    bank = (await auth_client.post(
        "/api/v1/settings/bank-info",
        json={"bank_name": "Ziraat", "account_number": "123"},
    )).json()

    response = await auth_client.put(
        f"/api/v1/quotations/{quotation['id']}/settings",
        json={
            "bank_info_id": bank["id"],
            "customer_responsibilities": "Site access and power supply",
            "supplier_responsibilities": "Installation",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["bank_info_id"] == bank["id"]
    assert data["customer_responsibilities"] == "Site access and power supply"
    assert len(data["responsibilities"]) == 2

    response = await auth_client.put(
        f"/api/v1/quotations/{quotation['id']}/settings",
        json={"bank_info_id": bank["id"], "customer_responsibilities": "Power supply"},
    )
    data = response.json()
    assert data["customer_responsibilities"] == "Power supply"
    assert data["supplier_responsibilities"] is None

    response = await auth_client.get(f"/api/v1/quotations/{quotation['id']}/settings")
    assert [r["responsibility_type"] for r in response.json()["responsibilities"]] == ["customer"]


@pytest.mark.asyncio
async def test_pdf_download(auth_client: AsyncClient, company, product):
    quotation = await create_quotation(
        auth_client, company["id"], items=[{"product_id": product["id"], "quantity": "1"}]
    )

    response = await auth_client.get(
        f"/api/v1/quotations/{quotation['id']}/pdf",
        params={"header_color": "#0f766e", "font_size": 10},
    )

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_pdf_rejects_bad_color(auth_client: AsyncClient, company):
    quotation = await create_quotation(auth_client, company["id"])

    response = await auth_client.get(
        f"/api/v1/quotations/{quotation['id']}/pdf",
        params={"header_color": "blue"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_pdf_archive(auth_client: AsyncClient, company, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "PDF_STORAGE_PATH", str(tmp_path))
    quotation = await create_quotation(auth_client, company["id"])

    response = await auth_client.post(f"/api/v1/quotations/{quotation['id']}/pdf/archive")

    assert response.status_code == 201
    path = tmp_path / f"quotation_{quotation['quotation_number']}.pdf"
    assert str(path) in response.json()["message"]
    assert path.read_bytes().startswith(b"%PDF")


@pytest.mark.asyncio
async def test_delete_quotation(auth_client: AsyncClient, company, product):
    quotation = await create_quotation(
        auth_client, company["id"], items=[{"product_id": product["id"], "quantity": "1"}]
    )

    response = await auth_client.delete(f"/api/v1/quotations/{quotation['id']}")
    assert response.status_code == 200

    response = await auth_client.get(f"/api/v1/quotations/{quotation['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_number_after_delete_does_not_collide(auth_client: AsyncClient, company):
    first = await create_quotation(auth_client, company["id"])
    await create_quotation(auth_client, company["id"])
    await auth_client.delete(f"/api/v1/quotations/{first['id']}")

    third = await create_quotation(auth_client, company["id"])

    assert third["quotation_number"] == f"TKL-{date.today():%Y%m%d}-003"


@pytest.mark.asyncio
async def test_duplicate_number_reports_database_message(auth_client: AsyncClient, company):
    await create_quotation(auth_client, company["id"], quotation_number="TKL-MANUAL-001")

    response = await auth_client.post(
        "/api/v1/quotations",
        json={"company_id": company["id"], "title": "Again", "quotation_number": "TKL-MANUAL-001"},
    )

    assert response.status_code == 400
    assert "quotations.quotation_number" in response.json()["detail"]

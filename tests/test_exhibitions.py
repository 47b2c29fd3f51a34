"""
Exhibition endpoint tests.
"""

from decimal import Decimal
import pytest
from httpx import AsyncClient


@pytest.fixture
async def exhibition(auth_client: AsyncClient) -> dict:
    response = await auth_client.post(
        "/api/v1/exhibitions",
        json={
            "name": "WIN Eurasia",
            "location": "Istanbul",
            "start_date": "2026-06-10",
            "end_date": "2026-06-13",
            "target_cost": "500",
            "cost_currency": "EUR",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_defaults(exhibition):
    assert exhibition["status"] == "planned"
    assert exhibition["type"] == "trade_show"
    assert Decimal(exhibition["actual_cost"]) == Decimal("0")


@pytest.mark.asyncio
async def test_start_after_end_is_rejected(auth_client: AsyncClient, exhibition):
    response = await auth_client.post(
        "/api/v1/exhibitions",
        json={"name": "Backwards", "start_date": "2026-06-13", "end_date": "2026-06-10"},
    )
    assert response.status_code == 422

    response = await auth_client.patch(
        f"/api/v1/exhibitions/{exhibition['id']}", json={"end_date": "2026-06-01"}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_costs_roll_up_into_actual_cost(auth_client: AsyncClient, exhibition):
    url = f"/api/v1/exhibitions/{exhibition['id']}"
    response = await auth_client.post(f"{url}/costs", json={"description": "Stand", "amount": "100", "currency": "EUR"})
    assert response.status_code == 201
    response = await auth_client.post(f"{url}/costs", json={"description": "Hotel", "amount": "1000", "currency": "TRY"})
    hotel = response.json()

    response = await auth_client.get(url)
    # 1000 TRY at 0.035
    assert Decimal(response.json()["actual_cost"]) == Decimal("135.00")

    response = await auth_client.get(f"{url}/cost-summary")
    summary = response.json()
    assert summary["cost_currency"] == "EUR"
    assert {k: Decimal(v) for k, v in summary["by_currency"].items()} == {
        "EUR": Decimal("100.00"),
        "TRY": Decimal("1000.00"),
    }
    assert Decimal(summary["total"]) == Decimal("135.00")
    assert Decimal(summary["remaining_budget"]) == Decimal("365.00")

    response = await auth_client.delete(f"{url}/costs/{hotel['id']}")
    assert response.status_code == 200
    response = await auth_client.get(url)
    assert Decimal(response.json()["actual_cost"]) == Decimal("100.00")
    assert len((await auth_client.get(f"{url}/costs")).json()) == 1


@pytest.mark.asyncio
async def test_non_positive_cost_is_rejected(auth_client: AsyncClient, exhibition):
    response = await auth_client.post(
        f"/api/v1/exhibitions/{exhibition['id']}/costs",
        json={"description": "Free", "amount": "0"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_followups(auth_client: AsyncClient, exhibition, company):
    url = f"/api/v1/exhibitions/{exhibition['id']}/followups"

    response = await auth_client.post(url, json={"company_id": 999})
    assert response.status_code == 404

    response = await auth_client.post(
        url, json={"company_id": company["id"], "contact_person": "Ayse Demir", "follow_up_date": "2026-06-20"}
    )
    assert response.status_code == 201
    followup = response.json()
    assert followup["company_name"] == "Acme Makina"
    assert followup["status"] == "pending"

    response = await auth_client.patch(f"{url}/{followup['id']}", json={"status": "contacted"})
    assert response.json()["status"] == "contacted"

    response = await auth_client.delete(f"{url}/{followup['id']}")
    assert response.status_code == 200
    assert (await auth_client.get(url)).json() == []


@pytest.mark.asyncio
async def test_list_and_delete(auth_client: AsyncClient, exhibition):
    response = await auth_client.get("/api/v1/exhibitions", params={"search": "istanbul"})
    assert response.json()["total"] == 1

    response = await auth_client.get("/api/v1/exhibitions", params={"status": "completed"})
    assert response.json()["total"] == 0

    response = await auth_client.delete(f"/api/v1/exhibitions/{exhibition['id']}")
    assert response.status_code == 200
    assert (await auth_client.get(f"/api/v1/exhibitions/{exhibition['id']}")).status_code == 404

"""
Dashboard tests.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import cache
from app.core.cache import query_cache
from app.models.company import Company, CompanyType
from app.models.order import Order, OrderStatus
from app.models.quotation import Quotation, QuotationStatus
from app.services.dashboard import DashboardService


def at(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def dated_rows(db_session: AsyncSession) -> Company:
    company = Company(name="Acme Makina", type=CompanyType.CUSTOMER, created_at=at(2026, 3, 1))
    db_session.add(company)
    await db_session.flush()

    db_session.add_all([
        # Inside March 2026
        Quotation(
            company_id=company.id, title="March", quotation_number="TKL-20260310-001",
            currency="TRY", quotation_date=date(2026, 3, 10), total_amount=Decimal("1000.00"),
            created_at=at(2026, 3, 10),
        ),
        # First instant of the March window
        Quotation(
            company_id=company.id, title="March opener", quotation_number="TKL-20260301-001",
            currency="EUR", quotation_date=date(2026, 3, 1), total_amount=Decimal("10.00"),
            status=QuotationStatus.ACCEPTED,
            created_at=datetime(2026, 3, 1, 0, 0, tzinfo=timezone.utc),
        ),
        # Inside 2026, outside March
        Quotation(
            company_id=company.id, title="January", quotation_number="TKL-20260105-001",
            currency="EUR", quotation_date=date(2026, 1, 5), total_amount=Decimal("200.00"),
            status=QuotationStatus.ACCEPTED, created_at=at(2026, 1, 5),
        ),
        # Previous year
        Quotation(
            company_id=company.id, title="Old", quotation_number="TKL-20251220-001",
            currency="EUR", quotation_date=date(2025, 12, 20), total_amount=Decimal("500.00"),
            created_at=at(2025, 12, 20),
        ),
        Order(
            company_id=company.id, title="March order", order_number="SIP-20260312-001",
            currency="EUR", total_amount=Decimal("100.00"), status=OrderStatus.PENDING,
            created_at=at(2026, 3, 12),
        ),
        # First instant of the 2026 window
        Order(
            company_id=company.id, title="New year order", order_number="SIP-20260101-001",
            currency="EUR", total_amount=Decimal("5.00"), status=OrderStatus.CONFIRMED,
            created_at=datetime(2026, 1, 1, 0, 0, tzinfo=timezone.utc),
        ),
        # Starts the next month window
        Order(
            company_id=company.id, title="April order", order_number="SIP-20260401-001",
            currency="EUR", total_amount=Decimal("40.00"), status=OrderStatus.CONFIRMED,
            created_at=datetime(2026, 4, 1, 0, 0, tzinfo=timezone.utc),
        ),
    ])
    await db_session.commit()
    return company


@pytest.mark.asyncio
async def test_stats_windows_and_conversion(db_session: AsyncSession, dated_rows):
    stats = await DashboardService(db_session).get_stats(today=date(2026, 3, 15))

    assert stats["total_companies"] == 1
    assert stats["total_quotations"] == 4
    assert stats["total_orders"] == 3
    assert stats["active_quotations"] == 2
    assert stats["pending_orders"] == 1
    assert stats["reference_currency"] == "EUR"

    # The window start is inclusive, the end exclusive
    monthly = stats["monthly_quotations"]
    assert monthly["count"] == 2
    # 1000 TRY at 0.035 plus 10 EUR
    assert Decimal(monthly["total_amount"]) == Decimal("45.00")
    assert monthly["start"] == "2026-03-01"
    assert monthly["end"] == "2026-04-01"

    yearly = stats["yearly_quotations"]
    assert yearly["count"] == 3
    assert Decimal(yearly["total_amount"]) == Decimal("245.00")

    assert stats["monthly_orders"]["count"] == 1
    assert Decimal(stats["monthly_orders"]["total_amount"]) == Decimal("100.00")
    assert stats["yearly_orders"]["count"] == 3
    assert Decimal(stats["yearly_orders"]["total_amount"]) == Decimal("145.00")


@pytest.mark.asyncio
async def test_stats_are_cached_until_invalidated(db_session: AsyncSession, dated_rows):
    service = DashboardService(db_session)
    today = date(2026, 3, 15)
    first = await service.get_stats(today=today)

    db_session.add(Company(name="Second", type=CompanyType.SUPPLIER))
    await db_session.commit()

    assert (await service.get_stats(today=today))["total_companies"] == first["total_companies"]

    query_cache.invalidate(cache.DASHBOARD)
    assert (await service.get_stats(today=today))["total_companies"] == 2


@pytest.mark.asyncio
async def test_recent_activity_merges_newest_first(db_session: AsyncSession, dated_rows):
    activity = await DashboardService(db_session).recent_activity(limit=3)

    assert [(a.type, a.title) for a in activity] == [
        ("order", "April order"),
        ("order", "March order"),
        ("quotation", "March"),
    ]


@pytest.mark.asyncio
async def test_stats_endpoint(auth_client: AsyncClient, company, product):
    response = await auth_client.get("/api/v1/dashboard/stats")
    assert response.status_code == 200
    data = response.json()
    assert data["total_companies"] == 1
    assert data["total_products"] == 1
    assert data["monthly_quotations"]["count"] == 0

    response = await auth_client.get("/api/v1/dashboard/recent-activity", params={"limit": 5})
    assert response.status_code == 200
    assert response.json()[0]["type"] == "company"
    assert response.json()[0]["status"] == "customer"


@pytest.mark.asyncio
async def test_stats_endpoint_reflects_new_company(auth_client: AsyncClient, company):
    await auth_client.get("/api/v1/dashboard/stats")
    await auth_client.post("/api/v1/companies", json={"name": "Beta", "type": "partner"})

    response = await auth_client.get("/api/v1/dashboard/stats")
    assert response.json()["total_companies"] == 2

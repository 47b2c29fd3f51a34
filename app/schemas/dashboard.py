"""
Dashboard schemas.
"""

from datetime import date, datetime
from decimal import Decimal

from app.schemas.base import BaseSchema


class PeriodStats(BaseSchema):
    """Count and converted total of rows created within a period."""

    count: int
    total_amount: Decimal
    start: date
    end: date


class DashboardStats(BaseSchema):
    total_companies: int
    total_products: int
    total_quotations: int
    total_orders: int
    total_exhibitions: int
    active_quotations: int
    pending_orders: int
    reference_currency: str
    monthly_quotations: PeriodStats
    monthly_orders: PeriodStats
    yearly_quotations: PeriodStats
    yearly_orders: PeriodStats


class RecentActivity(BaseSchema):
    type: str
    id: int
    title: str
    reference: str | None = None
    amount: Decimal | None = None
    currency: str | None = None
    status: str | None = None
    created_at: datetime

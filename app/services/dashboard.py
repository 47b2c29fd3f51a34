"""
Dashboard Service.
Provides the headline counts and period totals shown on the dashboard.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from app.core import cache
from app.core.cache import query_cache
from app.core.config import settings
from app.models.company import Company
from app.models.exhibition import Exhibition
from app.models.order import Order, OrderStatus
from app.models.product import Product
from app.models.quotation import Quotation, ACTIVE_QUOTATION_STATUSES
from app.schemas.dashboard import DashboardStats, PeriodStats, RecentActivity
from app.services.pricing import (
    as_datetime,
    convert_amount,
    month_window,
    quantize,
    year_window,
)


logger = logging.getLogger(__name__)


class DashboardService:
    """Service for dashboard statistics."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, model, *filters) -> int:
        result = await self.db.execute(select(func.count(model.id)).where(*filters))
        return result.scalar() or 0

    async def _period(self, model, start: date, end: date) -> PeriodStats:
        """
        Rows created in [start, end) with their amounts converted into
        the reference currency.
        """
        result = await self.db.execute(
            select(model.total_amount, model.currency).where(
                model.created_at >= as_datetime(start),
                model.created_at < as_datetime(end),
            )
        )
        rows = result.all()
        total = sum(
            (convert_amount(amount, currency) for amount, currency in rows),
            Decimal("0"),
        )
        return PeriodStats(
            count=len(rows),
            total_amount=quantize(total),
            start=start,
            end=end,
        )

    async def _load_stats(self, today: date) -> Dict[str, Any]:
        month_start, month_end = month_window(today)
        year_start, year_end = year_window(today)

        stats = DashboardStats(
            total_companies=await self._count(Company),
            total_products=await self._count(Product),
            total_quotations=await self._count(Quotation),
            total_orders=await self._count(Order),
            total_exhibitions=await self._count(Exhibition),
            active_quotations=await self._count(
                Quotation, Quotation.status.in_(ACTIVE_QUOTATION_STATUSES)
            ),
            pending_orders=await self._count(Order, Order.status == OrderStatus.PENDING),
            reference_currency=settings.REFERENCE_CURRENCY,
            monthly_quotations=await self._period(Quotation, month_start, month_end),
            monthly_orders=await self._period(Order, month_start, month_end),
            yearly_quotations=await self._period(Quotation, year_start, year_end),
            yearly_orders=await self._period(Order, year_start, year_end),
        )
        logger.debug("Dashboard stats computed for %s", today)
        return stats.model_dump(mode="json")

    async def get_stats(self, today: date | None = None) -> Dict[str, Any]:
        """
        Get dashboard statistics.

        Args:
            today: Reference day for the monthly and yearly windows (defaults to today)

        Returns:
            DashboardStats rendered as a plain dict, served through the query cache
        """
        today = today or date.today()
        return await query_cache.get_or_set(
            cache.DASHBOARD,
            lambda: self._load_stats(today),
            today.isoformat(),
        )

    async def recent_activity(self, limit: int = 10) -> List[RecentActivity]:
        """Latest quotations, orders and companies merged, newest first."""
        quotations = await self.db.execute(
            select(Quotation)
            .order_by(Quotation.created_at.desc(), Quotation.id.desc())
            .limit(limit)
        )
        orders = await self.db.execute(
            select(Order)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(limit)
        )
        companies = await self.db.execute(
            select(Company)
            .order_by(Company.created_at.desc(), Company.id.desc())
            .limit(limit)
        )

        activity = [
            RecentActivity(
                type="quotation",
                id=q.id,
                title=q.title,
                reference=q.quotation_number,
                amount=q.total_amount,
                currency=q.currency,
                status=q.status.value,
                created_at=q.created_at,
            )
            for q in quotations.scalars().all()
        ] + [
            RecentActivity(
                type="order",
                id=o.id,
                title=o.title,
                reference=o.order_number,
                amount=o.total_amount,
                currency=o.currency,
                status=o.status.value,
                created_at=o.created_at,
            )
            for o in orders.scalars().all()
        ] + [
            RecentActivity(
                type="company",
                id=c.id,
                title=c.name,
                status=c.type.value,
                created_at=c.created_at,
            )
            for c in companies.scalars().all()
        ]
        # SQLite hands back naive timestamps, all stored in UTC
        activity.sort(key=lambda a: a.created_at.replace(tzinfo=None), reverse=True)
        return activity[:limit]

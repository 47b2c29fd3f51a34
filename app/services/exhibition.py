"""
Exhibition service.
Handles exhibitions, their costs (with the actual_cost rollup) and
follow-ups.
"""

import logging
from typing import List
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from fastapi import HTTPException, status

from app.core import cache
from app.core.cache import query_cache
from app.models.company import Company
from app.models.exhibition import (
    Exhibition,
    ExhibitionCost,
    ExhibitionFollowup,
    ExhibitionStatus,
)
from app.models.user import User
from app.schemas.exhibition import (
    ExhibitionCreate,
    ExhibitionUpdate,
    ExhibitionCostCreate,
    ExhibitionFollowupCreate,
    ExhibitionFollowupUpdate,
    CostSummaryResponse,
)
from app.services.pricing import convert_between, quantize


logger = logging.getLogger(__name__)


class ExhibitionService:
    """Service for exhibition operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _invalidate(self) -> None:
        query_cache.invalidate_on_commit(self.db, cache.DASHBOARD)

    async def create(self, creator: User, data: ExhibitionCreate) -> Exhibition:
        exhibition = Exhibition(created_by=creator.id, **data.model_dump())

        self.db.add(exhibition)
        await self.db.flush()
        await self.db.refresh(exhibition)

        self._invalidate()
        logger.info("Exhibition %s created: %s", exhibition.id, exhibition.name)
        return exhibition

    async def get_or_404(self, exhibition_id: int) -> Exhibition:
        result = await self.db.execute(
            select(Exhibition).where(Exhibition.id == exhibition_id)
        )
        exhibition = result.scalar_one_or_none()
        if not exhibition:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Exhibition not found",
            )
        return exhibition

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        status: ExhibitionStatus | None = None,
        search: str | None = None,
    ) -> tuple[List[Exhibition], int]:
        """List exhibitions, most recent start date first."""
        filters = []
        if status:
            filters.append(Exhibition.status == status)
        if search:
            search_filter = f"%{search}%"
            filters.append(or_(
                Exhibition.name.ilike(search_filter),
                Exhibition.location.ilike(search_filter),
            ))

        total_result = await self.db.execute(
            select(func.count(Exhibition.id)).where(*filters)
        )
        total = total_result.scalar() or 0

        result = await self.db.execute(
            select(Exhibition)
            .where(*filters)
            .order_by(Exhibition.start_date.desc(), Exhibition.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def update(self, exhibition: Exhibition, data: ExhibitionUpdate) -> Exhibition:
        """
        Apply the fields present in data.

        Changing cost_currency re-converts actual_cost.

        Raises:
            HTTPException: If the resulting start date is after the end date
        """
        update_data = data.model_dump(exclude_unset=True)
        start_date = update_data.get("start_date", exhibition.start_date)
        end_date = update_data.get("end_date", exhibition.end_date)
        if start_date and end_date and start_date > end_date:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="start_date must not be after end_date",
            )

        for field, value in update_data.items():
            setattr(exhibition, field, value)
        await self.db.flush()

        if "cost_currency" in update_data:
            await self._recalculate_actual_cost(exhibition)

        await self.db.refresh(exhibition)
        self._invalidate()
        logger.info("Exhibition %s updated", exhibition.id)
        return exhibition

    async def delete(self, exhibition: Exhibition) -> None:
        await self.db.delete(exhibition)
        await self.db.flush()

        self._invalidate()
        logger.info("Exhibition %s deleted", exhibition.id)

    # Costs

    async def list_costs(self, exhibition: Exhibition) -> List[ExhibitionCost]:
        result = await self.db.execute(
            select(ExhibitionCost)
            .where(ExhibitionCost.exhibition_id == exhibition.id)
            .order_by(ExhibitionCost.cost_date, ExhibitionCost.id)
        )
        return list(result.scalars().all())

    async def _recalculate_actual_cost(self, exhibition: Exhibition) -> Decimal:
        """Store the sum of all costs, converted into the exhibition's cost currency."""
        total = sum(
            (
                convert_between(cost.amount, cost.currency, exhibition.cost_currency)
                for cost in await self.list_costs(exhibition)
            ),
            Decimal("0"),
        )
        exhibition.actual_cost = quantize(total)
        await self.db.flush()
        return exhibition.actual_cost

    async def add_cost(
        self,
        exhibition: Exhibition,
        creator: User,
        data: ExhibitionCostCreate,
    ) -> ExhibitionCost:
        cost = ExhibitionCost(
            exhibition_id=exhibition.id,
            created_by=creator.id,
            **data.model_dump(),
        )
        self.db.add(cost)
        await self.db.flush()
        await self.db.refresh(cost)

        await self._recalculate_actual_cost(exhibition)

        self._invalidate()
        logger.info(
            "Cost %s added to exhibition %s, actual cost now %s %s",
            cost.id,
            exhibition.id,
            exhibition.actual_cost,
            exhibition.cost_currency,
        )
        return cost

    async def remove_cost(self, exhibition: Exhibition, cost_id: int) -> None:
        cost = await self.db.get(ExhibitionCost, cost_id)
        if not cost or cost.exhibition_id != exhibition.id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cost not found",
            )

        await self.db.delete(cost)
        await self.db.flush()
        await self._recalculate_actual_cost(exhibition)

        self._invalidate()
        logger.info("Cost %s removed from exhibition %s", cost_id, exhibition.id)

    async def cost_summary(self, exhibition: Exhibition) -> CostSummaryResponse:
        """Cost totals per currency and converted into the cost currency."""
        by_currency: dict[str, Decimal] = {}
        total = Decimal("0")
        for cost in await self.list_costs(exhibition):
            by_currency[cost.currency] = by_currency.get(cost.currency, Decimal("0")) + Decimal(cost.amount)
            total += convert_between(cost.amount, cost.currency, exhibition.cost_currency)

        total = quantize(total)
        target = exhibition.target_cost
        return CostSummaryResponse(
            exhibition_id=exhibition.id,
            cost_currency=exhibition.cost_currency,
            by_currency={code: quantize(amount) for code, amount in by_currency.items()},
            total=total,
            target_cost=target,
            remaining_budget=quantize(Decimal(target) - total) if target is not None else None,
        )

    # Follow-ups

    async def list_followups(self, exhibition: Exhibition) -> List[ExhibitionFollowup]:
        result = await self.db.execute(
            select(ExhibitionFollowup)
            .where(ExhibitionFollowup.exhibition_id == exhibition.id)
            .order_by(ExhibitionFollowup.follow_up_date, ExhibitionFollowup.id)
        )
        return list(result.scalars().all())

    async def _check_company(self, company_id: int | None) -> None:
        if company_id is not None and not await self.db.get(Company, company_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Company not found",
            )

    async def add_followup(
        self,
        exhibition: Exhibition,
        creator: User,
        data: ExhibitionFollowupCreate,
    ) -> ExhibitionFollowup:
        await self._check_company(data.company_id)

        followup = ExhibitionFollowup(
            exhibition_id=exhibition.id,
            created_by=creator.id,
            **data.model_dump(),
        )
        self.db.add(followup)
        await self.db.flush()
        await self.db.refresh(followup)

        self._invalidate()
        return followup

    async def get_followup_or_404(self, exhibition: Exhibition, followup_id: int) -> ExhibitionFollowup:
        followup = await self.db.get(ExhibitionFollowup, followup_id)
        if not followup or followup.exhibition_id != exhibition.id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Follow-up not found",
            )
        return followup

    async def update_followup(
        self,
        followup: ExhibitionFollowup,
        data: ExhibitionFollowupUpdate,
    ) -> ExhibitionFollowup:
        update_data = data.model_dump(exclude_unset=True)
        await self._check_company(update_data.get("company_id"))

        for field, value in update_data.items():
            setattr(followup, field, value)
        await self.db.flush()
        await self.db.refresh(followup)

        self._invalidate()
        return followup

    async def remove_followup(self, followup: ExhibitionFollowup) -> None:
        await self.db.delete(followup)
        await self.db.flush()
        self._invalidate()

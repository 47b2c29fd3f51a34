"""
Order service.
Handles order CRUD and order items with the total rollup.
"""

import logging
from typing import Iterable, List
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from fastapi import HTTPException, status

from app.core import cache
from app.core.cache import query_cache
from app.core.config import settings
from app.models.company import Company
from app.models.order import Order, OrderItem, OrderStatus
from app.models.user import User
from app.schemas.order import OrderCreate, OrderUpdate, OrderItemCreate
from app.services.pricing import line_total, items_total
from app.services.product import ProductService


logger = logging.getLogger(__name__)


def next_daily_number(prefix: str, existing: Iterable[str]) -> str:
    """
    Next number after the highest numeric suffix still present under
    prefix, so deleting a row never makes the next number collide.
    """
    highest = 0
    for number in existing:
        suffix = number[len(prefix):]
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{prefix}{str(highest + 1).zfill(3)}"


class OrderService:
    """Service for order operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.products = ProductService(db)

    def _invalidate(self) -> None:
        query_cache.invalidate_on_commit(self.db, cache.DASHBOARD)

    async def generate_order_number(self, day: date | None = None) -> str:
        """
        Generate unique order number.
        Format: SIP-{YYYYMMDD}-{sequence of the day}
        """
        day = day or date.today()
        prefix = f"SIP-{day:%Y%m%d}-"

        result = await self.db.execute(
            select(Order.order_number).where(Order.order_number.like(f"{prefix}%"))
        )
        return next_daily_number(prefix, result.scalars().all())

    async def create(self, creator: User, data: OrderCreate) -> Order:
        """
        Create an order together with its items.

        The order and its items are flushed in the request transaction,
        so a failing item leaves no order behind.

        Raises:
            HTTPException: If the company or a product does not exist
        """
        if not await self.db.get(Company, data.company_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Company not found",
            )

        order = Order(
            created_by=creator.id,
            company_id=data.company_id,
            quotation_id=data.quotation_id,
            title=data.title,
            order_number=data.order_number or await self.generate_order_number(),
            status=data.status,
            currency=data.currency or settings.DEFAULT_CURRENCY,
            delivery_date=data.delivery_date,
            notes=data.notes,
        )

        self.db.add(order)
        await self.db.flush()

        for item_data in data.items:
            await self._create_item(order, item_data)

        await self._recalculate_total(order)

        self._invalidate()
        logger.info("Order %s created: %s", order.id, order.order_number)
        return await self.reload(order.id)

    async def _create_item(self, order: Order, data: OrderItemCreate) -> OrderItem:
        product = await self.products.get_or_404(data.product_id)
        unit_price = data.unit_price if data.unit_price is not None else product.unit_price

        item = OrderItem(
            order_id=order.id,
            product_id=product.id,
            quantity=data.quantity,
            unit_price=unit_price,
            total_price=line_total(unit_price, data.quantity),
        )
        self.db.add(item)
        await self.db.flush()
        return item

    async def _load_items(self, order_id: int) -> List[OrderItem]:
        result = await self.db.execute(
            select(OrderItem)
            .where(OrderItem.order_id == order_id)
            .order_by(OrderItem.id)
        )
        return list(result.scalars().all())

    async def _recalculate_total(self, order: Order) -> None:
        order.total_amount = items_total(await self._load_items(order.id))
        await self.db.flush()

    async def get_by_id(self, order_id: int) -> Order | None:
        result = await self.db.execute(
            select(Order).where(Order.id == order_id)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, order_id: int) -> Order:
        order = await self.get_by_id(order_id)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )
        return order

    async def reload(self, order_id: int) -> Order:
        """Re-read an order and its items after a write."""
        result = await self.db.execute(
            select(Order)
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        status: OrderStatus | None = None,
        company_id: int | None = None,
        search: str | None = None,
    ) -> tuple[List[Order], int]:
        """List orders, newest first, each with its company."""
        filters = []
        if status:
            filters.append(Order.status == status)
        if company_id:
            filters.append(Order.company_id == company_id)
        if search:
            search_filter = f"%{search}%"
            filters.append(or_(
                Order.title.ilike(search_filter),
                Order.order_number.ilike(search_filter),
            ))

        total_result = await self.db.execute(
            select(func.count(Order.id)).where(*filters)
        )
        total = total_result.scalar() or 0

        result = await self.db.execute(
            select(Order)
            .where(*filters)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def update(self, order: Order, data: OrderUpdate) -> Order:
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("company_id") is not None and not await self.db.get(Company, update_data["company_id"]):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Company not found",
            )

        for field, value in update_data.items():
            setattr(order, field, value)

        await self.db.flush()

        self._invalidate()
        logger.info("Order %s updated", order.id)
        return await self.reload(order.id)

    async def delete(self, order: Order) -> None:
        await self.db.delete(order)
        await self.db.flush()

        self._invalidate()
        logger.info("Order %s deleted", order.id)

    async def list_items(self, order: Order) -> List[OrderItem]:
        return await self._load_items(order.id)

    async def add_item(self, order: Order, data: OrderItemCreate) -> Order:
        item = await self._create_item(order, data)
        await self._recalculate_total(order)

        self._invalidate()
        logger.info("Item %s added to order %s", item.id, order.id)
        return await self.reload(order.id)

    async def remove_item(self, order: Order, item_id: int) -> Order:
        item = await self.db.get(OrderItem, item_id)
        if not item or item.order_id != order.id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order item not found",
            )

        await self.db.delete(item)
        await self.db.flush()
        await self._recalculate_total(order)

        self._invalidate()
        logger.info("Item %s removed from order %s", item_id, order.id)
        return await self.reload(order.id)

"""
Order schemas for request/response validation.
"""

from datetime import date, datetime
from decimal import Decimal
from pydantic import Field

from app.schemas.base import BaseSchema, PaginatedResponse
from app.models.order import OrderStatus


class OrderItemCreate(BaseSchema):
    product_id: int
    quantity: Decimal = Field(default=Decimal("1"), gt=0)
    unit_price: Decimal | None = Field(None, ge=0, description="Defaults to the product price")


class OrderItemResponse(BaseSchema):
    id: int
    order_id: int
    product_id: int
    product_name: str | None = None
    quantity: Decimal
    unit_price: Decimal
    total_price: Decimal


class OrderBase(BaseSchema):
    company_id: int
    title: str = Field(..., min_length=1, max_length=255)
    quotation_id: int | None = None
    currency: str | None = Field(None, max_length=10)
    delivery_date: date | None = None
    notes: str | None = None


class OrderCreate(OrderBase):
    """Schema for creating an order together with its items."""

    order_number: str | None = Field(None, max_length=50)
    status: OrderStatus = OrderStatus.PENDING
    items: list[OrderItemCreate] = Field(default_factory=list)


class OrderUpdate(BaseSchema):
    company_id: int | None = None
    title: str | None = Field(None, min_length=1, max_length=255)
    status: OrderStatus | None = None
    currency: str | None = Field(None, max_length=10)
    delivery_date: date | None = None
    notes: str | None = None


class OrderResponse(OrderBase):
    id: int
    order_number: str
    status: OrderStatus
    currency: str
    company_name: str | None = None
    total_amount: Decimal
    items: list[OrderItemResponse] = []
    created_by: int | None
    created_at: datetime
    updated_at: datetime


class OrderListResponse(PaginatedResponse):
    items: list[OrderResponse]

"""
Order models.
Orders are created directly or converted from accepted quotations.
"""

from typing import Optional, List, TYPE_CHECKING
from decimal import Decimal
from datetime import date
from enum import Enum
from sqlalchemy import String, Text, ForeignKey, Integer, Numeric, Date, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, CreatorMixin

if TYPE_CHECKING:
    from app.models.company import Company
    from app.models.product import Product


class OrderStatus(str, Enum):
    """Order status enumeration."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class Order(BaseModel, CreatorMixin):
    """
    Order model.

    Attributes:
        company_id: Ordering company
        quotation_id: Quotation the order was converted from
        title: Short description
        order_number: Unique order number
        status: Current status
        currency: Currency of all prices on the order
        delivery_date: Planned delivery date
        notes: Additional notes
        total_amount: Rollup of item totals
    """

    __tablename__ = "orders"

    company_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("companies.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    quotation_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("quotations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    order_number: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )
    status: Mapped[OrderStatus] = mapped_column(
        SQLEnum(OrderStatus),
        default=OrderStatus.PENDING,
        nullable=False,
        index=True,
    )
    currency: Mapped[str] = mapped_column(
        String(10),
        default="TRY",
        nullable=False,
    )
    delivery_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=14, scale=2),
        default=Decimal("0.00"),
        nullable=False,
    )

    # Relationships
    company: Mapped["Company"] = relationship(
        "Company",
        lazy="selectin",
    )
    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
        lazy="selectin",
    )

    @property
    def company_name(self) -> Optional[str]:
        return self.company.name if self.company else None

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, number='{self.order_number}', total={self.total_amount})>"


class OrderItem(BaseModel):
    """Order line item. total_price = unit_price * quantity."""

    __tablename__ = "order_items"

    order_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="RESTRICT"),
        nullable=False,
    )
    quantity: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        default=Decimal("1"),
        nullable=False,
    )
    unit_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
    )
    total_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=14, scale=2),
        nullable=False,
    )

    order: Mapped["Order"] = relationship(
        "Order",
        back_populates="items",
    )
    product: Mapped["Product"] = relationship(
        "Product",
        lazy="selectin",
    )

    @property
    def product_name(self) -> Optional[str]:
        return self.product.name if self.product else None

"""
Quotation models.
A quotation is a priced offer to a company made of product line items.
The stored total_amount is a rollup of the item totals.
"""

from typing import Optional, List, Any, TYPE_CHECKING
from decimal import Decimal
from datetime import date
from enum import Enum
from sqlalchemy import (
    String,
    Text,
    ForeignKey,
    Integer,
    Numeric,
    Date,
    Boolean,
    JSON,
    Enum as SQLEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, CreatorMixin, Language

if TYPE_CHECKING:
    from app.models.company import Company
    from app.models.product import Product, ProductMatrix
    from app.models.settings import CompanyInfo, BankInfo, PaymentMethod, DeliveryMethod


class QuotationStatus(str, Enum):
    """Quotation status enumeration."""
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


ACTIVE_QUOTATION_STATUSES = (QuotationStatus.DRAFT, QuotationStatus.SENT)


class ResponsibilityType(str, Enum):
    """Party a quotation responsibility applies to."""
    CUSTOMER = "customer"
    SUPPLIER = "supplier"


class Quotation(BaseModel, CreatorMixin):
    """
    Quotation model.

    Attributes:
        company_id: Company the offer is addressed to
        title: Short description
        quotation_number: Unique quotation number
        status: Current status
        currency: Currency of all prices on the quotation
        language: Document language
        quotation_date: Date printed on the document
        valid_until: Offer validity date
        notes: Additional notes
        total_amount: Rollup of item totals
        revision_number: 0 for an original, n for its n-th revision
        parent_quotation_id: Quotation this one revises
        prepared_by: User who prepared the offer
        reviewed_by: User who reviewed the offer
    """

    __tablename__ = "quotations"

    company_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("companies.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    quotation_number: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )
    status: Mapped[QuotationStatus] = mapped_column(
        SQLEnum(QuotationStatus),
        default=QuotationStatus.DRAFT,
        nullable=False,
        index=True,
    )
    currency: Mapped[str] = mapped_column(
        String(10),
        default="TRY",
        nullable=False,
    )
    language: Mapped[Language] = mapped_column(
        SQLEnum(Language),
        default=Language.TR,
        nullable=False,
    )

    # Dates
    quotation_date: Mapped[date] = mapped_column(
        Date,
        default=date.today,
        nullable=False,
    )
    valid_until: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )

    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Rollup of item totals
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=14, scale=2),
        default=Decimal("0.00"),
        nullable=False,
    )

    # Revisions
    revision_number: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    parent_quotation_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("quotations.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Review trail
    prepared_by: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    reviewed_by: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    company: Mapped["Company"] = relationship(
        "Company",
        lazy="selectin",
    )
    items: Mapped[List["QuotationItem"]] = relationship(
        "QuotationItem",
        back_populates="quotation",
        cascade="all, delete-orphan",
        order_by="QuotationItem.id",
        lazy="selectin",
    )
    settings: Mapped[Optional["QuotationSettings"]] = relationship(
        "QuotationSettings",
        back_populates="quotation",
        cascade="all, delete-orphan",
        uselist=False,
        lazy="selectin",
    )
    responsibilities: Mapped[List["QuotationResponsibility"]] = relationship(
        "QuotationResponsibility",
        back_populates="quotation",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def company_name(self) -> Optional[str]:
        return self.company.name if self.company else None

    @property
    def main_items(self) -> List["QuotationItem"]:
        """Items that are not bundled sub-items."""
        return [item for item in self.items if not item.is_sub_item]

    @property
    def is_expired(self) -> bool:
        return bool(self.valid_until and date.today() > self.valid_until)

    def __repr__(self) -> str:
        return f"<Quotation(id={self.id}, number='{self.quotation_number}', total={self.total_amount})>"


class QuotationItem(BaseModel):
    """
    Quotation line item.

    Attributes:
        quotation_id: Parent quotation
        product_id: Quoted product
        quantity: Number of units
        unit_price: Price per unit before discount
        discount_percentage: Discount in percent
        total_price: unit_price * quantity * (1 - discount_percentage / 100)
        is_sub_item: Row is a bundled sub-item of another row
        parent_item_id: Row this sub-item belongs to
        selected_matrix_id: Price matrix used for unit_price
        custom_properties: Variant parameters and other per-line data
    """

    __tablename__ = "quotation_items"

    quotation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("quotations.id", ondelete="CASCADE"),
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
    discount_percentage: Mapped[Decimal] = mapped_column(
        Numeric(precision=5, scale=2),
        default=Decimal("0"),
        nullable=False,
    )
    total_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=14, scale=2),
        nullable=False,
    )

    # Bundles and variants
    is_sub_item: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    parent_item_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("quotation_items.id", ondelete="CASCADE"),
        nullable=True,
    )
    selected_matrix_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("product_matrices.id", ondelete="SET NULL"),
        nullable=True,
    )
    custom_properties: Mapped[Optional[Any]] = mapped_column(
        JSON,
        nullable=True,
    )

    # Relationships
    quotation: Mapped["Quotation"] = relationship(
        "Quotation",
        back_populates="items",
    )
    product: Mapped["Product"] = relationship(
        "Product",
        lazy="selectin",
    )
    selected_matrix: Mapped[Optional["ProductMatrix"]] = relationship(
        "ProductMatrix",
        lazy="selectin",
    )

    @property
    def product_name(self) -> Optional[str]:
        return self.product.name if self.product else None

    def __repr__(self) -> str:
        return f"<QuotationItem(id={self.id}, product_id={self.product_id}, total={self.total_price})>"


class QuotationSettings(BaseModel):
    """Seller details, bank account and terms chosen for one quotation."""

    __tablename__ = "quotation_settings"

    quotation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("quotations.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    company_info_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("company_info.id", ondelete="SET NULL"),
        nullable=True,
    )
    bank_info_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("bank_info.id", ondelete="SET NULL"),
        nullable=True,
    )
    payment_method_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("payment_methods.id", ondelete="SET NULL"),
        nullable=True,
    )
    delivery_method_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("delivery_methods.id", ondelete="SET NULL"),
        nullable=True,
    )

    quotation: Mapped["Quotation"] = relationship(
        "Quotation",
        back_populates="settings",
    )
    company_info: Mapped[Optional["CompanyInfo"]] = relationship("CompanyInfo", lazy="selectin")
    bank_info: Mapped[Optional["BankInfo"]] = relationship("BankInfo", lazy="selectin")
    payment_method: Mapped[Optional["PaymentMethod"]] = relationship("PaymentMethod", lazy="selectin")
    delivery_method: Mapped[Optional["DeliveryMethod"]] = relationship("DeliveryMethod", lazy="selectin")


class QuotationResponsibility(BaseModel):
    """Obligations of the customer or the supplier under a quotation."""

    __tablename__ = "quotation_responsibilities"

    quotation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("quotations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    responsibility_type: Mapped[ResponsibilityType] = mapped_column(
        SQLEnum(ResponsibilityType),
        nullable=False,
    )
    responsible_party: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    language: Mapped[Language] = mapped_column(
        SQLEnum(Language),
        default=Language.TR,
        nullable=False,
    )

    quotation: Mapped["Quotation"] = relationship(
        "Quotation",
        back_populates="responsibilities",
    )

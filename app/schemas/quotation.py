"""
Quotation schemas for request/response validation.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any
from pydantic import Field, model_validator

from app.schemas.base import BaseSchema, PaginatedResponse
from app.models.base import Language
from app.models.quotation import QuotationStatus, ResponsibilityType


class QuotationItemCreate(BaseSchema):
    """
    Line item input.

    unit_price defaults to the product price, or to the matrix price when
    selected_matrix_id and matrix_parameters are given.
    """

    product_id: int
    quantity: Decimal = Field(default=Decimal("1"), gt=0)
    unit_price: Decimal | None = Field(None, ge=0)
    discount_percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    include_sub_items: bool = False
    selected_matrix_id: int | None = None
    matrix_parameters: list[str | None] | None = Field(None, max_length=4)
    custom_properties: dict[str, Any] | None = None


class QuotationItemUpdate(BaseSchema):
    quantity: Decimal | None = Field(None, gt=0)
    unit_price: Decimal | None = Field(None, ge=0)
    discount_percentage: Decimal | None = Field(None, ge=0, le=100)
    custom_properties: dict[str, Any] | None = None


class QuotationItemResponse(BaseSchema):
    """Quotation item response schema."""

    id: int
    quotation_id: int
    product_id: int
    product_name: str | None = None
    quantity: Decimal
    unit_price: Decimal
    discount_percentage: Decimal
    total_price: Decimal
    is_sub_item: bool
    parent_item_id: int | None
    selected_matrix_id: int | None
    custom_properties: dict[str, Any] | None = None


class QuotationBase(BaseSchema):
    """Base quotation schema."""

    company_id: int
    title: str = Field(..., min_length=1, max_length=255)
    currency: str | None = Field(None, max_length=10)
    language: Language = Language.TR
    quotation_date: date | None = None
    valid_until: date | None = None
    notes: str | None = None
    prepared_by: int | None = None
    reviewed_by: int | None = None


class QuotationCreate(QuotationBase):
    """Schema for creating a quotation. The number is generated when omitted."""

    quotation_number: str | None = Field(None, max_length=50)
    status: QuotationStatus = QuotationStatus.DRAFT
    items: list[QuotationItemCreate] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_validity(self):
        if self.quotation_date and self.valid_until and self.valid_until < self.quotation_date:
            raise ValueError("valid_until must not be before quotation_date")
        return self


class QuotationUpdate(BaseSchema):
    """Schema for updating a quotation."""

    company_id: int | None = None
    title: str | None = Field(None, min_length=1, max_length=255)
    status: QuotationStatus | None = None
    currency: str | None = Field(None, max_length=10)
    language: Language | None = None
    quotation_date: date | None = None
    valid_until: date | None = None
    notes: str | None = None
    prepared_by: int | None = None
    reviewed_by: int | None = None


class QuotationResponse(QuotationBase):
    """Quotation response schema."""

    id: int
    quotation_number: str
    status: QuotationStatus
    currency: str
    quotation_date: date
    company_name: str | None = None
    total_amount: Decimal
    revision_number: int
    parent_quotation_id: int | None
    is_expired: bool
    items: list[QuotationItemResponse] = []
    created_by: int | None
    created_at: datetime
    updated_at: datetime


class QuotationSummary(BaseSchema):
    """Quotation row for list views."""

    id: int
    quotation_number: str
    title: str
    company_id: int
    company_name: str | None = None
    status: QuotationStatus
    currency: str
    quotation_date: date
    valid_until: date | None
    total_amount: Decimal
    revision_number: int
    created_at: datetime


class QuotationListResponse(PaginatedResponse):
    """Paginated quotation list response."""

    items: list[QuotationSummary]


class ResponsibilityResponse(BaseSchema):
    id: int
    responsibility_type: ResponsibilityType
    responsible_party: str
    description: str | None
    language: Language


class QuotationSettingsUpdate(BaseSchema):
    """
    Seller, bank and terms for one quotation.

    A blank responsibility text removes that responsibility.
    """

    company_info_id: int | None = None
    bank_info_id: int | None = None
    payment_method_id: int | None = None
    delivery_method_id: int | None = None
    customer_responsibilities: str | None = None
    supplier_responsibilities: str | None = None


class QuotationSettingsResponse(BaseSchema):
    quotation_id: int
    company_info_id: int | None = None
    bank_info_id: int | None = None
    payment_method_id: int | None = None
    delivery_method_id: int | None = None
    customer_responsibilities: str | None = None
    supplier_responsibilities: str | None = None
    responsibilities: list[ResponsibilityResponse] = []


class QuotationPdfOptions(BaseSchema):
    """Rendering options for the quotation PDF."""

    show_product_properties: bool = True
    header_color: str = Field(default="#1e40af", pattern=r"^#[0-9a-fA-F]{6}$")
    font_size: int = Field(default=9, ge=6, le=14)
    footer_text: str | None = Field(None, max_length=500)

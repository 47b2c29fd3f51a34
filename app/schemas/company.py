"""
Company schemas for request/response validation.
"""

from datetime import datetime
from pydantic import EmailStr, Field

from app.schemas.base import BaseSchema, PaginatedResponse
from app.models.company import CompanyType


class CompanyBase(BaseSchema):
    """Base company schema with common fields."""

    name: str = Field(..., min_length=1, max_length=255)
    type: CompanyType = CompanyType.CUSTOMER
    contact_person: str | None = Field(None, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    tax_number: str | None = Field(None, max_length=100)
    notes: str | None = None


class CompanyCreate(CompanyBase):
    """Schema for creating a new company."""
    pass


class CompanyUpdate(BaseSchema):
    """Schema for updating a company."""

    name: str | None = Field(None, min_length=1, max_length=255)
    type: CompanyType | None = None
    contact_person: str | None = Field(None, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    tax_number: str | None = Field(None, max_length=100)
    notes: str | None = None


class CompanyResponse(CompanyBase):
    """Company response schema."""

    id: int
    email: str | None = None
    created_by: int | None
    created_at: datetime
    updated_at: datetime


class CompanyListResponse(PaginatedResponse):
    """Paginated company list response."""

    items: list[CompanyResponse]

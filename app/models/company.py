"""
Company model for customers and partners.
"""

from typing import Optional
from enum import Enum
from sqlalchemy import String, Text, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, CreatorMixin


class CompanyType(str, Enum):
    """Company type enumeration."""
    CUSTOMER = "customer"
    PARTNER = "partner"
    SUPPLIER = "supplier"


class Company(BaseModel, CreatorMixin):
    """
    Company model representing a customer or partner.

    Attributes:
        name: Company name
        type: Relationship type (customer, partner, supplier)
        contact_person: Main contact at the company
        email: Contact email
        phone: Contact phone number
        address: Street address
        city: City
        country: Country
        tax_number: Tax identification number
        notes: Free-form notes
    """

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    type: Mapped[CompanyType] = mapped_column(
        SQLEnum(CompanyType),
        default=CompanyType.CUSTOMER,
        nullable=False,
    )
    contact_person: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    address: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    city: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    country: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    tax_number: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name='{self.name}')>"

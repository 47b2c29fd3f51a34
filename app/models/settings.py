"""
Settings and lookup tables.
Seller details, bank accounts, payment/delivery terms, currencies,
countries, company types, quotation statuses, translations and
quotation parameters.
"""

from typing import Optional, Any
from sqlalchemy import String, Text, Boolean, JSON, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, CreatorMixin, Language


class CompanyInfo(BaseModel, CreatorMixin):
    """Seller company details printed on quotations."""

    __tablename__ = "company_info"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tax_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    trade_registry_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    logo_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class BankInfo(BaseModel, CreatorMixin):
    """Bank account printed on quotations."""

    __tablename__ = "bank_info"

    bank_name: Mapped[str] = mapped_column(String(255), nullable=False)
    account_number: Mapped[str] = mapped_column(String(100), nullable=False)
    account_holder: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    branch_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    iban: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    swift_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    currency: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class PaymentMethod(BaseModel, CreatorMixin):
    __tablename__ = "payment_methods"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    language: Mapped[Language] = mapped_column(SQLEnum(Language), default=Language.TR, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class DeliveryMethod(BaseModel, CreatorMixin):
    __tablename__ = "delivery_methods"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    language: Mapped[Language] = mapped_column(SQLEnum(Language), default=Language.TR, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Currency(BaseModel):
    __tablename__ = "currencies"

    code: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    symbol: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Country(BaseModel):
    __tablename__ = "countries"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    phone_code: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)


class CompanyTypeOption(BaseModel):
    """Selectable company type label."""

    __tablename__ = "company_types"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class QuotationStatusOption(BaseModel):
    """Display label and color for a quotation status."""

    __tablename__ = "quotation_statuses"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    color: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class DictionaryEntry(BaseModel):
    """Translation of a key into one language."""

    __tablename__ = "dictionary"
    __table_args__ = (
        UniqueConstraint("key_name", "language", name="uq_dictionary_key_language"),
    )

    key_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    language: Mapped[Language] = mapped_column(SQLEnum(Language), default=Language.TR, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)


class CompanySetting(BaseModel, CreatorMixin):
    """
    Quotation parameter.

    value holds {"name": ..., "show_in_pdf": bool}; setting_type groups
    parameters (e.g. "delivery_time", "validity").
    """

    __tablename__ = "company_settings"

    setting_type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    language: Mapped[Language] = mapped_column(SQLEnum(Language), default=Language.TR, nullable=False)

    @property
    def show_in_pdf(self) -> bool:
        return bool((self.value or {}).get("show_in_pdf", True))

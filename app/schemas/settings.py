"""
Settings and lookup table schemas.
"""

from datetime import datetime
from pydantic import EmailStr, Field

from app.schemas.base import BaseSchema
from app.models.base import Language


class LookupResponse(BaseSchema):
    id: int
    created_at: datetime
    updated_at: datetime


# Company info

class CompanyInfoCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = None
    phone: str | None = Field(None, max_length=50)
    email: EmailStr | None = None
    tax_number: str | None = Field(None, max_length=100)
    trade_registry_number: str | None = Field(None, max_length=100)
    website: str | None = Field(None, max_length=255)
    logo_url: str | None = Field(None, max_length=500)
    is_default: bool = False


class CompanyInfoUpdate(BaseSchema):
    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = None
    phone: str | None = Field(None, max_length=50)
    email: EmailStr | None = None
    tax_number: str | None = Field(None, max_length=100)
    trade_registry_number: str | None = Field(None, max_length=100)
    website: str | None = Field(None, max_length=255)
    logo_url: str | None = Field(None, max_length=500)
    is_default: bool | None = None


class CompanyInfoResponse(CompanyInfoCreate, LookupResponse):
    email: str | None = None


# Bank info

class BankInfoCreate(BaseSchema):
    bank_name: str = Field(..., min_length=1, max_length=255)
    account_number: str = Field(..., min_length=1, max_length=100)
    account_holder: str | None = Field(None, max_length=255)
    branch_name: str | None = Field(None, max_length=255)
    iban: str | None = Field(None, max_length=50)
    swift_code: str | None = Field(None, max_length=20)
    currency: str | None = Field(None, max_length=10)
    is_default: bool = False


class BankInfoUpdate(BaseSchema):
    bank_name: str | None = Field(None, min_length=1, max_length=255)
    account_number: str | None = Field(None, min_length=1, max_length=100)
    account_holder: str | None = Field(None, max_length=255)
    branch_name: str | None = Field(None, max_length=255)
    iban: str | None = Field(None, max_length=50)
    swift_code: str | None = Field(None, max_length=20)
    currency: str | None = Field(None, max_length=10)
    is_default: bool | None = None


class BankInfoResponse(BankInfoCreate, LookupResponse):
    pass


# Payment and delivery methods

class TermsMethodCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    language: Language = Language.TR
    is_active: bool = True


class TermsMethodUpdate(BaseSchema):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    language: Language | None = None
    is_active: bool | None = None


class TermsMethodResponse(TermsMethodCreate, LookupResponse):
    pass


# Currencies

class CurrencyCreate(BaseSchema):
    code: str = Field(..., min_length=1, max_length=10)
    name: str = Field(..., min_length=1, max_length=100)
    symbol: str | None = Field(None, max_length=10)
    is_active: bool = True


class CurrencyUpdate(BaseSchema):
    code: str | None = Field(None, min_length=1, max_length=10)
    name: str | None = Field(None, min_length=1, max_length=100)
    symbol: str | None = Field(None, max_length=10)
    is_active: bool | None = None


class CurrencyResponse(CurrencyCreate, LookupResponse):
    pass


# Countries

class CountryCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100)
    code: str | None = Field(None, max_length=10)
    phone_code: str | None = Field(None, max_length=10)


class CountryUpdate(BaseSchema):
    name: str | None = Field(None, min_length=1, max_length=100)
    code: str | None = Field(None, max_length=10)
    phone_code: str | None = Field(None, max_length=10)


class CountryResponse(CountryCreate, LookupResponse):
    pass


# Company types

class CompanyTypeCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    is_active: bool = True


class CompanyTypeUpdate(BaseSchema):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    is_active: bool | None = None


class CompanyTypeResponse(CompanyTypeCreate, LookupResponse):
    pass


# Quotation statuses

class QuotationStatusCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    color: str | None = Field(None, max_length=20)
    is_active: bool = True


class QuotationStatusUpdate(BaseSchema):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    color: str | None = Field(None, max_length=20)
    is_active: bool | None = None


class QuotationStatusResponse(QuotationStatusCreate, LookupResponse):
    pass


# Dictionary

class DictionaryCreate(BaseSchema):
    key_name: str = Field(..., min_length=1, max_length=255)
    value: str = Field(..., min_length=1)
    language: Language = Language.TR
    category: str | None = Field(None, max_length=100)


class DictionaryUpdate(BaseSchema):
    key_name: str | None = Field(None, min_length=1, max_length=255)
    value: str | None = Field(None, min_length=1)
    language: Language | None = None
    category: str | None = Field(None, max_length=100)


class DictionaryResponse(DictionaryCreate, LookupResponse):
    pass


# Quotation parameters

class QuotationParameterValue(BaseSchema):
    name: str = Field(..., min_length=1)
    show_in_pdf: bool = True


class QuotationParameterCreate(BaseSchema):
    setting_type: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    value: QuotationParameterValue | None = None
    language: Language = Language.TR


class QuotationParameterUpdate(BaseSchema):
    setting_type: str | None = Field(None, min_length=1, max_length=100)
    name: str | None = Field(None, min_length=1, max_length=255)
    value: QuotationParameterValue | None = None
    language: Language | None = None


class QuotationParameterResponse(LookupResponse):
    setting_type: str
    name: str
    value: dict | None = None
    language: Language
    show_in_pdf: bool


class PdfVisibilityUpdate(BaseSchema):
    show_in_pdf: bool

"""
Settings endpoints.
The same list/create/update/delete routes for every settings table,
plus translations and the PDF visibility switch of quotation parameters.
"""

from typing import Any, Callable, Type
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel as PydanticModel

from app.api.deps import DbSession, CurrentUser
from app.models.base import BaseModel, Language
from app.models.settings import (
    CompanyInfo,
    BankInfo,
    PaymentMethod,
    DeliveryMethod,
    Currency,
    Country,
    CompanyTypeOption,
    QuotationStatusOption,
    DictionaryEntry,
    CompanySetting,
)
from app.schemas.settings import (
    CompanyInfoCreate,
    CompanyInfoUpdate,
    CompanyInfoResponse,
    BankInfoCreate,
    BankInfoUpdate,
    BankInfoResponse,
    TermsMethodCreate,
    TermsMethodUpdate,
    TermsMethodResponse,
    CurrencyCreate,
    CurrencyUpdate,
    CurrencyResponse,
    CountryCreate,
    CountryUpdate,
    CountryResponse,
    CompanyTypeCreate,
    CompanyTypeUpdate,
    CompanyTypeResponse,
    QuotationStatusCreate,
    QuotationStatusUpdate,
    QuotationStatusResponse,
    DictionaryCreate,
    DictionaryUpdate,
    DictionaryResponse,
    QuotationParameterCreate,
    QuotationParameterUpdate,
    QuotationParameterResponse,
    PdfVisibilityUpdate,
)
from app.schemas.base import MessageResponse
from app.services.settings import LookupService, SettingsService


router = APIRouter()


# List filters

async def no_filters() -> dict[str, Any]:
    return {}


async def language_filter(
    language: Language | None = Query(None, description="Filter by language"),
) -> dict[str, Any]:
    return {"language": language}


async def dictionary_filters(
    language: Language = Query(Language.TR, description="Translation language"),
    category: str | None = Query(None, description="Filter by category"),
) -> dict[str, Any]:
    return {"language": language, "category": category}


async def parameter_filters(
    setting_type: str | None = Query(None, description="Filter by parameter type"),
    language: Language | None = Query(None, description="Filter by language"),
) -> dict[str, Any]:
    return {"setting_type": setting_type, "language": language}


def build_lookup_router(
    model: Type[BaseModel],
    create_schema: Type[PydanticModel],
    update_schema: Type[PydanticModel],
    response_schema: Type[PydanticModel],
    label: str,
    list_filters: Callable = no_filters,
) -> APIRouter:
    """
    CRUD routes for one settings table.

    Schemas are bound through the endpoint annotations, so each table gets
    its own request validation and OpenAPI models.
    """
    lookup_router = APIRouter()

    def get_service(db: DbSession) -> LookupService:
        return LookupService(db, model, response_schema, label)

    Service = Depends(get_service)

    @lookup_router.get("", response_model=list[response_schema], summary=f"List {label.lower()} records")
    async def list_rows(
        current_user: CurrentUser,
        service: LookupService = Service,
        filters: dict[str, Any] = Depends(list_filters),
    ) -> list[dict]:
        return await service.list(**filters)

    @lookup_router.post(
        "",
        response_model=response_schema,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create a {label.lower()} record",
    )
    async def create_row(
        data: create_schema,  # type: ignore[valid-type]
        current_user: CurrentUser,
        service: LookupService = Service,
    ):
        row = await service.create(current_user, data)
        return response_schema.model_validate(row)

    @lookup_router.get("/{row_id}", response_model=response_schema, summary=f"Get a {label.lower()} record")
    async def get_row(
        row_id: int,
        current_user: CurrentUser,
        service: LookupService = Service,
    ):
        return response_schema.model_validate(await service.get_or_404(row_id))

    @lookup_router.patch("/{row_id}", response_model=response_schema, summary=f"Update a {label.lower()} record")
    async def update_row(
        row_id: int,
        data: update_schema,  # type: ignore[valid-type]
        current_user: CurrentUser,
        service: LookupService = Service,
    ):
        row = await service.get_or_404(row_id)
        row = await service.update(row, data)
        return response_schema.model_validate(row)

    @lookup_router.delete("/{row_id}", response_model=MessageResponse, summary=f"Delete a {label.lower()} record")
    async def delete_row(
        row_id: int,
        current_user: CurrentUser,
        service: LookupService = Service,
    ) -> MessageResponse:
        row = await service.get_or_404(row_id)
        await service.delete(row)
        return MessageResponse(message=f"{label} deleted")

    return lookup_router


@router.get(
    "/translations",
    response_model=dict[str, str],
    summary="Translations",
    description="Dictionary entries of one language as key -> value",
)
async def translations(
    current_user: CurrentUser,
    db: DbSession,
    language: Language = Query(Language.TR, description="Translation language"),
    category: str | None = Query(None, description="Filter by category"),
) -> dict[str, str]:
    service = SettingsService(db)
    return await service.translations(language, category)


@router.patch(
    "/quotation-parameters/{parameter_id}/pdf-visibility",
    response_model=QuotationParameterResponse,
    summary="Show or hide a quotation parameter on PDFs",
)
async def set_pdf_visibility(
    parameter_id: int,
    data: PdfVisibilityUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> QuotationParameterResponse:
    lookup = LookupService(db, CompanySetting, QuotationParameterResponse, "Quotation parameter")
    parameter = await lookup.get_or_404(parameter_id)
    parameter = await SettingsService(db).set_pdf_visibility(parameter, data.show_in_pdf)
    return QuotationParameterResponse.model_validate(parameter)


LOOKUP_ROUTES = [
    ("/company-info", CompanyInfo, CompanyInfoCreate, CompanyInfoUpdate, CompanyInfoResponse, "Company info", no_filters),
    ("/bank-info", BankInfo, BankInfoCreate, BankInfoUpdate, BankInfoResponse, "Bank info", no_filters),
    ("/payment-methods", PaymentMethod, TermsMethodCreate, TermsMethodUpdate, TermsMethodResponse, "Payment method", language_filter),
    ("/delivery-methods", DeliveryMethod, TermsMethodCreate, TermsMethodUpdate, TermsMethodResponse, "Delivery method", language_filter),
    ("/currencies", Currency, CurrencyCreate, CurrencyUpdate, CurrencyResponse, "Currency", no_filters),
    ("/countries", Country, CountryCreate, CountryUpdate, CountryResponse, "Country", no_filters),
    ("/company-types", CompanyTypeOption, CompanyTypeCreate, CompanyTypeUpdate, CompanyTypeResponse, "Company type", no_filters),
    ("/quotation-statuses", QuotationStatusOption, QuotationStatusCreate, QuotationStatusUpdate, QuotationStatusResponse, "Quotation status", no_filters),
    ("/dictionary", DictionaryEntry, DictionaryCreate, DictionaryUpdate, DictionaryResponse, "Translation", dictionary_filters),
    ("/quotation-parameters", CompanySetting, QuotationParameterCreate, QuotationParameterUpdate, QuotationParameterResponse, "Quotation parameter", parameter_filters),
]

for prefix, model, create_schema, update_schema, response_schema, label, list_filters in LOOKUP_ROUTES:
    router.include_router(
        build_lookup_router(model, create_schema, update_schema, response_schema, label, list_filters),
        prefix=prefix,
    )

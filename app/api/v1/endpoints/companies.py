"""
Company management endpoints.
CRUD operations for customer and supplier companies.
"""

from fastapi import APIRouter, Query, status

from app.api.deps import DbSession, CurrentUser
from app.models.company import CompanyType
from app.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyResponse,
    CompanyListResponse,
)
from app.schemas.base import MessageResponse
from app.services.company import CompanyService


router = APIRouter()


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a company",
)
async def create_company(
    data: CompanyCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> CompanyResponse:
    """Create a new company."""
    service = CompanyService(db)
    company = await service.create(current_user, data)
    return CompanyResponse.model_validate(company)


@router.get(
    "",
    response_model=CompanyListResponse,
    summary="List companies",
    description="Paginated company list, newest first",
)
async def list_companies(
    current_user: CurrentUser,
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    search: str | None = Query(None, description="Search by name, contact or email"),
    company_type: CompanyType | None = Query(None, alias="type", description="Filter by type"),
) -> CompanyListResponse:
    """List all companies with pagination."""
    service = CompanyService(db)
    skip = (page - 1) * per_page

    companies, total = await service.list(
        skip=skip,
        limit=per_page,
        search=search,
        company_type=company_type,
    )

    return CompanyListResponse.create(
        items=[CompanyResponse.model_validate(c) for c in companies],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get(
    "/{company_id}",
    response_model=CompanyResponse,
    summary="Get a company",
)
async def get_company(
    company_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> CompanyResponse:
    service = CompanyService(db)
    company = await service.get_or_404(company_id)
    return CompanyResponse.model_validate(company)


@router.patch(
    "/{company_id}",
    response_model=CompanyResponse,
    summary="Update a company",
)
async def update_company(
    company_id: int,
    data: CompanyUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> CompanyResponse:
    service = CompanyService(db)
    company = await service.get_or_404(company_id)
    company = await service.update(company, data)
    return CompanyResponse.model_validate(company)


@router.delete(
    "/{company_id}",
    response_model=MessageResponse,
    summary="Delete a company",
    description="Delete a company (refused while quotations or orders reference it)",
)
async def delete_company(
    company_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = CompanyService(db)
    company = await service.get_or_404(company_id)
    await service.delete(company)
    return MessageResponse(message="Company deleted")

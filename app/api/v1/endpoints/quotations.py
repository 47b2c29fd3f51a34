"""
Quotation endpoints.
Quotations with line items, per-quotation settings, revisions, order
conversion and PDF export.
"""

from fastapi import APIRouter, Query, Response, status

from app.api.deps import DbSession, CurrentUser
from app.models.quotation import QuotationStatus
from app.schemas.order import OrderResponse
from app.schemas.quotation import (
    QuotationCreate,
    QuotationUpdate,
    QuotationResponse,
    QuotationSummary,
    QuotationListResponse,
    QuotationItemCreate,
    QuotationItemUpdate,
    QuotationItemResponse,
    QuotationSettingsUpdate,
    QuotationSettingsResponse,
    QuotationPdfOptions,
)
from app.schemas.base import MessageResponse
from app.services.quotation import QuotationService


router = APIRouter()


@router.post(
    "",
    response_model=QuotationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a quotation",
    description="Create a quotation, optionally with items. The number is generated when omitted.",
)
async def create_quotation(
    data: QuotationCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> QuotationResponse:
    service = QuotationService(db)
    quotation = await service.create(current_user, data)
    return QuotationResponse.model_validate(quotation)


@router.get(
    "",
    response_model=QuotationListResponse,
    summary="List quotations",
)
async def list_quotations(
    current_user: CurrentUser,
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    quotation_status: QuotationStatus | None = Query(None, alias="status", description="Filter by status"),
    company_id: int | None = Query(None, description="Filter by company"),
    search: str | None = Query(None, description="Search by title or number"),
) -> QuotationListResponse:
    """List quotations with pagination, newest first."""
    service = QuotationService(db)
    skip = (page - 1) * per_page

    quotations, total = await service.list(
        skip=skip,
        limit=per_page,
        status=quotation_status,
        company_id=company_id,
        search=search,
    )

    return QuotationListResponse.create(
        items=[QuotationSummary.model_validate(q) for q in quotations],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/{quotation_id}", response_model=QuotationResponse, summary="Get a quotation")
async def get_quotation(
    quotation_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> QuotationResponse:
    service = QuotationService(db)
    quotation = await service.get_or_404(quotation_id)
    return QuotationResponse.model_validate(quotation)


@router.patch("/{quotation_id}", response_model=QuotationResponse, summary="Update a quotation")
async def update_quotation(
    quotation_id: int,
    data: QuotationUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> QuotationResponse:
    service = QuotationService(db)
    quotation = await service.get_or_404(quotation_id)
    quotation = await service.update(quotation, data)
    return QuotationResponse.model_validate(quotation)


@router.delete("/{quotation_id}", response_model=MessageResponse, summary="Delete a quotation")
async def delete_quotation(
    quotation_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = QuotationService(db)
    quotation = await service.get_or_404(quotation_id)
    await service.delete(quotation)
    return MessageResponse(message="Quotation deleted")


# Items

@router.get(
    "/{quotation_id}/items",
    response_model=list[QuotationItemResponse],
    summary="List quotation items",
)
async def list_items(
    quotation_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> list[QuotationItemResponse]:
    service = QuotationService(db)
    quotation = await service.get_or_404(quotation_id)
    return [QuotationItemResponse.model_validate(i) for i in await service.list_items(quotation)]


@router.post(
    "/{quotation_id}/items",
    response_model=QuotationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an item",
    description="Add an item and recompute the quotation total",
)
async def add_item(
    quotation_id: int,
    data: QuotationItemCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> QuotationResponse:
    service = QuotationService(db)
    quotation = await service.get_or_404(quotation_id)
    quotation = await service.add_item(quotation, data)
    return QuotationResponse.model_validate(quotation)


@router.patch(
    "/{quotation_id}/items/{item_id}",
    response_model=QuotationResponse,
    summary="Update an item",
)
async def update_item(
    quotation_id: int,
    item_id: int,
    data: QuotationItemUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> QuotationResponse:
    service = QuotationService(db)
    quotation = await service.get_or_404(quotation_id)
    quotation = await service.update_item(quotation, item_id, data)
    return QuotationResponse.model_validate(quotation)


@router.delete(
    "/{quotation_id}/items/{item_id}",
    response_model=QuotationResponse,
    summary="Remove an item",
    description="Remove an item with its sub-item rows and recompute the quotation total",
)
async def remove_item(
    quotation_id: int,
    item_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> QuotationResponse:
    service = QuotationService(db)
    quotation = await service.get_or_404(quotation_id)
    quotation = await service.remove_item(quotation, item_id)
    return QuotationResponse.model_validate(quotation)


# Settings

@router.get(
    "/{quotation_id}/settings",
    response_model=QuotationSettingsResponse,
    summary="Get quotation settings",
)
async def get_settings(
    quotation_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> QuotationSettingsResponse:
    service = QuotationService(db)
    quotation = await service.get_or_404(quotation_id)
    return await service.get_settings(quotation)


@router.put(
    "/{quotation_id}/settings",
    response_model=QuotationSettingsResponse,
    summary="Save quotation settings",
)
async def save_settings(
    quotation_id: int,
    data: QuotationSettingsUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> QuotationSettingsResponse:
    service = QuotationService(db)
    quotation = await service.get_or_404(quotation_id)
    return await service.save_settings(quotation, data)


# Revisions, orders and PDF

@router.post(
    "/{quotation_id}/revise",
    response_model=QuotationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a revision",
    description="Copy the quotation and its items into a new draft revision",
)
async def revise_quotation(
    quotation_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> QuotationResponse:
    service = QuotationService(db)
    quotation = await service.get_or_404(quotation_id)
    revision = await service.revise(quotation, current_user)
    return QuotationResponse.model_validate(revision)


@router.post(
    "/{quotation_id}/convert-to-order",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Convert to an order",
    description="Create an order from an accepted quotation",
)
async def convert_to_order(
    quotation_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> OrderResponse:
    service = QuotationService(db)
    quotation = await service.get_or_404(quotation_id)
    order = await service.convert_to_order(quotation, current_user)
    return OrderResponse.model_validate(order)


@router.get(
    "/{quotation_id}/pdf",
    summary="Download the quotation PDF",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def quotation_pdf(
    quotation_id: int,
    current_user: CurrentUser,
    db: DbSession,
    show_product_properties: bool = Query(True, description="Print product properties"),
    header_color: str = Query("#1e40af", pattern=r"^#[0-9a-fA-F]{6}$", description="Header color"),
    font_size: int = Query(9, ge=6, le=14, description="Base font size"),
    footer_text: str | None = Query(None, max_length=500, description="Footer line"),
) -> Response:
    options = QuotationPdfOptions(
        show_product_properties=show_product_properties,
        header_color=header_color,
        font_size=font_size,
        footer_text=footer_text,
    )
    service = QuotationService(db)
    quotation = await service.get_or_404(quotation_id)
    pdf_bytes = await service.render_pdf(quotation, options)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="quotation_{quotation.quotation_number}.pdf"',
        },
    )


@router.post(
    "/{quotation_id}/pdf/archive",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Archive the quotation PDF",
    description="Render the PDF with default options and keep a copy on the server",
)
async def archive_quotation_pdf(
    quotation_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = QuotationService(db)
    quotation = await service.get_or_404(quotation_id)
    path = await service.archive_pdf(quotation, QuotationPdfOptions())
    return MessageResponse(message=f"PDF saved to {path}")

"""
Exhibition endpoints.
Trade shows and events with their costs and follow-ups.
"""

from fastapi import APIRouter, Query, status

from app.api.deps import DbSession, CurrentUser
from app.models.exhibition import ExhibitionStatus
from app.schemas.exhibition import (
    ExhibitionCreate,
    ExhibitionUpdate,
    ExhibitionResponse,
    ExhibitionListResponse,
    ExhibitionCostCreate,
    ExhibitionCostResponse,
    CostSummaryResponse,
    ExhibitionFollowupCreate,
    ExhibitionFollowupUpdate,
    ExhibitionFollowupResponse,
)
from app.schemas.base import MessageResponse
from app.services.exhibition import ExhibitionService


router = APIRouter()


@router.post(
    "",
    response_model=ExhibitionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an exhibition",
)
async def create_exhibition(
    data: ExhibitionCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> ExhibitionResponse:
    service = ExhibitionService(db)
    exhibition = await service.create(current_user, data)
    return ExhibitionResponse.model_validate(exhibition)


@router.get("", response_model=ExhibitionListResponse, summary="List exhibitions")
async def list_exhibitions(
    current_user: CurrentUser,
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    exhibition_status: ExhibitionStatus | None = Query(None, alias="status", description="Filter by status"),
    search: str | None = Query(None, description="Search by name or location"),
) -> ExhibitionListResponse:
    service = ExhibitionService(db)
    skip = (page - 1) * per_page

    exhibitions, total = await service.list(
        skip=skip,
        limit=per_page,
        status=exhibition_status,
        search=search,
    )

    return ExhibitionListResponse.create(
        items=[ExhibitionResponse.model_validate(e) for e in exhibitions],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/{exhibition_id}", response_model=ExhibitionResponse, summary="Get an exhibition")
async def get_exhibition(
    exhibition_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> ExhibitionResponse:
    service = ExhibitionService(db)
    exhibition = await service.get_or_404(exhibition_id)
    return ExhibitionResponse.model_validate(exhibition)


@router.patch("/{exhibition_id}", response_model=ExhibitionResponse, summary="Update an exhibition")
async def update_exhibition(
    exhibition_id: int,
    data: ExhibitionUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ExhibitionResponse:
    service = ExhibitionService(db)
    exhibition = await service.get_or_404(exhibition_id)
    exhibition = await service.update(exhibition, data)
    return ExhibitionResponse.model_validate(exhibition)


@router.delete("/{exhibition_id}", response_model=MessageResponse, summary="Delete an exhibition")
async def delete_exhibition(
    exhibition_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = ExhibitionService(db)
    exhibition = await service.get_or_404(exhibition_id)
    await service.delete(exhibition)
    return MessageResponse(message="Exhibition deleted")


# Costs

@router.get(
    "/{exhibition_id}/costs",
    response_model=list[ExhibitionCostResponse],
    summary="List costs",
)
async def list_costs(
    exhibition_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> list[ExhibitionCostResponse]:
    service = ExhibitionService(db)
    exhibition = await service.get_or_404(exhibition_id)
    return [ExhibitionCostResponse.model_validate(c) for c in await service.list_costs(exhibition)]


@router.post(
    "/{exhibition_id}/costs",
    response_model=ExhibitionCostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a cost",
    description="Record a cost and update the exhibition's actual cost",
)
async def add_cost(
    exhibition_id: int,
    data: ExhibitionCostCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> ExhibitionCostResponse:
    service = ExhibitionService(db)
    exhibition = await service.get_or_404(exhibition_id)
    cost = await service.add_cost(exhibition, current_user, data)
    return ExhibitionCostResponse.model_validate(cost)


@router.delete(
    "/{exhibition_id}/costs/{cost_id}",
    response_model=MessageResponse,
    summary="Remove a cost",
)
async def remove_cost(
    exhibition_id: int,
    cost_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = ExhibitionService(db)
    exhibition = await service.get_or_404(exhibition_id)
    await service.remove_cost(exhibition, cost_id)
    return MessageResponse(message="Cost removed")


@router.get(
    "/{exhibition_id}/cost-summary",
    response_model=CostSummaryResponse,
    summary="Cost summary",
    description="Costs per currency and converted into the exhibition's cost currency",
)
async def cost_summary(
    exhibition_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> CostSummaryResponse:
    service = ExhibitionService(db)
    exhibition = await service.get_or_404(exhibition_id)
    return await service.cost_summary(exhibition)


# Follow-ups

@router.get(
    "/{exhibition_id}/followups",
    response_model=list[ExhibitionFollowupResponse],
    summary="List follow-ups",
)
async def list_followups(
    exhibition_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> list[ExhibitionFollowupResponse]:
    service = ExhibitionService(db)
    exhibition = await service.get_or_404(exhibition_id)
    return [ExhibitionFollowupResponse.model_validate(f) for f in await service.list_followups(exhibition)]


@router.post(
    "/{exhibition_id}/followups",
    response_model=ExhibitionFollowupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a follow-up",
)
async def add_followup(
    exhibition_id: int,
    data: ExhibitionFollowupCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> ExhibitionFollowupResponse:
    service = ExhibitionService(db)
    exhibition = await service.get_or_404(exhibition_id)
    followup = await service.add_followup(exhibition, current_user, data)
    return ExhibitionFollowupResponse.model_validate(followup)


@router.patch(
    "/{exhibition_id}/followups/{followup_id}",
    response_model=ExhibitionFollowupResponse,
    summary="Update a follow-up",
)
async def update_followup(
    exhibition_id: int,
    followup_id: int,
    data: ExhibitionFollowupUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ExhibitionFollowupResponse:
    service = ExhibitionService(db)
    exhibition = await service.get_or_404(exhibition_id)
    followup = await service.get_followup_or_404(exhibition, followup_id)
    followup = await service.update_followup(followup, data)
    return ExhibitionFollowupResponse.model_validate(followup)


@router.delete(
    "/{exhibition_id}/followups/{followup_id}",
    response_model=MessageResponse,
    summary="Remove a follow-up",
)
async def remove_followup(
    exhibition_id: int,
    followup_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = ExhibitionService(db)
    exhibition = await service.get_or_404(exhibition_id)
    followup = await service.get_followup_or_404(exhibition, followup_id)
    await service.remove_followup(followup)
    return MessageResponse(message="Follow-up removed")

"""
Dashboard endpoints.
Headline statistics and recent activity.
"""

from fastapi import APIRouter, Query

from app.api.deps import DbSession, CurrentUser
from app.schemas.dashboard import DashboardStats, RecentActivity
from app.services.dashboard import DashboardService


router = APIRouter()


@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="Dashboard statistics",
    description="Counts plus monthly and yearly totals in the reference currency",
)
async def get_stats(
    current_user: CurrentUser,
    db: DbSession,
) -> dict:
    service = DashboardService(db)
    return await service.get_stats()


@router.get(
    "/recent-activity",
    response_model=list[RecentActivity],
    summary="Recent activity",
    description="Latest quotations, orders and companies, newest first",
)
async def get_recent_activity(
    current_user: CurrentUser,
    db: DbSession,
    limit: int = Query(10, ge=1, le=50, description="Number of entries"),
) -> list[RecentActivity]:
    service = DashboardService(db)
    return await service.recent_activity(limit=limit)

"""
Exhibition schemas.
"""

from datetime import date, datetime
from decimal import Decimal
from pydantic import Field, model_validator

from app.schemas.base import BaseSchema, PaginatedResponse
from app.models.exhibition import ExhibitionType, ExhibitionStatus, FollowupStatus


class ExhibitionBase(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    type: ExhibitionType = ExhibitionType.TRADE_SHOW
    location: str | None = Field(None, max_length=255)
    start_date: date | None = None
    end_date: date | None = None
    status: ExhibitionStatus = ExhibitionStatus.PLANNED
    target_cost: Decimal | None = Field(None, ge=0)
    cost_currency: str = Field(default="TRY", max_length=10)
    notes: str | None = None


class ExhibitionCreate(ExhibitionBase):
    """Schema for creating an exhibition."""

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class ExhibitionUpdate(BaseSchema):
    name: str | None = Field(None, min_length=1, max_length=255)
    type: ExhibitionType | None = None
    location: str | None = Field(None, max_length=255)
    start_date: date | None = None
    end_date: date | None = None
    status: ExhibitionStatus | None = None
    target_cost: Decimal | None = Field(None, ge=0)
    cost_currency: str | None = Field(None, max_length=10)
    notes: str | None = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class ExhibitionResponse(ExhibitionBase):
    id: int
    actual_cost: Decimal
    created_by: int | None
    created_at: datetime
    updated_at: datetime


class ExhibitionListResponse(PaginatedResponse):
    items: list[ExhibitionResponse]


class ExhibitionCostCreate(BaseSchema):
    description: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0)
    currency: str = Field(default="TRY", max_length=10)
    category: str | None = Field(None, max_length=100)
    cost_date: date | None = None


class ExhibitionCostResponse(ExhibitionCostCreate):
    id: int
    exhibition_id: int
    created_at: datetime


class CostSummaryResponse(BaseSchema):
    """Costs of an exhibition per currency and converted into its cost currency."""

    exhibition_id: int
    cost_currency: str
    by_currency: dict[str, Decimal]
    total: Decimal
    target_cost: Decimal | None
    remaining_budget: Decimal | None


class ExhibitionFollowupCreate(BaseSchema):
    company_id: int | None = None
    contact_person: str | None = Field(None, max_length=255)
    follow_up_date: date | None = None
    status: FollowupStatus = FollowupStatus.PENDING
    notes: str | None = None


class ExhibitionFollowupUpdate(BaseSchema):
    company_id: int | None = None
    contact_person: str | None = Field(None, max_length=255)
    follow_up_date: date | None = None
    status: FollowupStatus | None = None
    notes: str | None = None


class ExhibitionFollowupResponse(ExhibitionFollowupCreate):
    id: int
    exhibition_id: int
    company_name: str | None = None
    created_at: datetime

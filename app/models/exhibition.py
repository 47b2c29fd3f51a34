"""
Exhibition models: trade shows with their costs and post-show follow-ups.
"""

from typing import Optional, List, TYPE_CHECKING
from decimal import Decimal
from datetime import date
from enum import Enum
from sqlalchemy import String, Text, ForeignKey, Integer, Numeric, Date, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, CreatorMixin

if TYPE_CHECKING:
    from app.models.company import Company


class ExhibitionType(str, Enum):
    TRADE_SHOW = "trade_show"
    EXHIBITION = "exhibition"
    CONFERENCE = "conference"
    SEMINAR = "seminar"


class ExhibitionStatus(str, Enum):
    PLANNED = "planned"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class FollowupStatus(str, Enum):
    PENDING = "pending"
    CONTACTED = "contacted"
    COMPLETED = "completed"


class Exhibition(BaseModel, CreatorMixin):
    """
    Exhibition model.

    Attributes:
        name: Exhibition name
        type: Kind of event
        location: Venue
        start_date: First day
        end_date: Last day
        status: Planning status
        target_cost: Budget
        actual_cost: Sum of recorded costs in cost_currency
        cost_currency: Currency of target_cost and actual_cost
        notes: Additional notes
    """

    __tablename__ = "exhibitions"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    type: Mapped[ExhibitionType] = mapped_column(
        SQLEnum(ExhibitionType),
        default=ExhibitionType.TRADE_SHOW,
        nullable=False,
    )
    location: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    start_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    end_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    status: Mapped[ExhibitionStatus] = mapped_column(
        SQLEnum(ExhibitionStatus),
        default=ExhibitionStatus.PLANNED,
        nullable=False,
    )
    target_cost: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=14, scale=2),
        nullable=True,
    )
    actual_cost: Mapped[Decimal] = mapped_column(
        Numeric(precision=14, scale=2),
        default=Decimal("0.00"),
        nullable=False,
    )
    cost_currency: Mapped[str] = mapped_column(
        String(10),
        default="TRY",
        nullable=False,
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    costs: Mapped[List["ExhibitionCost"]] = relationship(
        "ExhibitionCost",
        back_populates="exhibition",
        cascade="all, delete-orphan",
        order_by="ExhibitionCost.id",
        lazy="selectin",
    )
    followups: Mapped[List["ExhibitionFollowup"]] = relationship(
        "ExhibitionFollowup",
        back_populates="exhibition",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Exhibition(id={self.id}, name='{self.name}')>"


class ExhibitionCost(BaseModel, CreatorMixin):
    """A single expense recorded against an exhibition."""

    __tablename__ = "exhibition_costs"

    exhibition_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("exhibitions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    description: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
    )
    currency: Mapped[str] = mapped_column(
        String(10),
        default="TRY",
        nullable=False,
    )
    category: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    cost_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )

    exhibition: Mapped["Exhibition"] = relationship(
        "Exhibition",
        back_populates="costs",
    )


class ExhibitionFollowup(BaseModel, CreatorMixin):
    """A contact made at an exhibition that needs following up."""

    __tablename__ = "exhibition_followups"

    exhibition_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("exhibitions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    company_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("companies.id", ondelete="SET NULL"),
        nullable=True,
    )
    contact_person: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    follow_up_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    status: Mapped[FollowupStatus] = mapped_column(
        SQLEnum(FollowupStatus),
        default=FollowupStatus.PENDING,
        nullable=False,
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    exhibition: Mapped["Exhibition"] = relationship(
        "Exhibition",
        back_populates="followups",
    )
    company: Mapped[Optional["Company"]] = relationship(
        "Company",
        lazy="selectin",
    )

    @property
    def company_name(self) -> Optional[str]:
        return self.company.name if self.company else None

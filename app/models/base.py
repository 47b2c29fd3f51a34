"""
Base model with common fields and utilities.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from sqlalchemy import DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class Language(str, Enum):
    """Languages used for quotations, properties and dictionary entries."""
    TR = "TR"
    EN = "EN"
    PL = "PL"
    FR = "FR"
    RU = "RU"
    DE = "DE"
    AR = "AR"


class TimestampMixin:
    """Mixin for adding created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class CreatorMixin:
    """Mixin recording which user created the row."""

    created_by: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )


class BaseModel(Base, TimestampMixin):
    """
    Abstract base model with ID and timestamps.
    All models should inherit from this.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

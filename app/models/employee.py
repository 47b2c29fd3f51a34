"""
Employee models: staff profiles linked to users, with roles and a manager.
"""

from typing import Optional, List, TYPE_CHECKING
from datetime import date, datetime, timezone
from enum import Enum
from sqlalchemy import String, Text, ForeignKey, Integer, Boolean, Date, DateTime, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, CreatorMixin

if TYPE_CHECKING:
    from app.models.user import User


class EmployeeRoleType(str, Enum):
    EMPLOYEE = "employee"
    SPECIALIST = "specialist"
    MANAGER = "manager"
    DIRECTOR = "director"


class Employee(BaseModel, CreatorMixin):
    """
    Employee model.

    Attributes:
        user_id: Linked user account (one employee per user)
        employee_number: Internal staff number
        department: Department
        position: Job title
        hire_date: Start date
        phone: Phone number
        address: Address
        is_active: False once the employee is removed
    """

    __tablename__ = "employees"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    employee_number: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    department: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    position: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    hire_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    address: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship(
        "User",
        foreign_keys=[user_id],
        lazy="selectin",
    )
    roles: Mapped[List["EmployeeRole"]] = relationship(
        "EmployeeRole",
        back_populates="employee",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    manager_link: Mapped[Optional["EmployeeHierarchy"]] = relationship(
        "EmployeeHierarchy",
        foreign_keys="EmployeeHierarchy.employee_id",
        back_populates="employee",
        cascade="all, delete-orphan",
        uselist=False,
        lazy="selectin",
    )

    @property
    def active_roles(self) -> List[EmployeeRoleType]:
        return [r.role for r in self.roles if r.is_active]

    @property
    def manager_id(self) -> Optional[int]:
        return self.manager_link.manager_id if self.manager_link else None

    @property
    def full_name(self) -> Optional[str]:
        return self.user.full_name if self.user else None

    @property
    def email(self) -> Optional[str]:
        return self.user.email if self.user else None

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, user_id={self.user_id})>"


class EmployeeRole(BaseModel):
    """Role assignment. Replaced roles stay as inactive history rows."""

    __tablename__ = "employee_roles"

    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[EmployeeRoleType] = mapped_column(
        SQLEnum(EmployeeRoleType),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    assigned_by: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    employee: Mapped["Employee"] = relationship(
        "Employee",
        back_populates="roles",
    )


class EmployeeHierarchy(BaseModel, CreatorMixin):
    """Reporting line: employee_id reports to manager_id."""

    __tablename__ = "employee_hierarchy"

    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    manager_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    employee: Mapped["Employee"] = relationship(
        "Employee",
        foreign_keys=[employee_id],
        back_populates="manager_link",
    )

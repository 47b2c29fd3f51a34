"""
Employee schemas.
"""

from datetime import date, datetime
from pydantic import Field

from app.schemas.base import BaseSchema, PaginatedResponse
from app.models.employee import EmployeeRoleType


class EmployeeCreate(BaseSchema):
    user_id: int
    employee_number: str | None = Field(None, max_length=50)
    department: str | None = Field(None, max_length=100)
    position: str | None = Field(None, max_length=100)
    hire_date: date | None = None
    phone: str | None = Field(None, max_length=50)
    address: str | None = None
    roles: list[EmployeeRoleType] = Field(default_factory=lambda: [EmployeeRoleType.EMPLOYEE], min_length=1)
    manager_id: int | None = None


class EmployeeUpdate(BaseSchema):
    employee_number: str | None = Field(None, max_length=50)
    department: str | None = Field(None, max_length=100)
    position: str | None = Field(None, max_length=100)
    hire_date: date | None = None
    phone: str | None = Field(None, max_length=50)
    address: str | None = None
    roles: list[EmployeeRoleType] | None = Field(None, min_length=1)
    manager_id: int | None = None


class EmployeeResponse(BaseSchema):
    id: int
    user_id: int
    full_name: str | None = None
    email: str | None = None
    employee_number: str | None
    department: str | None
    position: str | None
    hire_date: date | None
    phone: str | None
    address: str | None
    is_active: bool
    active_roles: list[EmployeeRoleType] = []
    manager_id: int | None = None
    created_at: datetime
    updated_at: datetime


class EmployeeListResponse(PaginatedResponse):
    items: list[EmployeeResponse]

"""
Employee endpoints.
Employee profiles with roles and reporting lines.
"""

from fastapi import APIRouter, Query, status

from app.api.deps import DbSession, CurrentUser
from app.schemas.employee import (
    EmployeeCreate,
    EmployeeUpdate,
    EmployeeResponse,
    EmployeeListResponse,
)
from app.schemas.base import MessageResponse
from app.services.employee import EmployeeService


router = APIRouter()


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an employee profile",
)
async def create_employee(
    data: EmployeeCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> EmployeeResponse:
    service = EmployeeService(db)
    employee = await service.create(current_user, data)
    return EmployeeResponse.model_validate(employee)


@router.get(
    "",
    response_model=EmployeeListResponse,
    summary="List employees",
    description="Active employees with their active roles and manager",
)
async def list_employees(
    current_user: CurrentUser,
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    department: str | None = Query(None, description="Filter by department"),
) -> EmployeeListResponse:
    service = EmployeeService(db)
    skip = (page - 1) * per_page

    employees, total = await service.list(skip=skip, limit=per_page, department=department)

    return EmployeeListResponse.create(
        items=[EmployeeResponse.model_validate(e) for e in employees],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/me", response_model=EmployeeResponse, summary="Current user's employee profile")
async def get_my_profile(
    current_user: CurrentUser,
    db: DbSession,
) -> EmployeeResponse:
    service = EmployeeService(db)
    employee = await service.get_for_user(current_user)
    return EmployeeResponse.model_validate(employee)


@router.get("/{employee_id}", response_model=EmployeeResponse, summary="Get an employee")
async def get_employee(
    employee_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> EmployeeResponse:
    service = EmployeeService(db)
    employee = await service.get_or_404(employee_id)
    return EmployeeResponse.model_validate(employee)


@router.patch(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Update an employee",
    description="Update profile fields; roles and manager are replaced when given",
)
async def update_employee(
    employee_id: int,
    data: EmployeeUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> EmployeeResponse:
    service = EmployeeService(db)
    employee = await service.get_or_404(employee_id)
    employee = await service.update(employee, current_user, data)
    return EmployeeResponse.model_validate(employee)


@router.delete(
    "/{employee_id}",
    response_model=MessageResponse,
    summary="Deactivate an employee",
)
async def delete_employee(
    employee_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = EmployeeService(db)
    employee = await service.get_or_404(employee_id)
    await service.delete(employee)
    return MessageResponse(message="Employee deactivated")

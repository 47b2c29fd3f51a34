"""
Employee service.
Handles employee profiles, role assignment and the reporting hierarchy.
"""

import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, update
from fastapi import HTTPException, status

from app.models.employee import Employee, EmployeeRole, EmployeeHierarchy, EmployeeRoleType
from app.models.user import User
from app.schemas.employee import EmployeeCreate, EmployeeUpdate


logger = logging.getLogger(__name__)


class EmployeeService:
    """Service for employee operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, creator: User, data: EmployeeCreate) -> Employee:
        """
        Create an employee profile for a user.

        Raises:
            HTTPException: If the user does not exist or already has a profile
        """
        if not await self.db.get(User, data.user_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        existing = await self.db.execute(
            select(Employee.id).where(Employee.user_id == data.user_id)
        )
        if existing.scalar_one_or_none() is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="This user already has an employee profile",
            )

        employee = Employee(
            created_by=creator.id,
            **data.model_dump(exclude={"roles", "manager_id"}),
        )
        self.db.add(employee)
        await self.db.flush()

        await self._assign_roles(employee, data.roles, creator)
        if data.manager_id is not None:
            await self._set_manager(employee, data.manager_id, creator)

        logger.info("Employee %s created for user %s", employee.id, employee.user_id)
        return await self.reload(employee.id)

    async def _assign_roles(
        self,
        employee: Employee,
        roles: List[EmployeeRoleType],
        assigned_by: User,
    ) -> None:
        """Deactivate the current roles and insert the new set."""
        await self.db.execute(
            update(EmployeeRole)
            .where(EmployeeRole.employee_id == employee.id, EmployeeRole.is_active.is_(True))
            .values(is_active=False)
        )
        for role in dict.fromkeys(roles):
            self.db.add(EmployeeRole(
                employee_id=employee.id,
                role=role,
                is_active=True,
                assigned_by=assigned_by.id,
            ))
        await self.db.flush()

    async def _set_manager(
        self,
        employee: Employee,
        manager_id: int | None,
        creator: User,
    ) -> None:
        """
        Replace the employee's hierarchy row.

        Raises:
            HTTPException: If the employee would manage themself or the manager does not exist
        """
        if manager_id == employee.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="An employee cannot be their own manager",
            )
        if manager_id is not None:
            manager = await self.db.get(Employee, manager_id)
            if not manager or not manager.is_active:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="Manager not found",
                )

        result = await self.db.execute(
            select(EmployeeHierarchy).where(EmployeeHierarchy.employee_id == employee.id)
        )
        current = result.scalar_one_or_none()
        if current is not None:
            await self.db.delete(current)
            await self.db.flush()

        if manager_id is not None:
            self.db.add(EmployeeHierarchy(
                employee_id=employee.id,
                manager_id=manager_id,
                created_by=creator.id,
            ))
        await self.db.flush()

    async def reload(self, employee_id: int) -> Employee:
        result = await self.db.execute(
            select(Employee)
            .where(Employee.id == employee_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def get_or_404(self, employee_id: int) -> Employee:
        result = await self.db.execute(
            select(Employee).where(Employee.id == employee_id, Employee.is_active.is_(True))
        )
        employee = result.scalar_one_or_none()
        if not employee:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Employee not found",
            )
        return employee

    async def get_for_user(self, user: User) -> Employee:
        """Employee profile of a user, or 404."""
        result = await self.db.execute(
            select(Employee).where(Employee.user_id == user.id, Employee.is_active.is_(True))
        )
        employee = result.scalar_one_or_none()
        if not employee:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No employee profile for the current user",
            )
        return employee

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        department: str | None = None,
    ) -> tuple[List[Employee], int]:
        """List active employees with their active roles and manager."""
        filters = [Employee.is_active.is_(True)]
        if department:
            filters.append(Employee.department == department)

        total_result = await self.db.execute(
            select(func.count(Employee.id)).where(*filters)
        )
        total = total_result.scalar() or 0

        result = await self.db.execute(
            select(Employee)
            .where(*filters)
            .order_by(Employee.created_at.desc(), Employee.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def update(self, employee: Employee, creator: User, data: EmployeeUpdate) -> Employee:
        update_data = data.model_dump(exclude_unset=True)
        roles = update_data.pop("roles", None)
        manager_given = "manager_id" in update_data
        manager_id = update_data.pop("manager_id", None)

        for field, value in update_data.items():
            setattr(employee, field, value)
        await self.db.flush()

        if roles is not None:
            await self._assign_roles(employee, roles, creator)
        if manager_given:
            await self._set_manager(employee, manager_id, creator)

        logger.info("Employee %s updated", employee.id)
        return await self.reload(employee.id)

    async def delete(self, employee: Employee) -> None:
        """Soft delete: the profile is deactivated, not removed."""
        employee.is_active = False
        await self.db.flush()

        logger.info("Employee %s deactivated", employee.id)

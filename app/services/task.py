"""
Task service.
Handles task CRUD and the kanban board.
"""

import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from fastapi import HTTPException, status

from app.models.task import Task, TaskStatus, TaskPriority
from app.models.user import User
from app.schemas.task import TaskCreate, TaskUpdate


logger = logging.getLogger(__name__)


class TaskService:
    """Service for task operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _check_assignee(self, user_id: int | None) -> None:
        if user_id is not None and not await self.db.get(User, user_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Assigned user not found",
            )

    async def create(self, creator: User, data: TaskCreate) -> Task:
        await self._check_assignee(data.assigned_to)

        task = Task(created_by=creator.id, **data.model_dump())
        self.db.add(task)
        await self.db.flush()
        await self.db.refresh(task)

        logger.info("Task %s created: %s", task.id, task.title)
        return task

    async def get_or_404(self, task_id: int) -> Task:
        task = await self.db.get(Task, task_id)
        if not task:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Task not found",
            )
        return task

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
        assigned_to: int | None = None,
    ) -> tuple[List[Task], int]:
        filters = []
        if status:
            filters.append(Task.status == status)
        if priority:
            filters.append(Task.priority == priority)
        if assigned_to is not None:
            filters.append(Task.assigned_to == assigned_to)

        total_result = await self.db.execute(
            select(func.count(Task.id)).where(*filters)
        )
        total = total_result.scalar() or 0

        result = await self.db.execute(
            select(Task)
            .where(*filters)
            .order_by(Task.created_at.desc(), Task.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def board(self, assigned_to: int | None = None) -> dict[TaskStatus, List[Task]]:
        """
        Tasks grouped by status.

        Returns:
            Every status in board order (todo, in_progress, review, done),
            each with its tasks, empty columns included
        """
        query = select(Task).order_by(Task.due_date, Task.id)
        if assigned_to is not None:
            query = query.where(Task.assigned_to == assigned_to)
        result = await self.db.execute(query)

        columns: dict[TaskStatus, List[Task]] = {s: [] for s in TaskStatus}
        for task in result.scalars().all():
            columns[task.status].append(task)
        return columns

    async def update(self, task: Task, data: TaskUpdate) -> Task:
        update_data = data.model_dump(exclude_unset=True)
        await self._check_assignee(update_data.get("assigned_to"))

        for field, value in update_data.items():
            setattr(task, field, value)
        await self.db.flush()
        await self.db.refresh(task)

        logger.info("Task %s updated", task.id)
        return task

    async def move(self, task: Task, new_status: TaskStatus) -> Task:
        """Move a task to another board column."""
        previous = task.status
        task.status = new_status
        await self.db.flush()
        await self.db.refresh(task)

        logger.info("Task %s moved from %s to %s", task.id, previous.value, new_status.value)
        return task

    async def delete(self, task: Task) -> None:
        await self.db.delete(task)
        await self.db.flush()

        logger.info("Task %s deleted", task.id)

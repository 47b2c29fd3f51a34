"""
Task schemas.
"""

from datetime import date, datetime
from pydantic import Field

from app.schemas.base import BaseSchema, PaginatedResponse
from app.models.task import TaskStatus, TaskPriority


class TaskBase(BaseSchema):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    due_date: date | None = None
    assigned_to: int | None = None


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseSchema):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    due_date: date | None = None
    assigned_to: int | None = None


class TaskStatusUpdate(BaseSchema):
    """Board move."""

    status: TaskStatus


class TaskResponse(TaskBase):
    id: int
    created_by: int | None
    created_at: datetime
    updated_at: datetime


class TaskListResponse(PaginatedResponse):
    items: list[TaskResponse]


class TaskBoardColumn(BaseSchema):
    status: TaskStatus
    tasks: list[TaskResponse]

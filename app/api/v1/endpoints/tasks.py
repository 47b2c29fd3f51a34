"""
Task endpoints.
Task CRUD plus the status board.
"""

from fastapi import APIRouter, Query, status

from app.api.deps import DbSession, CurrentUser
from app.models.task import TaskStatus, TaskPriority
from app.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskStatusUpdate,
    TaskResponse,
    TaskListResponse,
    TaskBoardColumn,
)
from app.schemas.base import MessageResponse
from app.services.task import TaskService


router = APIRouter()


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
async def create_task(
    data: TaskCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> TaskResponse:
    service = TaskService(db)
    task = await service.create(current_user, data)
    return TaskResponse.model_validate(task)


@router.get("", response_model=TaskListResponse, summary="List tasks")
async def list_tasks(
    current_user: CurrentUser,
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    task_status: TaskStatus | None = Query(None, alias="status", description="Filter by status"),
    priority: TaskPriority | None = Query(None, description="Filter by priority"),
    assigned_to: int | None = Query(None, description="Filter by assignee"),
) -> TaskListResponse:
    service = TaskService(db)
    skip = (page - 1) * per_page

    tasks, total = await service.list(
        skip=skip,
        limit=per_page,
        status=task_status,
        priority=priority,
        assigned_to=assigned_to,
    )

    return TaskListResponse.create(
        items=[TaskResponse.model_validate(t) for t in tasks],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get(
    "/board",
    response_model=list[TaskBoardColumn],
    summary="Task board",
    description="Tasks grouped by status, one column per status",
)
async def task_board(
    current_user: CurrentUser,
    db: DbSession,
    assigned_to: int | None = Query(None, description="Only tasks of this user"),
) -> list[TaskBoardColumn]:
    service = TaskService(db)
    columns = await service.board(assigned_to=assigned_to)
    return [
        TaskBoardColumn(
            status=column_status,
            tasks=[TaskResponse.model_validate(t) for t in tasks],
        )
        for column_status, tasks in columns.items()
    ]


@router.get("/{task_id}", response_model=TaskResponse, summary="Get a task")
async def get_task(
    task_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> TaskResponse:
    service = TaskService(db)
    task = await service.get_or_404(task_id)
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=TaskResponse, summary="Update a task")
async def update_task(
    task_id: int,
    data: TaskUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> TaskResponse:
    service = TaskService(db)
    task = await service.get_or_404(task_id)
    task = await service.update(task, data)
    return TaskResponse.model_validate(task)


@router.patch(
    "/{task_id}/status",
    response_model=TaskResponse,
    summary="Move a task",
    description="Move a task to another board column",
)
async def move_task(
    task_id: int,
    data: TaskStatusUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> TaskResponse:
    service = TaskService(db)
    task = await service.get_or_404(task_id)
    task = await service.move(task, data.status)
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", response_model=MessageResponse, summary="Delete a task")
async def delete_task(
    task_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = TaskService(db)
    task = await service.get_or_404(task_id)
    await service.delete(task)
    return MessageResponse(message="Task deleted")

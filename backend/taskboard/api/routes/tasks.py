"""Task Routes — board-scoped create/list, task-scoped update/delete.

Invariants:
    - status/priority query filters are validated (400) before the board-scope gate runs
    - PUT is a partial update: only fields present in the body are applied
    - DELETE is ADMIN-only regardless of board membership
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import get_current_user, require_admin
from taskboard.core.domain_types import TaskPriority, TaskStatus
from taskboard.infrastructure.database import get_db
from taskboard.models.user import User
from taskboard.schemas.common import MessageResponse
from taskboard.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from taskboard.services.task_registry import TaskRegistry

router = APIRouter(prefix="/api/v1", tags=["tasks"])


class TaskListResponse(BaseModel):
    tasks: list[TaskResponse]


@router.post(
    "/boards/{board_id}/tasks", response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    board_id: UUID,
    body: TaskCreate,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    task = await TaskRegistry(db).create_task(actor, board_id, body.model_dump())
    return TaskResponse.model_validate(task)


@router.get("/boards/{board_id}/tasks", response_model=TaskListResponse)
async def list_tasks(
    board_id: UUID,
    status_filter: TaskStatus | None = Query(None, alias="status"),
    priority: TaskPriority | None = Query(None),
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Tasks on a board, newest first."""
    tasks = await TaskRegistry(db).list_tasks(
        actor, board_id, status=status_filter, priority=priority,
    )
    return TaskListResponse(
        tasks=[TaskResponse.model_validate(t) for t in tasks],
    )


@router.put("/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: UUID,
    body: TaskUpdate,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    task = await TaskRegistry(db).update_task(actor, task_id, body.patch())
    return TaskResponse.model_validate(task)


@router.delete("/tasks/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: UUID,
    actor: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await TaskRegistry(db).delete_task(actor, task_id)
    return MessageResponse(message="Task deleted.")

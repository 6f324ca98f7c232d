"""Task Registry — task records, their lifecycle, and activity logging.

Invariants:
    - create/list are board-scoped (ADMIN or member); delete is role-scoped (ADMIN only)
    - update resolves the task (404) before the board-scope gate (403), then validates
      the patch before mutating anything
    - create and update commit the task change and its activity entry together
    - delete commits first, then appends TASK_DELETED in a second commit; a failure on
      the second write surfaces as InternalError and does NOT restore the task
    - Listing is most-recently-created first, with optional status/priority equality filters

Design Decisions:
    - Lifecycle rules (defaults, permissive title, action classification) live in
      core/task_lifecycle; this module only orders IO around them
    - No version column: concurrent patches are last-write-wins per field
"""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.access_policy import check_admin, check_board_access
from taskboard.core.domain_types import ActivityAction, TaskPriority, TaskStatus
from taskboard.core.errors import (
    ErrorContext, InternalError, ResourceNotFoundError, ValidationError,
)
from taskboard.core.repository_protocols import ActorLike
from taskboard.core.task_lifecycle import (
    deletion_statuses, plan_task_update, resolve_new_task,
)
from taskboard.models.task import Task
from taskboard.services.activity_log import ActivityLog
from taskboard.services.board_registry import BoardRegistry
from taskboard.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


class TaskRegistry:
    """Task CRUD gated by the access policy."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.boards = BoardRegistry(db)
        self.activity = ActivityLog(db)

    async def _get_task_or_404(self, actor: ActorLike, task_id: UUID) -> Task:
        result = await self.db.execute(select(Task).where(Task.id == task_id))
        task = result.scalar_one_or_none()
        if task is None:
            raise ResourceNotFoundError(
                "Task", str(task_id),
                ErrorContext(user_id=str(actor.id), task_id=str(task_id)),
            )
        return task

    async def _check_board_scope(self, actor: ActorLike, board_id: UUID) -> None:
        board = await self.boards.get(board_id)
        check_board_access(actor, board, board_id)

    async def _check_assignee(self, assignee_id: UUID | None) -> None:
        if assignee_id is None:
            return
        if not await CredentialStore(self.db).existing_ids([assignee_id]):
            raise ValidationError("Assignee does not exist.", field="assigned_to")

    async def create_task(
        self, actor: ActorLike, board_id: UUID, data: dict[str, Any],
    ) -> Task:
        initial = resolve_new_task(
            actor.id,
            title=data.get("title"),
            description=data.get("description"),
            category=data.get("category"),
            priority=data.get("priority"),
            status=data.get("status"),
            assigned_to=data.get("assigned_to"),
        )
        await self._check_board_scope(actor, board_id)
        if initial.assigned_to != actor.id:
            await self._check_assignee(initial.assigned_to)

        task = Task(
            board_id=board_id,
            title=initial.title,
            description=initial.description,
            category=initial.category,
            priority=initial.priority,
            status=initial.status,
            due_date=data.get("due_date"),
            assigned_to=initial.assigned_to,
            created_by=actor.id,
        )
        self.db.add(task)
        await self.db.flush()
        await self.activity.append(
            board_id=board_id,
            task_id=task.id,
            user_id=actor.id,
            action=ActivityAction.TASK_CREATED,
            old_status=None,
            new_status=task.status,
        )
        await self.db.commit()
        return task

    async def list_tasks(
        self,
        actor: ActorLike,
        board_id: UUID,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
    ) -> list[Task]:
        await self._check_board_scope(actor, board_id)
        query = select(Task).where(Task.board_id == board_id)
        if status is not None:
            query = query.where(Task.status == status)
        if priority is not None:
            query = query.where(Task.priority == priority)
        result = await self.db.execute(query.order_by(Task.created_at.desc()))
        return list(result.scalars().all())

    async def update_task(
        self, actor: ActorLike, task_id: UUID, patch: dict[str, Any],
    ) -> Task:
        """Apply a partial update; exactly one activity entry per call."""
        task = await self._get_task_or_404(actor, task_id)
        await self._check_board_scope(actor, task.board_id)
        plan = plan_task_update(task, patch)
        if "assigned_to" in plan.changes:
            await self._check_assignee(plan.changes["assigned_to"])

        for name, value in plan.changes.items():
            setattr(task, name, value)
        task.updated_at = datetime.now(timezone.utc)

        old_status, new_status = plan.logged_statuses
        await self.activity.append(
            board_id=task.board_id,
            task_id=task.id,
            user_id=actor.id,
            action=plan.action,
            old_status=old_status,
            new_status=new_status,
        )
        await self.db.commit()
        return task

    async def delete_task(self, actor: ActorLike, task_id: UUID) -> None:
        check_admin(actor)
        task = await self._get_task_or_404(actor, task_id)
        board_id, old_status = task.board_id, deletion_statuses(task)[0]

        await self.db.delete(task)
        await self.db.commit()

        try:
            await self.activity.append(
                board_id=board_id,
                task_id=task_id,
                user_id=actor.id,
                action=ActivityAction.TASK_DELETED,
                old_status=old_status,
                new_status=None,
            )
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.error(
                "Task deleted but activity entry could not be written",
                exc_info=True,
                extra={"user_id": actor.id, "task_id": task_id, "board_id": board_id},
            )
            raise InternalError(
                "record task deletion",
                ErrorContext(
                    user_id=str(actor.id), board_id=str(board_id), task_id=str(task_id),
                ),
            )

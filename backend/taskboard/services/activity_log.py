"""Activity Log — append-only sink for task lifecycle events.

Invariants:
    - append() only inserts; this module exposes no update, delete, or read
    - Entries are staged in the caller's unit of work and become durable on its commit,
      so id order equals commit order

Design Decisions:
    - Caller owns the commit: task create/update commit the task change and its entry
      together; task delete commits the delete first and the entry second
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.domain_types import ActivityAction, TaskStatus
from taskboard.models.activity_log import ActivityLogEntry

logger = logging.getLogger(__name__)


class ActivityLog:
    """Append-only writer for task activity entries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def append(
        self,
        *,
        board_id: UUID,
        task_id: UUID,
        user_id: UUID,
        action: ActivityAction,
        old_status: TaskStatus | None = None,
        new_status: TaskStatus | None = None,
    ) -> ActivityLogEntry:
        entry = ActivityLogEntry(
            board_id=board_id,
            task_id=task_id,
            user_id=user_id,
            action=action,
            old_status=old_status,
            new_status=new_status,
        )
        self.db.add(entry)
        await self.db.flush()
        logger.info(
            f"Activity {action.value}",
            extra={
                "action": action.value, "board_id": board_id,
                "task_id": task_id, "user_id": user_id,
            },
        )
        return entry

"""ActivityLogEntry ORM — append-only audit trail of task lifecycle events.

Invariants:
    - Rows are inserted, never updated or deleted
    - No foreign keys: board_id/task_id/user_id keep their values after the
      referenced rows are deleted
    - id is a monotonically increasing integer, so id order is write order

Design Decisions:
    - Logging table, not enforcement: no business rule reads it back
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from taskboard.core.domain_types import ActivityAction, TaskStatus
from taskboard.db.base import Base, enum_column


class ActivityLogEntry(Base):
    """One task lifecycle event."""
    __tablename__ = "activity_log"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    board_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    task_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False,
    )
    action: Mapped[ActivityAction] = mapped_column(
        enum_column(ActivityAction, length=30), nullable=False,
    )
    old_status: Mapped[TaskStatus | None] = mapped_column(
        enum_column(TaskStatus), nullable=True,
    )
    new_status: Mapped[TaskStatus | None] = mapped_column(
        enum_column(TaskStatus), nullable=True,
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

"""Task ORM — a unit of work on exactly one board.

Invariants:
    - board_id is set at creation and never reassigned
    - status and priority load as TaskStatus / TaskPriority members only
    - created_by is immutable; assigned_to defaults to the creator
    - assigned_to and created_by carry no foreign key: they keep their value after
      the identity is deleted, like the activity log ids
    - updated_at is set by the registry on every applied patch
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from taskboard.core.domain_types import (
    TaskPriority, TaskStatus, DEFAULT_TASK_PRIORITY, DEFAULT_TASK_STATUS,
)
from taskboard.db.base import Base, enum_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(Base):
    """Task entity — lifecycle status plus descriptive fields."""
    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    board_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("boards.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    priority: Mapped[TaskPriority] = mapped_column(
        enum_column(TaskPriority), nullable=False, default=DEFAULT_TASK_PRIORITY,
    )
    status: Mapped[TaskStatus] = mapped_column(
        enum_column(TaskStatus), nullable=False, default=DEFAULT_TASK_STATUS,
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    assigned_to: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

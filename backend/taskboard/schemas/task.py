"""Task Schemas — creation, partial update, and response shapes.

Invariants:
    - TaskCreate.title: required, stripped, non-empty
    - TaskUpdate: every field optional; only fields present in the request body are applied
    - TaskUpdate.title is NOT validated for blankness: blank titles are ignored downstream
    - status/priority typed as TaskStatus/TaskPriority: "Blocked" fails with 400 before
      any task is loaded

Design Decisions:
    - Partial update reads model_dump(exclude_unset=True): distinguishes "absent" from
      "explicit null" (explicit null due_date clears it)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.core.domain_types import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    title: str = Field(max_length=300)
    description: str | None = Field(None, max_length=10_000)
    category: str | None = Field(None, max_length=100)
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    due_date: datetime | None = None
    assigned_to: UUID | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Task title is required.")
        return v


class TaskUpdate(BaseModel):
    title: str | None = Field(None, max_length=300)
    description: str | None = Field(None, max_length=10_000)
    category: str | None = Field(None, max_length=100)
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    due_date: datetime | None = None
    assigned_to: UUID | None = None

    def patch(self) -> dict:
        """Fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    board_id: UUID
    title: str
    description: str
    category: str
    priority: TaskPriority
    status: TaskStatus
    due_date: datetime | None
    assigned_to: UUID | None
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime

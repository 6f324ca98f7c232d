"""Boundary Protocols — structural contracts the core rules evaluate against.

Invariants:
    - Core NEVER imports ORM models; policy and lifecycle rules see only these shapes
    - Implementations are the SQLAlchemy models in models/ (structural subtyping)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from taskboard.core.domain_types import Role, TaskStatus, TaskPriority


class ActorLike(Protocol):
    """The authenticated identity a request acts as."""
    id: UUID
    role: Role


class BoardLike(Protocol):
    """A board as seen by the access policy — only id and membership matter."""
    id: UUID

    @property
    def member_ids(self) -> set[UUID]: ...


class TaskLike(Protocol):
    """Mutable task fields read by the lifecycle planner."""
    id: UUID
    board_id: UUID
    title: str
    description: str
    category: str
    priority: TaskPriority
    status: TaskStatus
    due_date: datetime | None
    assigned_to: UUID | None

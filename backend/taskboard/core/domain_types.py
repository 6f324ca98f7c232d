"""Domain Types — closed enumerations and identity wrappers for the task board.

Invariants:
    - UserId, BoardId, TaskId wrap UUIDs; never mix identifiers of different kinds
    - Role, TaskStatus, TaskPriority, ActivityAction are closed: no other value is persisted
    - Enum values are the exact wire/DB literals ("In Progress", not "IN_PROGRESS")

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, compare equal to their literal
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
BoardId = NewType("BoardId", UUID)
TaskId = NewType("TaskId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Identity role — fixed at creation."""
    ADMIN = "ADMIN"
    TEAM_MEMBER = "TEAM_MEMBER"


class TaskStatus(str, Enum):
    """Workflow column. Any status may follow any other (advisory workflow)."""
    READY = "Ready"
    IN_PROGRESS = "In Progress"
    TESTING = "Testing"
    COMPLETED = "Completed"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ActivityAction(str, Enum):
    """Activity log action tags — one per externally visible task mutation."""
    TASK_CREATED = "TASK_CREATED"
    TASK_UPDATED = "TASK_UPDATED"
    TASK_STATUS_CHANGED = "TASK_STATUS_CHANGED"
    TASK_DELETED = "TASK_DELETED"


DEFAULT_TASK_STATUS = TaskStatus.READY
DEFAULT_TASK_PRIORITY = TaskPriority.LOW

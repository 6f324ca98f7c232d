"""Task Lifecycle — status state machine, patch planning, and activity classification.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Status and priority are validated against their enumerations before anything
      is applied; one bad value rejects the whole patch
    - Any status may follow any other (advisory workflow, no illegal transitions)
    - A blank or whitespace-only title in a patch is ignored, never rejected
    - Exactly one ActivityAction per planned update: TASK_STATUS_CHANGED only when
      the resulting status differs from the stored one, TASK_UPDATED otherwise

Design Decisions:
    - plan_task_update returns a frozen plan instead of mutating the task: the
      registry applies plan.changes and writes plan's log fields, the rule itself
      stays testable with plain objects
    - TASK_UPDATED entries carry null statuses; only status changes record them
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar
from uuid import UUID

from taskboard.core.domain_types import (
    ActivityAction, TaskPriority, TaskStatus,
    DEFAULT_TASK_PRIORITY, DEFAULT_TASK_STATUS,
)
from taskboard.core.errors import ValidationError
from taskboard.core.repository_protocols import TaskLike

E = TypeVar("E", bound=Enum)

_TEXT_FIELDS = ("description", "category")


def coerce_enum(enum_cls: type[E], value: Any, field_name: str) -> E:
    """Parse a literal into its closed enum, or raise ValidationError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name} value.", field=field_name)


def normalize_title(value: Any) -> str | None:
    """Trimmed title, or None when the value is not a non-blank string."""
    if not isinstance(value, str):
        return None
    return value.strip() or None


@dataclass(frozen=True)
class InitialTask:
    """Resolved field values for a new task."""
    title: str
    description: str
    category: str
    priority: TaskPriority
    status: TaskStatus
    assigned_to: UUID


def resolve_new_task(
    actor_id: UUID,
    title: str,
    description: str | None = None,
    category: str | None = None,
    priority: TaskPriority | str | None = None,
    status: TaskStatus | str | None = None,
    assigned_to: UUID | None = None,
) -> InitialTask:
    """Apply creation defaults: Low priority, Ready status, assignee = creator."""
    clean_title = normalize_title(title)
    if clean_title is None:
        raise ValidationError("Task title is required.", field="title")
    return InitialTask(
        title=clean_title,
        description=description or "",
        category=category or "",
        priority=(
            coerce_enum(TaskPriority, priority, "priority")
            if priority else DEFAULT_TASK_PRIORITY
        ),
        status=(
            coerce_enum(TaskStatus, status, "status")
            if status else DEFAULT_TASK_STATUS
        ),
        assigned_to=assigned_to or actor_id,
    )


@dataclass(frozen=True)
class TaskUpdatePlan:
    """Field assignments for one patch plus the resulting activity entry shape."""
    old_status: TaskStatus
    new_status: TaskStatus
    changes: dict[str, Any] = field(default_factory=dict)

    @property
    def status_changed(self) -> bool:
        return self.old_status != self.new_status

    @property
    def action(self) -> ActivityAction:
        if self.status_changed:
            return ActivityAction.TASK_STATUS_CHANGED
        return ActivityAction.TASK_UPDATED

    @property
    def logged_statuses(self) -> tuple[TaskStatus | None, TaskStatus | None]:
        """(previous, new) status columns for the activity entry."""
        if self.status_changed:
            return self.old_status, self.new_status
        return None, None


def plan_task_update(task: TaskLike, patch: Mapping[str, Any]) -> TaskUpdatePlan:
    """Compute the partial update a patch applies to a task.

    Only keys present in ``patch`` are considered. Enumerated fields are
    validated first so a rejected patch leaves nothing half-applied.
    """
    status = patch.get("status")
    priority = patch.get("priority")
    new_status = coerce_enum(TaskStatus, status, "status") if status else None
    new_priority = (
        coerce_enum(TaskPriority, priority, "priority") if priority else None
    )

    changes: dict[str, Any] = {}
    title = normalize_title(patch.get("title"))
    if title is not None:
        changes["title"] = title
    for name in _TEXT_FIELDS:
        if isinstance(patch.get(name), str):
            changes[name] = patch[name]
    if new_priority is not None:
        changes["priority"] = new_priority
    if "due_date" in patch:
        changes["due_date"] = patch["due_date"] or None
    if new_status is not None:
        changes["status"] = new_status
    if patch.get("assigned_to"):
        changes["assigned_to"] = patch["assigned_to"]

    old_status = coerce_enum(TaskStatus, task.status, "status")
    return TaskUpdatePlan(
        old_status=old_status,
        new_status=new_status or old_status,
        changes=changes,
    )


def deletion_statuses(task: TaskLike) -> tuple[TaskStatus, None]:
    """(previous, new) status columns for a TASK_DELETED entry."""
    return coerce_enum(TaskStatus, task.status, "status"), None

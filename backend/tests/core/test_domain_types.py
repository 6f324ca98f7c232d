"""Domain Types — closed enumerations carry the exact wire literals.

Tests:
    - Role has exactly ADMIN and TEAM_MEMBER
    - TaskStatus values are the four workflow columns, in workflow order
    - Defaults are Ready / Low
    - Unknown literals are rejected by the enum constructor
"""

from uuid import uuid4

import pytest

from taskboard.core.domain_types import (
    UserId, BoardId, TaskId,
    Role, TaskStatus, TaskPriority, ActivityAction,
    DEFAULT_TASK_STATUS, DEFAULT_TASK_PRIORITY,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert UserId(uid) == uid
    assert BoardId(uid) == uid
    assert TaskId(uid) == uid


def test_role_has_exactly_two_members():
    assert {r.value for r in Role} == {"ADMIN", "TEAM_MEMBER"}


def test_task_status_values_in_workflow_order():
    assert [s.value for s in TaskStatus] == [
        "Ready", "In Progress", "Testing", "Completed",
    ]


def test_task_priority_values():
    assert [p.value for p in TaskPriority] == ["Low", "Medium", "High"]


def test_activity_action_tags():
    assert len(ActivityAction) == 4
    assert ActivityAction.TASK_STATUS_CHANGED.value == "TASK_STATUS_CHANGED"


def test_defaults_are_ready_and_low():
    assert DEFAULT_TASK_STATUS is TaskStatus.READY
    assert DEFAULT_TASK_PRIORITY is TaskPriority.LOW


def test_str_enum_compares_equal_to_literal():
    assert TaskStatus.IN_PROGRESS == "In Progress"


@pytest.mark.parametrize("literal", ["Blocked", "ready", "IN_PROGRESS", ""])
def test_unknown_status_literal_rejected(literal):
    with pytest.raises(ValueError):
        TaskStatus(literal)

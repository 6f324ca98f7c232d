"""ORM Models — SQLAlchemy declarative models for identities, boards, tasks, activity.

Invariants:
    - All models inherit from Base (db/base.py)
    - Board is the aggregate root for tasks and memberships
    - ActivityLogEntry has no foreign keys: entries outlive the rows they describe

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from taskboard.models.user import User  # noqa: F401
from taskboard.models.board import Board, BoardMember  # noqa: F401
from taskboard.models.task import Task  # noqa: F401
from taskboard.models.activity_log import ActivityLogEntry  # noqa: F401

"""Board ORM — named task collection with a membership set.

Invariants:
    - name is non-empty and trimmed (enforced at the schema boundary)
    - membership is a set: (board_id, user_id) is the primary key of board_members
    - created_by becomes NULL if the creating identity is deleted

Design Decisions:
    - Membership as its own table instead of an array column: portable, indexable,
      duplicate adds are impossible by construction
    - members loaded with selectin: the access policy reads member_ids on every task request
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from taskboard.db.base import Base


class Board(Base):
    """Board aggregate root — owns memberships and tasks."""
    __tablename__ = "boards"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    members: Mapped[list["BoardMember"]] = relationship(
        "BoardMember", back_populates="board",
        cascade="all, delete-orphan", lazy="selectin",
    )

    @property
    def member_ids(self) -> set[uuid.UUID]:
        return {m.user_id for m in self.members}


class BoardMember(Base):
    """Membership row — one identity on one board."""
    __tablename__ = "board_members"

    board_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("boards.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    board: Mapped["Board"] = relationship("Board", back_populates="members")

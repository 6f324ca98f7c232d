"""Board Registry — board records and their membership sets.

Invariants:
    - create/rename/delete/replace-members pass the role gate (ADMIN) before any lookup
    - Listing: ADMIN sees every board, anyone else only boards they are a member of
    - Membership replace is idempotent: rows are diffed against the requested set,
      duplicates in the request collapse, unknown identity ids are rejected (400)
    - Deleting a board removes its tasks and memberships, writing one TASK_DELETED
      entry per removed task in the same commit; earlier activity entries stay

Design Decisions:
    - get() is public: the task registry resolves boards through it for the
      board-scope gate (single lookup path for 404 semantics)
"""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.access_policy import board_listing_member_filter, check_admin
from taskboard.core.domain_types import ActivityAction
from taskboard.core.errors import ErrorContext, ResourceNotFoundError, ValidationError
from taskboard.core.repository_protocols import ActorLike
from taskboard.core.task_lifecycle import deletion_statuses
from taskboard.models.board import Board, BoardMember
from taskboard.models.task import Task
from taskboard.services.activity_log import ActivityLog
from taskboard.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


class BoardRegistry:
    """Board CRUD and membership management."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activity = ActivityLog(db)

    async def get(self, board_id: UUID) -> Board | None:
        result = await self.db.execute(select(Board).where(Board.id == board_id))
        return result.scalar_one_or_none()

    async def _get_or_404(self, actor: ActorLike, board_id: UUID) -> Board:
        board = await self.get(board_id)
        if board is None:
            raise ResourceNotFoundError(
                "Board", str(board_id),
                ErrorContext(user_id=str(actor.id), board_id=str(board_id)),
            )
        return board

    async def list_boards(self, actor: ActorLike) -> list[Board]:
        query = select(Board).order_by(Board.created_at.desc())
        member_id = board_listing_member_filter(actor)
        if member_id is not None:
            query = query.join(BoardMember).where(BoardMember.user_id == member_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create_board(self, actor: ActorLike, name: str) -> Board:
        check_admin(actor)
        board = Board(name=name, created_by=actor.id, members=[])
        self.db.add(board)
        await self.db.commit()
        logger.info(
            "Board created", extra={"user_id": actor.id, "board_id": board.id},
        )
        return board

    async def rename_board(
        self, actor: ActorLike, board_id: UUID, name: str,
    ) -> Board:
        check_admin(actor)
        board = await self._get_or_404(actor, board_id)
        board.name = name
        await self.db.commit()
        logger.info(
            "Board renamed", extra={"user_id": actor.id, "board_id": board.id},
        )
        return board

    async def delete_board(self, actor: ActorLike, board_id: UUID) -> None:
        check_admin(actor)
        board = await self._get_or_404(actor, board_id)
        result = await self.db.execute(select(Task).where(Task.board_id == board.id))
        tasks = list(result.scalars().all())
        for task in tasks:
            old_status, new_status = deletion_statuses(task)
            await self.activity.append(
                board_id=board.id,
                task_id=task.id,
                user_id=actor.id,
                action=ActivityAction.TASK_DELETED,
                old_status=old_status,
                new_status=new_status,
            )
        await self.db.execute(delete(Task).where(Task.board_id == board.id))
        await self.db.delete(board)
        await self.db.commit()
        logger.info(
            f"Board deleted with {len(tasks)} task(s)",
            extra={"user_id": actor.id, "board_id": board_id},
        )

    async def replace_members(
        self, actor: ActorLike, board_id: UUID, member_ids: list[UUID],
    ) -> Board:
        """Make the board's member set exactly ``member_ids``."""
        check_admin(actor)
        board = await self._get_or_404(actor, board_id)

        wanted = list(dict.fromkeys(member_ids))
        known = await CredentialStore(self.db).existing_ids(wanted)
        unknown = [str(uid) for uid in wanted if uid not in known]
        if unknown:
            raise ValidationError(
                f"Unknown member id(s): {', '.join(unknown)}",
                field="member_ids",
                context=ErrorContext(user_id=str(actor.id), board_id=str(board_id)),
            )

        wanted_set = set(wanted)
        for membership in list(board.members):
            if membership.user_id not in wanted_set:
                board.members.remove(membership)
        current = board.member_ids
        for uid in wanted:
            if uid not in current:
                board.members.append(BoardMember(user_id=uid))

        await self.db.commit()
        logger.info(
            f"Board members replaced ({len(wanted)} members)",
            extra={"user_id": actor.id, "board_id": board.id},
        )
        return board

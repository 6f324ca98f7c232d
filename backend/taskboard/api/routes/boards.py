"""Board Routes — listing for everyone, mutations for administrators.

Invariants:
    - Mutating routes depend on require_admin, so a TEAM_MEMBER gets 403 before the
      body is validated; BoardRegistry re-applies the same role gate
    - Members are returned as a sorted id list (set semantics, stable output)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import get_current_user, require_admin
from taskboard.infrastructure.database import get_db
from taskboard.models.user import User
from taskboard.schemas.board import (
    BoardCreate, BoardMembersUpdate, BoardResponse, BoardUpdate,
)
from taskboard.schemas.common import MessageResponse
from taskboard.services.board_registry import BoardRegistry

router = APIRouter(prefix="/api/v1/boards", tags=["boards"])


class BoardListResponse(BaseModel):
    boards: list[BoardResponse]


@router.get("", response_model=BoardListResponse)
async def list_boards(
    actor: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    boards = await BoardRegistry(db).list_boards(actor)
    return BoardListResponse(boards=[BoardResponse.from_board(b) for b in boards])


@router.post(
    "", response_model=BoardResponse, status_code=status.HTTP_201_CREATED,
)
async def create_board(
    body: BoardCreate,
    actor: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    board = await BoardRegistry(db).create_board(actor, body.name)
    return BoardResponse.from_board(board)


@router.put("/{board_id}", response_model=BoardResponse)
async def rename_board(
    board_id: UUID,
    body: BoardUpdate,
    actor: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    board = await BoardRegistry(db).rename_board(actor, board_id, body.name)
    return BoardResponse.from_board(board)


@router.delete("/{board_id}", response_model=MessageResponse)
async def delete_board(
    board_id: UUID,
    actor: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await BoardRegistry(db).delete_board(actor, board_id)
    return MessageResponse(message="Board deleted.")


@router.put("/{board_id}/members", response_model=BoardResponse)
async def replace_board_members(
    board_id: UUID,
    body: BoardMembersUpdate,
    actor: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Replace the member set. Repeating the same request is a no-op."""
    board = await BoardRegistry(db).replace_members(
        actor, board_id, body.member_ids,
    )
    return BoardResponse.from_board(board)

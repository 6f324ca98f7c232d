"""User Administration Routes — ADMIN-only identity management."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import require_admin
from taskboard.config import get_settings
from taskboard.infrastructure.database import get_db
from taskboard.models.user import User
from taskboard.schemas.auth import UserCreate, UserResponse
from taskboard.schemas.common import MessageResponse
from taskboard.services.identity_service import IdentityService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


class UserListResponse(BaseModel):
    users: list[UserResponse]


@router.get("", response_model=UserListResponse)
async def list_users(
    actor: User = Depends(require_admin), db: AsyncSession = Depends(get_db),
):
    users = await IdentityService(db, get_settings()).list_users(actor)
    return UserListResponse(
        users=[UserResponse.model_validate(u) for u in users],
    )


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate,
    actor: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create a TEAM_MEMBER identity."""
    user = await IdentityService(db, get_settings()).create_user(actor, body)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: UUID,
    actor: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete another identity. Deleting yourself is rejected with 400."""
    await IdentityService(db, get_settings()).delete_user(actor, user_id)
    return MessageResponse(message="User deleted.")

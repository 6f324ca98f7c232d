"""Auth Routes — anonymous registration/login and the current-identity probe.

Invariants:
    - register and login are the only anonymous task board endpoints
    - Responses carry the public identity shape (no password hash)
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import get_current_user, get_token_service
from taskboard.config import get_settings
from taskboard.infrastructure.database import get_db
from taskboard.infrastructure.token_service import TokenService
from taskboard.models.user import User
from taskboard.schemas.auth import (
    LoginRequest, RegisterRequest, TokenResponse, UserResponse,
)
from taskboard.services.identity_service import IdentityService

router = APIRouter(prefix="/api/v1", tags=["auth"])


@router.post(
    "/auth/register", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Self-register. role=ADMIN requires ALLOW_ADMIN_REG."""
    user = await IdentityService(db, get_settings()).register(body)
    return UserResponse.model_validate(user)


@router.post("/auth/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    token, user = await IdentityService(db, get_settings()).login(body, tokens)
    return TokenResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)):
    return UserResponse.model_validate(user)

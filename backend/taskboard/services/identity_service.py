"""Identity Service — registration, login, and administrator user management.

Invariants:
    - Self-registration mints TEAM_MEMBER unless role=ADMIN is requested AND the
      ALLOW_ADMIN_REG toggle is on; otherwise 403 and nothing is written
    - The administrator create-user path always mints TEAM_MEMBER
    - Login failures are indistinguishable (unknown email vs wrong password)
    - An administrator cannot delete their own identity

Design Decisions:
    - Check order mirrors the HTTP contract: 400 (schema) -> 409 duplicate -> 403 toggle
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.config import Settings
from taskboard.core.access_policy import check_admin, check_not_self
from taskboard.core.domain_types import Role
from taskboard.core.errors import (
    ErrorContext, ForbiddenError, ResourceNotFoundError, UnauthenticatedError,
)
from taskboard.core.repository_protocols import ActorLike
from taskboard.infrastructure.password_hashing import verify_password
from taskboard.infrastructure.token_service import TokenService
from taskboard.models.user import User
from taskboard.schemas.auth import LoginRequest, RegisterRequest, UserCreate
from taskboard.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


def token_claims(user: User) -> dict:
    """Claims encoded into a session token for this identity."""
    return {"sub": str(user.id), "role": user.role.value}


class IdentityService:
    """Registration, login, and user administration."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.credentials = CredentialStore(db)
        self.settings = settings

    async def register(self, body: RegisterRequest) -> User:
        await self.credentials.ensure_email_available(body.email)
        role = Role.TEAM_MEMBER
        if body.role == Role.ADMIN:
            if not self.settings.allow_admin_reg:
                raise ForbiddenError("Admin registration is disabled.")
            role = Role.ADMIN
        return await self.credentials.create(
            body.name, body.email, body.password, role,
        )

    async def login(
        self, body: LoginRequest, tokens: TokenService,
    ) -> tuple[str, User]:
        user = await self.credentials.get_by_email(body.email)
        if user is None or not verify_password(user.password_hash, body.password):
            raise UnauthenticatedError(
                "Invalid email or password.", code="INVALID_CREDENTIALS",
            )
        logger.info("Login succeeded", extra={"user_id": user.id})
        return tokens.issue(token_claims(user)), user

    async def list_users(self, actor: ActorLike) -> list[User]:
        check_admin(actor)
        return await self.credentials.list_all()

    async def create_user(self, actor: ActorLike, body: UserCreate) -> User:
        check_admin(actor)
        return await self.credentials.create(
            body.name, body.email, body.password, Role.TEAM_MEMBER,
        )

    async def delete_user(self, actor: ActorLike, user_id: UUID) -> None:
        check_admin(actor)
        check_not_self(actor, user_id)
        user = await self.credentials.get(user_id)
        if user is None:
            raise ResourceNotFoundError(
                "User", str(user_id), ErrorContext(user_id=str(actor.id)),
            )
        await self.credentials.delete(user)

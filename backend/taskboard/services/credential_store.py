"""Credential Store — persistence of identity records.

Invariants:
    - Emails arrive lower-cased (schemas/auth.py); lookups compare exact values
    - A duplicate email is a ConflictError, both on the pre-check and on a racing commit
    - Deleting an identity removes its memberships and clears board creator references;
      task creator/assignee ids are left untouched (tasks never change without a log entry)

Design Decisions:
    - Reference cleanup done with explicit UPDATE/DELETE statements instead of relying
      on ON DELETE actions: identical behaviour on SQLite (FKs off) and PostgreSQL
"""

import logging
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.domain_types import Role
from taskboard.core.errors import ConflictError
from taskboard.infrastructure.password_hashing import hash_password
from taskboard.models.board import Board, BoardMember
from taskboard.models.user import User

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Email is already in use."


class CredentialStore:
    """Identity persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: UUID) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def existing_ids(self, user_ids: list[UUID]) -> set[UUID]:
        if not user_ids:
            return set()
        result = await self.db.execute(
            select(User.id).where(User.id.in_(user_ids)),
        )
        return set(result.scalars().all())

    async def list_all(self) -> list[User]:
        result = await self.db.execute(
            select(User).order_by(User.created_at.desc()),
        )
        return list(result.scalars().all())

    async def ensure_email_available(self, email: str) -> None:
        if await self.get_by_email(email) is not None:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

    async def create(
        self, name: str, email: str, password: str, role: Role,
    ) -> User:
        """Hash the password and insert the identity."""
        await self.ensure_email_available(email)
        user = User(
            name=name, email=email,
            password_hash=hash_password(password), role=role,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)
        logger.info(
            f"Identity created with role {role.value}",
            extra={"user_id": user.id},
        )
        return user

    async def delete(self, user: User) -> None:
        await self.db.execute(
            delete(BoardMember).where(BoardMember.user_id == user.id),
        )
        await self.db.execute(
            update(Board).where(Board.created_by == user.id)
            .values(created_by=None),
        )
        await self.db.delete(user)
        await self.db.commit()
        logger.info("Identity deleted", extra={"user_id": user.id})

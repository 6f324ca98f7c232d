"""Database Session Manager — one async engine, one session per request.

Invariants:
    - A session leaving its block on a SQLAlchemy error is rolled back before anything else
    - Store failures escaping a request become TaskBoardErrors: a unique-constraint
      violation (duplicate email) is ConflictError (409), anything else DatabaseError (503)
    - get_db hands out sessions only after init_db ran in the lifespan

Design Decisions:
    - Module-level db_manager: the lifespan sets it, get_db and the readiness probe read it
    - Pool sizing applies to server databases only; SQLite keeps SQLAlchemy's default pool
    - expire_on_commit=False: registries return ORM objects after commit for serialization
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from taskboard.core.errors import ConflictError, DatabaseError, TaskBoardError

logger = logging.getLogger(__name__)


def translate_store_error(exc: SQLAlchemyError) -> TaskBoardError:
    """Map a SQLAlchemy failure to the error the client sees."""
    if isinstance(exc, IntegrityError):
        return ConflictError("The change conflicts with an existing record.")
    if isinstance(exc, OperationalError):
        return DatabaseError("store unreachable", "execute")
    return DatabaseError("store rejected the operation", "query")


class DatabaseSessionManager:
    """Owns the engine and the session factory for the task board store."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        options: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            options.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **options)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            await session.rollback()
            error = translate_store_error(exc)
            if error.http_status >= 500:
                logger.error(f"Store failure: {exc}", extra={"error_code": error.code})
            else:
                logger.warning(f"Store conflict: {exc}", extra={"error_code": error.code})
            raise error from exc
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Readiness ping: True when a trivial query round-trips."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Set by the lifespan
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise DatabaseError("database not initialized", "connect")
    async with db_manager.session() as session:
        yield session

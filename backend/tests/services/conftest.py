"""Service test fixtures — async DB + FastAPI test client + seeded identities.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager initialized for the readiness probe that bypasses get_db
    - Seed helpers write through their own session and close it, so assertions
      never read a stale identity map

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Tokens minted with the real TokenService: the authentication gate is exercised
      end to end, never stubbed
"""

from uuid import UUID

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from taskboard.config import get_settings
from taskboard.core.domain_types import Role
from taskboard.db.base import Base
from taskboard.infrastructure.database import get_db, DatabaseSessionManager
from taskboard.infrastructure.password_hashing import hash_password
from taskboard.infrastructure.token_service import TokenService
from taskboard.models.activity_log import ActivityLogEntry
from taskboard.models.board import Board, BoardMember
from taskboard.models.task import Task
from taskboard.models.user import User
import taskboard.infrastructure.database as db_module
from taskboard.main import app

DEFAULT_PASSWORD = "correct-horse-battery"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def token_service() -> TokenService:
    return TokenService.from_settings(get_settings())


@pytest.fixture
def auth_headers(token_service):
    """Build an Authorization header for a seeded identity."""
    def _headers(user: User) -> dict[str, str]:
        token = token_service.issue({"sub": str(user.id), "role": user.role.value})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def seed_user(test_session_factory):
    async def _seed(
        email: str, role: Role = Role.TEAM_MEMBER, name: str | None = None,
    ) -> User:
        async with test_session_factory() as session:
            user = User(
                name=name or email.split("@")[0].title(),
                email=email,
                password_hash=hash_password(DEFAULT_PASSWORD),
                role=role,
            )
            session.add(user)
            await session.commit()
            return user
    return _seed


@pytest.fixture
def seed_board(test_session_factory):
    async def _seed(name: str, creator: User, members: list[User] = ()) -> Board:
        async with test_session_factory() as session:
            board = Board(
                name=name, created_by=creator.id,
                members=[BoardMember(user_id=m.id) for m in members],
            )
            session.add(board)
            await session.commit()
            return board
    return _seed


@pytest.fixture
def seed_task(test_session_factory):
    async def _seed(board: Board, creator: User, **fields) -> Task:
        async with test_session_factory() as session:
            task = Task(
                board_id=board.id, title=fields.pop("title", "Seeded task"),
                created_by=creator.id,
                assigned_to=fields.pop("assigned_to", creator.id),
                **fields,
            )
            session.add(task)
            await session.commit()
            return task
    return _seed


@pytest.fixture
def fetch(test_session_factory):
    """Run a select in a fresh session and return all scalars."""
    async def _fetch(statement) -> list:
        async with test_session_factory() as session:
            result = await session.execute(statement)
            return list(result.scalars().all())
    return _fetch


@pytest.fixture
def activity_for(fetch):
    async def _activity(task_id) -> list[ActivityLogEntry]:
        return await fetch(
            select(ActivityLogEntry)
            .where(ActivityLogEntry.task_id == UUID(str(task_id)))
            .order_by(ActivityLogEntry.id),
        )
    return _activity


@pytest.fixture
async def admin(seed_user) -> User:
    return await seed_user("admin@example.com", Role.ADMIN, name="Ada Admin")


@pytest.fixture
async def member(seed_user) -> User:
    return await seed_user("member@example.com", name="Mo Member")


@pytest.fixture
async def outsider(seed_user) -> User:
    return await seed_user("outsider@example.com", name="Oz Outsider")

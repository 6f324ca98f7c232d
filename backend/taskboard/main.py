"""TaskBoard API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskBoardError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - A missing JWT signing secret aborts startup (ConfigurationError), it is never
      discovered per request
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers: TaskBoardError (domain), RequestValidationError
      (Pydantic), Exception (catch-all): never leaks internal details
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import taskboard.infrastructure.database as database
from taskboard.api.error_handlers import register_error_handlers
from taskboard.api.routes import auth, boards, health, tasks, users
from taskboard.config import get_settings
from taskboard.infrastructure.observability import setup_logging
from taskboard.infrastructure.token_service import TokenService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    TokenService.from_settings(settings)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("TaskBoard API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("TaskBoard API shutting down")


app = FastAPI(
    title="TaskBoard API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(boards.router)
app.include_router(tasks.router)

register_error_handlers(app)

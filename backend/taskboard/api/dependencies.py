"""Request Dependencies — authentication gate and service wiring for routes.

Invariants:
    - get_current_user runs before any other route logic; on failure the request
      ends with 401 and no service is constructed
    - The resolved identity is attached to request.state.user for downstream use
    - require_admin applies the role gate at the route edge so a non-admin gets 403
      even when the body is also invalid; services re-check through the same policy

Design Decisions:
    - HTTPBearer(auto_error=False): a missing or non-bearer header becomes our own
      UnauthenticatedError envelope instead of FastAPI's default 403
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.config import get_settings
from taskboard.core.access_policy import check_admin
from taskboard.infrastructure.database import get_db
from taskboard.infrastructure.token_service import TokenService
from taskboard.models.user import User
from taskboard.services.authentication import AuthenticationGate
from taskboard.services.credential_store import CredentialStore

_bearer = HTTPBearer(auto_error=False)


def get_token_service() -> TokenService:
    return TokenService.from_settings(get_settings())


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """Resolve the bearer token to a live identity or raise 401."""
    gate = AuthenticationGate(tokens, CredentialStore(db))
    user = await gate.authenticate(
        credentials.credentials if credentials else None,
    )
    request.state.user = user
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Role gate for ADMIN-only routes; runs before request body validation."""
    check_admin(user)
    return user

"""Authentication Gate — resolves a bearer token to a live identity.

Invariants:
    - Missing token, failed verification, malformed subject, or a deleted identity
      all raise UnauthenticatedError (401); nothing downstream runs
    - The identity is re-read from the credential store on every request, so a
      deleted user's unexpired token stops working immediately
"""

from uuid import UUID

from taskboard.core.errors import InvalidTokenError, UnauthenticatedError
from taskboard.infrastructure.token_service import TokenService
from taskboard.models.user import User
from taskboard.services.credential_store import CredentialStore


class AuthenticationGate:

    def __init__(self, tokens: TokenService, credentials: CredentialStore):
        self.tokens = tokens
        self.credentials = credentials

    async def authenticate(self, bearer_token: str | None) -> User:
        if not bearer_token:
            raise UnauthenticatedError()
        claims = self.tokens.verify(bearer_token)
        try:
            user_id = UUID(str(claims["sub"]))
        except ValueError:
            raise InvalidTokenError("malformed subject")
        user = await self.credentials.get(user_id)
        if user is None:
            raise UnauthenticatedError("Identity no longer exists.")
        return user

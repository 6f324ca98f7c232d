"""Token Service — issues and verifies signed, time-boxed session tokens.

Invariants:
    - Tokens are HS256 JWTs carrying at least `sub` (identity id as string) and `exp`
    - Validity is jwt_expires_days (7 by default); there is no refresh, expiry forces re-login
    - A service cannot be constructed without a signing secret (ConfigurationError)
    - verify() raises InvalidTokenError for bad signature, malformed token, missing
      claims, or expiry; never returns partial claims

Design Decisions:
    - Stateless: no server-side session table, the token is self-contained
    - Built once at startup from Settings so a missing secret fails the process,
      not the first request
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from taskboard.config import Settings
from taskboard.core.errors import ConfigurationError, InvalidTokenError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["exp", "sub"]


class TokenService:
    """Sign and verify identity tokens with a shared secret."""

    def __init__(self, secret: str, expires_days: int = 7):
        if not secret:
            raise ConfigurationError("JWT_SECRET")
        self._secret = secret
        self.expires_days = expires_days

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(settings.jwt_secret, expires_days=settings.jwt_expires_days)

    def issue(self, claims: dict[str, Any]) -> str:
        """Sign claims (must include `sub`) with iat/exp added."""
        if not claims.get("sub"):
            raise ValueError("token claims require a 'sub' identity id")
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "iat": now,
            "exp": now + timedelta(days=self.expires_days),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> dict[str, Any]:
        """Return the token's claims or raise InvalidTokenError."""
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError("expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Token rejected: {e}")
            raise InvalidTokenError("invalid")

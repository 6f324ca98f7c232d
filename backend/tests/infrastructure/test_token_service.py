"""Token Service — issue/verify round trip, expiry, tampering, configuration.

Tests cover:
    - issued tokens verify and carry sub/role/exp
    - default validity is 7 days
    - expired, tampered, foreign-secret, and garbage tokens raise InvalidTokenError
    - an empty secret raises ConfigurationError at construction
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from taskboard.config import Settings
from taskboard.core.errors import ConfigurationError, InvalidTokenError
from taskboard.infrastructure.token_service import ALGORITHM, TokenService

SECRET = "unit-test-secret-0123456789abcdefgh"


def test_issue_then_verify_returns_claims():
    service = TokenService(SECRET)
    claims = service.verify(service.issue({"sub": "user-1", "role": "ADMIN"}))
    assert claims["sub"] == "user-1"
    assert claims["role"] == "ADMIN"


def test_token_expires_after_seven_days_by_default():
    service = TokenService(SECRET)
    claims = service.verify(service.issue({"sub": "user-1"}))
    lifetime = claims["exp"] - claims["iat"]
    assert lifetime == int(timedelta(days=7).total_seconds())


def test_expired_token_rejected():
    service = TokenService(SECRET, expires_days=-1)
    token = service.issue({"sub": "user-1"})
    with pytest.raises(InvalidTokenError) as exc:
        service.verify(token)
    assert exc.value.reason == "expired"


def test_token_signed_with_other_secret_rejected():
    token = TokenService("another-secret-0123456789abcdefghij").issue({"sub": "u"})
    with pytest.raises(InvalidTokenError) as exc:
        TokenService(SECRET).verify(token)
    assert exc.value.reason == "invalid"


def test_tampered_token_rejected():
    service = TokenService(SECRET)
    header, payload, signature = service.issue({"sub": "u"}).split(".")
    forged = ".".join([header, payload, signature[::-1]])
    with pytest.raises(InvalidTokenError):
        service.verify(forged)


@pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c"])
def test_malformed_token_rejected(garbage):
    with pytest.raises(InvalidTokenError):
        TokenService(SECRET).verify(garbage)


def test_token_without_subject_rejected():
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode({"exp": exp}, SECRET, algorithm=ALGORITHM)
    with pytest.raises(InvalidTokenError):
        TokenService(SECRET).verify(token)


def test_issue_requires_subject():
    with pytest.raises(ValueError):
        TokenService(SECRET).issue({"role": "ADMIN"})


def test_empty_secret_is_configuration_error():
    with pytest.raises(ConfigurationError) as exc:
        TokenService("")
    assert exc.value.setting == "JWT_SECRET"


def test_from_settings_uses_configured_lifetime():
    settings = Settings(jwt_secret=SECRET, jwt_expires_days=1)
    service = TokenService.from_settings(settings)
    assert service.expires_days == 1


def test_from_settings_without_secret_fails():
    with pytest.raises(ConfigurationError):
        TokenService.from_settings(Settings(jwt_secret=""))

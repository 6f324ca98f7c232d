"""Auth Routes — registration, login, and the authentication gate.

Invariants:
    - register mints TEAM_MEMBER; ADMIN only when ALLOW_ADMIN_REG is on
    - duplicate email → 409, invalid field → 400, disabled admin registration → 403
    - login returns a token that authenticates /me; bad credentials → 401
    - missing, malformed, expired, or orphaned tokens → 401 before any route logic
"""

import pytest
from sqlalchemy import select

from taskboard.config import get_settings
from taskboard.infrastructure.token_service import TokenService
from taskboard.models.user import User

SEEDED_PASSWORD = "correct-horse-battery"


def _registration(**overrides) -> dict:
    body = {"name": "Rita", "email": "rita@example.com", "password": "password123"}
    body.update(overrides)
    return body


# ─── register ────────────────────────────────────────────────────

async def test_register_creates_team_member(client):
    res = await client.post("/api/v1/auth/register", json=_registration())
    assert res.status_code == 201
    body = res.json()
    assert body["role"] == "TEAM_MEMBER"
    assert body["email"] == "rita@example.com"
    assert "password_hash" not in body
    assert "password" not in body


async def test_register_normalizes_email(client, fetch):
    res = await client.post(
        "/api/v1/auth/register", json=_registration(email="  Rita@Example.COM "),
    )
    assert res.status_code == 201
    users = await fetch(select(User))
    assert [u.email for u in users] == ["rita@example.com"]


async def test_register_duplicate_email_conflict(client):
    await client.post("/api/v1/auth/register", json=_registration())
    res = await client.post(
        "/api/v1/auth/register", json=_registration(email="RITA@example.com"),
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CONFLICT"


@pytest.mark.parametrize("field, value", [
    ("name", "   "),
    ("email", "not-an-email"),
    ("password", "short"),
    ("role", "SUPERUSER"),
])
async def test_register_invalid_field_is_400(client, field, value):
    res = await client.post(
        "/api/v1/auth/register", json=_registration(**{field: value}),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_register_admin_disabled_is_403_and_writes_nothing(client, fetch):
    res = await client.post(
        "/api/v1/auth/register", json=_registration(role="ADMIN"),
    )
    assert res.status_code == 403
    assert await fetch(select(User)) == []


async def test_register_admin_allowed_when_toggle_on(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "allow_admin_reg", True)
    res = await client.post(
        "/api/v1/auth/register", json=_registration(role="ADMIN"),
    )
    assert res.status_code == 201
    assert res.json()["role"] == "ADMIN"


async def test_register_explicit_team_member_role(client):
    res = await client.post(
        "/api/v1/auth/register", json=_registration(role="TEAM_MEMBER"),
    )
    assert res.status_code == 201
    assert res.json()["role"] == "TEAM_MEMBER"


# ─── login ───────────────────────────────────────────────────────

async def test_login_returns_token_that_authenticates(client, member):
    res = await client.post(
        "/api/v1/auth/login",
        json={"email": "Member@Example.com", "password": SEEDED_PASSWORD},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["user"]["id"] == str(member.id)

    me = await client.get(
        "/api/v1/me", headers={"Authorization": f"Bearer {body['token']}"},
    )
    assert me.status_code == 200
    assert me.json()["email"] == "member@example.com"


async def test_login_wrong_password_is_401(client, member):
    res = await client.post(
        "/api/v1/auth/login",
        json={"email": "member@example.com", "password": "wrong-password"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_CREDENTIALS"


async def test_login_unknown_email_is_401(client):
    res = await client.post(
        "/api/v1/auth/login",
        json={"email": "ghost@example.com", "password": "password123"},
    )
    assert res.status_code == 401


# ─── authentication gate ─────────────────────────────────────────

async def test_me_without_token_is_401(client):
    res = await client.get("/api/v1/me")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHENTICATED"


async def test_non_bearer_scheme_is_401(client):
    res = await client.get("/api/v1/me", headers={"Authorization": "Basic abc"})
    assert res.status_code == 401


async def test_garbage_token_is_401(client):
    res = await client.get(
        "/api/v1/me", headers={"Authorization": "Bearer not.a.token"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_TOKEN"


async def test_expired_token_is_401(client, member):
    expired = TokenService(get_settings().jwt_secret, expires_days=-1)
    token = expired.issue({"sub": str(member.id)})
    res = await client.get(
        "/api/v1/me", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_TOKEN"


async def test_token_with_non_uuid_subject_is_401(client, token_service):
    token = token_service.issue({"sub": "definitely-not-a-uuid"})
    res = await client.get(
        "/api/v1/me", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401


async def test_token_for_deleted_identity_is_401(
    client, admin, member, auth_headers,
):
    headers = auth_headers(member)
    deleted = await client.delete(
        f"/api/v1/users/{member.id}", headers=auth_headers(admin),
    )
    assert deleted.status_code == 200
    res = await client.get("/api/v1/me", headers=headers)
    assert res.status_code == 401


@pytest.mark.parametrize("method, path", [
    ("GET", "/api/v1/users"),
    ("POST", "/api/v1/users"),
    ("DELETE", "/api/v1/users/00000000-0000-0000-0000-000000000001"),
    ("GET", "/api/v1/boards"),
    ("POST", "/api/v1/boards"),
    ("PUT", "/api/v1/boards/00000000-0000-0000-0000-000000000001"),
    ("DELETE", "/api/v1/boards/00000000-0000-0000-0000-000000000001"),
    ("PUT", "/api/v1/boards/00000000-0000-0000-0000-000000000001/members"),
    ("GET", "/api/v1/boards/00000000-0000-0000-0000-000000000001/tasks"),
    ("POST", "/api/v1/boards/00000000-0000-0000-0000-000000000001/tasks"),
    ("PUT", "/api/v1/tasks/00000000-0000-0000-0000-000000000001"),
    ("DELETE", "/api/v1/tasks/00000000-0000-0000-0000-000000000001"),
])
async def test_every_protected_route_requires_token(client, method, path):
    res = await client.request(method, path, json={})
    assert res.status_code == 401

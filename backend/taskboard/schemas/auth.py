"""Identity Schemas — registration, login, and public identity shape.

Invariants:
    - name: required, stripped
    - email: local@domain.tld shape, stripped and lower-cased before it reaches a service
    - password: at least 8 characters, never echoed back
    - RegisterRequest.role is a closed Role; the ADMIN toggle is checked by the service

Design Decisions:
    - field_validator for side-effect-free transforms (strip, lower): services stay simple
    - UserCreate (admin path) has no role field at all: that path can only mint TEAM_MEMBER
"""

import re
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.core.domain_types import Role

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8


def _normalize_email(v: str) -> str:
    v = v.strip().lower()
    if not _EMAIL_PATTERN.match(v):
        raise ValueError("A valid email is required.")
    return v


class UserCreate(BaseModel):
    """Identity creation by an administrator — always a TEAM_MEMBER."""
    name: str = Field(max_length=120)
    email: str = Field(max_length=255)
    password: str = Field(max_length=256)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required.")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.",
            )
        return v


class RegisterRequest(UserCreate):
    """Self-registration. role=ADMIN only honoured when ALLOW_ADMIN_REG is on."""
    role: Role | None = None


class LoginRequest(BaseModel):
    email: str = Field(max_length=255)
    password: str = Field(max_length=256)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(BaseModel):
    """Identity response — public-facing identity data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: Role


class TokenResponse(BaseModel):
    token: str
    user: UserResponse

"""Root conftest — shared test configuration."""

import os

# Deterministic auth configuration; never read a developer's real secret
os.environ.setdefault("JWT_SECRET", "test-signing-secret-0123456789abcdef")
os.environ.setdefault("ALLOW_ADMIN_REG", "false")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)

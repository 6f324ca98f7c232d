"""Application startup — a missing signing secret stops the process.

Invariants:
    - lifespan raises ConfigurationError(JWT_SECRET) before the database is touched
    - with a secret configured, lifespan initializes db_manager and disposes it on exit
"""

import pytest

import taskboard.infrastructure.database as db_module
import taskboard.main as main_module
from taskboard.config import get_settings
from taskboard.core.errors import ConfigurationError


@pytest.fixture
def fresh_settings(monkeypatch):
    """Re-read Settings from the environment; restore the cached instance afterwards."""
    monkeypatch.setattr(main_module, "setup_logging", lambda *args: None)
    monkeypatch.setattr(db_module, "db_manager", None)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


async def test_empty_secret_refuses_to_start(fresh_settings):
    fresh_settings.setenv("JWT_SECRET", "")

    with pytest.raises(ConfigurationError) as exc_info:
        async with main_module.lifespan(main_module.app):
            pytest.fail("lifespan must not yield without a signing secret")

    assert exc_info.value.setting == "JWT_SECRET"
    assert db_module.db_manager is None


async def test_configured_secret_starts_and_initializes_store(fresh_settings, tmp_path):
    fresh_settings.setenv("JWT_SECRET", "startup-test-secret-0123456789abcd")
    fresh_settings.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'app.db'}")

    async with main_module.lifespan(main_module.app):
        assert db_module.db_manager is not None
        assert await db_module.db_manager.health_check() is True

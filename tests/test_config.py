"""Settings — env overrides, URL normalization, cached accessor."""

from taskshield.config import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("TASKSHIELD_DATABASE_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.database_url == "sqlite+aiosqlite:///taskshield.db"
    assert settings.task_validate_requires_completion is True
    assert settings.log_format == "json"


def test_env_override(monkeypatch):
    monkeypatch.setenv("TASKSHIELD_TASK_VALIDATE_REQUIRES_COMPLETION", "false")
    monkeypatch.setenv("TASKSHIELD_LOG_LEVEL", "DEBUG")
    settings = Settings(_env_file=None)
    assert settings.task_validate_requires_completion is False
    assert settings.log_level == "DEBUG"


def test_postgres_url_gets_async_driver():
    settings = Settings(_env_file=None, database_url="postgresql://u:p@db/tasks")
    assert settings.database_url == "postgresql+asyncpg://u:p@db/tasks"


def test_get_settings_cached():
    assert get_settings() is get_settings()

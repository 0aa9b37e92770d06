"""Settings validation tests (pydantic-settings, env driven)."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings, get_settings


def test_sqlite_url_accepted(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./x.db")
    settings = get_settings()
    assert settings.is_sqlite is True
    assert settings.placeholder_timezone == "UTC"
    assert settings.version_assignment_max_retries == 5


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@localhost/crm")
    monkeypatch.setenv("PLACEHOLDER_TIMEZONE", "Europe/Istanbul")
    monkeypatch.setenv("RECENT_DOCUMENTS_LIMIT", "3")
    settings = Settings()
    assert settings.is_sqlite is False
    assert settings.placeholder_timezone == "Europe/Istanbul"
    assert settings.recent_documents_limit == 3


def test_missing_database_url_rejected(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "")
    with pytest.raises(ValidationError, match="DATABASE_URL is required"):
        Settings(_env_file=None)


def test_sync_driver_rejected(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@localhost/crm")
    with pytest.raises(ValidationError, match="async drivers"):
        Settings(_env_file=None)


def test_unknown_timezone_rejected(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./x.db")
    monkeypatch.setenv("PLACEHOLDER_TIMEZONE", "Mars/Olympus")
    with pytest.raises(ValidationError, match="IANA zone"):
        Settings(_env_file=None)


def test_retry_budget_must_be_positive(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./x.db")
    monkeypatch.setenv("VERSION_ASSIGNMENT_MAX_RETRIES", "0")
    with pytest.raises(ValidationError, match="version_assignment_max_retries"):
        Settings(_env_file=None)

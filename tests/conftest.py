"""Pytest configuration and fixtures for the document engine.

DB-dependent tests run against a throwaway aiosqlite file per test; the
schema is created with Base.metadata.create_all. All imports use app.*.
"""

import os

# Settings validation needs DATABASE_URL before anything calls get_settings().
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test-crm.db")

from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import get_settings
from app.infrastructure.persistence import models  # noqa: F401  (registers tables)
from app.infrastructure.persistence.database import Base, configure_sqlite
from app.shared.context import clear_current_user

FIXED_NOW = datetime(2024, 3, 15, 9, 30, 5, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _reset_context_and_settings():
    """Each test starts with no actor and freshly read settings."""
    get_settings.cache_clear()
    clear_current_user()
    yield
    clear_current_user()
    get_settings.cache_clear()


@pytest.fixture
def fixed_clock():
    """Clock returning FIXED_NOW (2024-03-15 09:30:05 UTC)."""
    return lambda: FIXED_NOW


@pytest.fixture
async def db_engine(tmp_path):
    """Async engine on a fresh SQLite file with the full schema."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'crm.db'}")
    configure_sqlite(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to db_engine (same options as the app's)."""
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    """Session inside an open transaction for repository tests. Rolls back after test."""
    async with session_factory() as session:
        await session.begin()
        yield session
        await session.rollback()

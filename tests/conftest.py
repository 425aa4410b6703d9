"""Pytest configuration and shared fixtures.

Every test gets its own in-memory SQLite database (aiosqlite + StaticPool, so
all sessions share one connection) and an app wired to it.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import AsyncGenerator
from pathlib import Path

# Keep importing task_reminder.app free of side effects outside the temp dir
_LOG_DIR = tempfile.mkdtemp(prefix="task-reminder-logs-")
os.environ.setdefault("LOG_DIR", _LOG_DIR)
os.environ.setdefault("TASK_CHECK_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from task_reminder.config import Settings
from task_reminder.db.session import build_session_factory, init_models


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_models(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine):
    return build_session_factory(db_engine)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite://",
        task_check_enabled=False,
        task_check_interval_seconds=60,
        log_level="DEBUG",
        log_dir=Path(_LOG_DIR),
    )


@pytest.fixture
def app(settings: Settings, db_engine: AsyncEngine, session_factory):
    from task_reminder.app import create_app

    return create_app(settings=settings, engine=db_engine, session_factory=session_factory)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

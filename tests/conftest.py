"""Root conftest — shared test configuration and fixtures.

Fixtures:
    - clock: FixedClock pinned to 2024-01-01 12:00 UTC, advanced manually
    - make_user / make_task: domain entity factories with valid defaults
    - test_engine / test_db: fresh in-memory SQLite database per test
"""

import os

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

# Ensure tests never pick up a developer's database
os.environ.setdefault("TASKSHIELD_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from taskshield.core.clock import FixedClock  # noqa: E402
from taskshield.core.domain_types import UserRole  # noqa: E402
from taskshield.core.task import Task  # noqa: E402
from taskshield.core.user import User  # noqa: E402
from taskshield.db.base import Base  # noqa: E402
import taskshield.models  # noqa: E402,F401


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def make_user():
    def _make(
        email: str = "john.doe@example.com",
        role: UserRole = UserRole.USER,
        **kwargs,
    ) -> User:
        kwargs.setdefault("password_hash", "hashed-secret")
        kwargs.setdefault("first_name", "John")
        kwargs.setdefault("last_name", "Doe")
        return User(email=email, role=role, **kwargs)
    return _make


@pytest.fixture
def make_task():
    def _make(creator: User, title: str = "Test Task", **kwargs) -> Task:
        return Task(title=title, created_by=creator.id, **kwargs)
    return _make


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session

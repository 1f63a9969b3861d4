"""Service test fixtures — persisted users and services wired over the test DB.

Invariants:
    - Every service shares the test_db session and the fixed clock
    - Task saves skip the completed_at requirement so open tasks can be stored

Design Decisions:
    - Real SQL repositories over in-memory SQLite instead of fakes:
      services are exercised through the same code path production uses
"""

import pytest

from taskshield.config import Settings
from taskshield.core.domain_types import UserRole
from taskshield.infrastructure.audit_repository import SqlAuditLogRepository
from taskshield.infrastructure.user_repository import SqlUserRepository
from taskshield.services.auth_service import create_auth_service
from taskshield.services.task_service import create_task_service


@pytest.fixture
def users(test_db, clock):
    return SqlUserRepository(test_db, clock)


@pytest.fixture
def audit(test_db):
    return SqlAuditLogRepository(test_db)


@pytest.fixture
def task_service(test_db, clock):
    settings = Settings(task_validate_requires_completion=False)
    return create_task_service(test_db, settings, clock)


@pytest.fixture
def auth_service(test_db, clock):
    return create_auth_service(test_db, clock)


@pytest.fixture
def save_user(users, make_user):
    async def _save(email: str, role: UserRole = UserRole.USER, **kwargs):
        user = make_user(email=email, role=role, **kwargs)
        await users.save(user)
        return user
    return _save


@pytest.fixture
async def creator(save_user):
    return await save_user("creator@example.com")


@pytest.fixture
async def assignee(save_user):
    return await save_user("assignee@example.com")


@pytest.fixture
async def stranger(save_user):
    return await save_user("stranger@example.com")


@pytest.fixture
async def manager(save_user):
    return await save_user("manager@example.com", UserRole.MANAGER)


@pytest.fixture
async def admin(save_user):
    return await save_user("admin@example.com", UserRole.ADMIN)

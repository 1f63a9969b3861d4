"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Every save() implementation calls entity.validate() and then entity.touch(clock)
      before writing; an entity that fails validate() is never persisted
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core functions that USE the entities are never async themselves —
      the shell orchestrates the async calls around the pure logic
    - Repositories return domain dataclasses, never ORM rows
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from taskshield.core.audit_event import AuditEvent
from taskshield.core.domain_types import TaskId, TaskStatus, UserId
from taskshield.core.task import Task
from taskshield.core.user import User


@dataclass(frozen=True)
class Page:
    """Offset pagination window."""
    offset: int = 0
    limit: int = 50


@dataclass(frozen=True)
class TaskFilter:
    """Optional task query filters — None means "any"."""
    assigned_to: UserId | None = None
    created_by: UserId | None = None
    status: TaskStatus | None = None


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def get(self, user_id: UserId) -> User | None: ...
    async def get_by_email(self, email: str) -> User | None: ...
    async def exists_by_email(
        self, email: str, exclude_id: UserId | None = None,
    ) -> bool: ...
    async def save(self, user: User) -> User: ...


class TaskRepository(Protocol):
    """Contract for task persistence — implemented by shell."""
    async def get(self, task_id: TaskId) -> Task | None: ...
    async def save(self, task: Task) -> Task: ...
    async def find(
        self, task_filter: TaskFilter, page: Page = Page(),
    ) -> list[Task]: ...
    async def find_overdue(
        self, status: TaskStatus, before: datetime,
    ) -> list[Task]: ...
    async def count_active_by_assignee(self, user_id: UserId) -> int: ...


class AuditLogRepository(Protocol):
    """Contract for the audit trail sink — implemented by shell."""
    async def record(self, event: AuditEvent) -> None: ...
    async def find_by_resource(
        self, resource_type: str, resource_id: UUID,
    ) -> list[AuditEvent]: ...
    async def find_failed_logins(
        self, user_id: UserId, since: datetime,
    ) -> list[AuditEvent]: ...

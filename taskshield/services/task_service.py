"""Task Service — create and mutate tasks on behalf of an acting user.

Invariants:
    - Every mutation loads a fresh task and actor, checks ensure_can_edit, then
      applies exactly one core mutator
    - Core errors (IllegalTransitionError, IllegalAssignmentError, ValidationError,
      PermissionDeniedError) propagate unchanged; nothing is saved or audited on failure
    - One audit event per successful mutation, recorded after save

Design Decisions:
    - Repositories and clock injected: the service holds no DB session of its own
    - Unknown task/actor/assignee ids raise ResourceNotFoundError before any mutation
"""

import logging
from datetime import datetime

from taskshield.core.audit_event import AuditEvent, RESOURCE_TASK
from taskshield.core.authorization import ensure_can_edit
from taskshield.core.clock import Clock, SystemClock
from taskshield.core.domain_types import (
    AuditAction, TaskId, TaskPriority, TaskStatus, UserId,
)
from taskshield.core.errors import (
    IllegalTransitionError, PermissionDeniedError, ResourceNotFoundError,
)
from taskshield.core.repository_protocols import (
    AuditLogRepository, TaskRepository, UserRepository,
)
from taskshield.core.task import Task
from taskshield.core.task_status import TERMINAL_STATES
from taskshield.core.user import User

logger = logging.getLogger(__name__)


class TaskService:
    """Application service for the task lifecycle."""

    def __init__(
        self,
        tasks: TaskRepository,
        users: UserRepository,
        audit: AuditLogRepository,
        clock: Clock | None = None,
    ):
        self.tasks = tasks
        self.users = users
        self.audit = audit
        self.clock = clock or SystemClock()

    async def create_task(
        self,
        actor_id: UserId,
        title: str,
        description: str | None = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: datetime | None = None,
        assigned_to: UserId | None = None,
    ) -> Task:
        actor = await self._load_user(actor_id)
        task = Task(
            title=title,
            created_by=actor.id,
            description=description,
            priority=priority,
            due_date=due_date,
        )
        if assigned_to is not None:
            await self._load_user(assigned_to)
            task.assign_to(assigned_to)

        await self.tasks.save(task)
        logger.info(
            "Task created",
            extra={"task_id": str(task.id), "user_id": str(actor.id)},
        )
        await self._record(actor, AuditAction.TASK_CREATED, task, f"title={title!r}")
        return task

    async def change_status(
        self, task_id: TaskId, actor_id: UserId, new_status: TaskStatus,
    ) -> Task:
        task, actor = await self._load_for_edit(task_id, actor_id)
        try:
            previous = task.change_status(new_status, self.clock)
        except IllegalTransitionError as e:
            logger.warning(
                e.message,
                extra={
                    "task_id": str(task.id),
                    "error_code": e.code,
                    "from_status": e.from_status.value,
                    "to_status": e.to_status.value,
                },
            )
            raise

        await self.tasks.save(task)
        logger.info(
            "Task status changed",
            extra={
                "task_id": str(task.id),
                "from_status": previous.value,
                "to_status": new_status.value,
            },
        )
        await self._record(
            actor, AuditAction.TASK_STATUS_CHANGED, task,
            f"{previous.value} -> {new_status.value}",
        )
        return task

    async def assign(
        self, task_id: TaskId, actor_id: UserId, assignee_id: UserId | None,
    ) -> Task:
        task, actor = await self._load_for_edit(task_id, actor_id)
        if assignee_id is not None:
            await self._load_user(assignee_id)
        task.assign_to(assignee_id)

        await self.tasks.save(task)
        await self._record(
            actor, AuditAction.TASK_ASSIGNED, task, f"assigned_to={assignee_id}",
        )
        return task

    async def unassign(self, task_id: TaskId, actor_id: UserId) -> Task:
        task, actor = await self._load_for_edit(task_id, actor_id)
        task.unassign()

        await self.tasks.save(task)
        await self._record(actor, AuditAction.TASK_UNASSIGNED, task)
        return task

    async def update_details(
        self, task_id: TaskId, actor_id: UserId, **changes,
    ) -> Task:
        """Apply a partial update of title/description/priority/due_date."""
        task, actor = await self._load_for_edit(task_id, actor_id)
        changed = task.update_details(**changes)
        if not changed:
            return task

        await self.tasks.save(task)
        await self._record(
            actor, AuditAction.TASK_UPDATED, task, f"fields={','.join(changed)}",
        )
        return task

    async def find_overdue(self) -> list[Task]:
        """All non-terminal tasks whose due date has passed."""
        now = self.clock.now()
        overdue = []
        for status in TaskStatus:
            if status in TERMINAL_STATES:
                continue
            overdue.extend(await self.tasks.find_overdue(status, now))
        return overdue

    # ─── Helpers ────────────────────────────────────────────────

    async def _load_user(self, user_id: UserId) -> User:
        user = await self.users.get(user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(user_id))
        return user

    async def _load_for_edit(
        self, task_id: TaskId, actor_id: UserId,
    ) -> tuple[Task, User]:
        task = await self.tasks.get(task_id)
        if task is None:
            raise ResourceNotFoundError("Task", str(task_id))
        actor = await self._load_user(actor_id)
        try:
            ensure_can_edit(task, actor)
        except PermissionDeniedError as e:
            logger.warning(
                "Edit rejected",
                extra={
                    "task_id": str(task.id),
                    "user_id": str(actor.id),
                    "error_code": e.code,
                },
            )
            raise
        return task, actor

    async def _record(
        self,
        actor: User,
        action: AuditAction,
        task: Task,
        details: str | None = None,
    ) -> None:
        await self.audit.record(AuditEvent(
            action=action,
            created_at=self.clock.now(),
            actor_id=actor.id,
            actor_email=actor.email,
            resource_type=RESOURCE_TASK,
            resource_id=task.id,
            details=details,
        ))


def create_task_service(
    db, settings=None, clock: Clock | None = None,
) -> TaskService:
    """Wire a TaskService over SQL repositories sharing one AsyncSession."""
    from taskshield.config import get_settings
    from taskshield.infrastructure.audit_repository import SqlAuditLogRepository
    from taskshield.infrastructure.task_repository import SqlTaskRepository
    from taskshield.infrastructure.user_repository import SqlUserRepository

    settings = settings or get_settings()
    clock = clock or SystemClock()
    return TaskService(
        tasks=SqlTaskRepository(
            db, clock,
            require_completion=settings.task_validate_requires_completion,
        ),
        users=SqlUserRepository(db, clock),
        audit=SqlAuditLogRepository(db),
        clock=clock,
    )

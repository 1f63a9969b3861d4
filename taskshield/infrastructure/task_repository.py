"""SQL Task Repository — SQLAlchemy implementation of core.TaskRepository.

Invariants:
    - save() runs task.validate() first, then task.touch(clock); nothing is written on failure
    - require_completion is passed straight to Task.validate() (see config.py)
    - find() results ordered newest-first, paginated by offset/limit
    - "Active" means not in a terminal state (DONE, CANCELLED)

Design Decisions:
    - Filters as a frozen TaskFilter dataclass: no free-form query strings reach SQL
    - Each save() commits: one entity, one transaction
"""

import logging
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskshield.core.clock import Clock, SystemClock
from taskshield.core.domain_types import TaskId, TaskStatus, UserId
from taskshield.core.repository_protocols import Page, TaskFilter
from taskshield.core.task import Task
from taskshield.core.task_status import TERMINAL_STATES
from taskshield.models._time import to_utc
from taskshield.models.task import TaskRow

logger = logging.getLogger(__name__)


class SqlTaskRepository:
    """Task persistence over an AsyncSession."""

    def __init__(
        self,
        db: AsyncSession,
        clock: Clock | None = None,
        require_completion: bool = True,
    ):
        self.db = db
        self.clock = clock or SystemClock()
        self.require_completion = require_completion

    async def get(self, task_id: TaskId) -> Task | None:
        row = await self.db.get(TaskRow, task_id)
        return row.to_domain() if row else None

    async def save(self, task: Task) -> Task:
        task.validate(require_completion=self.require_completion)
        task.touch(self.clock)

        row = await self.db.get(TaskRow, task.id)
        if row is None:
            row = TaskRow()
            self.db.add(row)
        row.apply(task)
        await self.db.commit()
        logger.debug(
            "Task saved",
            extra={"task_id": str(task.id), "to_status": task.status.value},
        )
        return task

    async def find(
        self, task_filter: TaskFilter, page: Page = Page(),
    ) -> list[Task]:
        query = select(TaskRow)
        if task_filter.assigned_to is not None:
            query = query.where(TaskRow.assigned_to == task_filter.assigned_to)
        if task_filter.created_by is not None:
            query = query.where(TaskRow.created_by == task_filter.created_by)
        if task_filter.status is not None:
            query = query.where(TaskRow.status == task_filter.status.value)
        query = (
            query.order_by(TaskRow.created_at.desc(), TaskRow.id)
            .offset(page.offset)
            .limit(page.limit)
        )
        result = await self.db.execute(query)
        return [row.to_domain() for row in result.scalars().all()]

    async def find_overdue(
        self, status: TaskStatus, before: datetime,
    ) -> list[Task]:
        result = await self.db.execute(
            select(TaskRow)
            .where(TaskRow.status == status.value)
            .where(TaskRow.due_date.is_not(None))
            .where(TaskRow.due_date < to_utc(before))
            .order_by(TaskRow.due_date),
        )
        return [row.to_domain() for row in result.scalars().all()]

    async def count_active_by_assignee(self, user_id: UserId) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(TaskRow)
            .where(TaskRow.assigned_to == user_id)
            .where(TaskRow.status.not_in([s.value for s in TERMINAL_STATES])),
        )
        return result.scalar_one()

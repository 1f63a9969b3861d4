"""Task ORM — persists title, lifecycle status, priority, dates, and user references.

Invariants:
    - created_by is a non-null FK to users.id; assigned_to is a nullable FK
    - status/priority stored as their Enum value strings
    - Indexed on status, due_date, created_by, assigned_to (the filter columns)

Design Decisions:
    - Foreign keys without relationship(): the domain holds ids, so the ORM does too
      (ADR: no lazy loading behind the entity's back)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from taskshield.core.domain_types import TaskId, TaskPriority, TaskStatus, UserId
from taskshield.core.task import Task
from taskshield.db.base import Base
from taskshield.models._time import as_utc, to_utc


class TaskRow(Base):
    """Task table row."""
    __tablename__ = "tasks"
    __table_args__ = (
        Index("idx_task_status", "status"),
        Index("idx_task_due_date", "due_date"),
        Index("idx_task_created_by", "created_by"),
        Index("idx_task_assigned_to", "assigned_to"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TaskStatus.TODO.value,
    )
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TaskPriority.MEDIUM.value,
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_by: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    assigned_to: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    def to_domain(self) -> Task:
        return Task(
            id=TaskId(self.id),
            title=self.title,
            description=self.description,
            status=TaskStatus(self.status),
            priority=TaskPriority(self.priority),
            due_date=as_utc(self.due_date),
            created_by=UserId(self.created_by),
            assigned_to=UserId(self.assigned_to) if self.assigned_to else None,
            created_at=as_utc(self.created_at),
            updated_at=as_utc(self.updated_at),
            completed_at=as_utc(self.completed_at),
        )

    def apply(self, task: Task) -> None:
        """Copy every persisted field from the domain entity onto this row."""
        self.id = task.id
        self.title = task.title
        self.description = task.description
        self.status = task.status.value
        self.priority = task.priority.value
        self.due_date = to_utc(task.due_date)
        self.created_by = task.created_by
        self.assigned_to = task.assigned_to
        self.created_at = to_utc(task.created_at)
        self.updated_at = to_utc(task.updated_at)
        self.completed_at = to_utc(task.completed_at)

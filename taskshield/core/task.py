"""Task Entity — lifecycle state machine, assignment, and overdue computation.

Invariants:
    - status changes only through change_status(), which consults core/task_status.py
    - A rejected change_status() raises before any field is touched
    - completed_at is stamped exactly once: the first time status becomes DONE
    - created_by is required and cannot be reassigned once set
    - A DONE or CANCELLED task is never overdue, whatever its due_date
    - validate() must be called by the storage boundary before every create/update
    - due_date, when set, is timezone-aware; naive values are rejected, not guessed

Design Decisions:
    - Creator and assignee held as UserId, not User objects: the entity never
      fetches related rows (ADR: explicit identifiers over lazy references)
    - validate() keeps the completed_at requirement as written even though it
      rejects every never-completed task; require_completion=False is the
      explicit opt-out (see DESIGN.md, open question 1)
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from taskshield.core.clock import Clock
from taskshield.core.domain_types import TaskId, TaskPriority, TaskStatus, UserId
from taskshield.core.errors import (
    IllegalAssignmentError, IllegalTransitionError, ValidationError,
)
from taskshield.core.task_status import can_transition, is_terminal


_UNSET = object()


def _check_due_date(due_date: datetime | None) -> None:
    if due_date is not None and due_date.tzinfo is None:
        raise ValidationError("Task due date must be timezone-aware", "due_date")


@dataclass
class Task:
    """Task entity — pure dataclass, no IO."""

    title: str | None
    created_by: UserId | None
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    assigned_to: UserId | None = None
    id: TaskId = field(default_factory=lambda: TaskId(uuid4()))

    created_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None

    def __setattr__(self, name, value):
        if name == "created_by" and getattr(self, "created_by", None) not in (None, value):
            raise AttributeError("created_by cannot be reassigned")
        super().__setattr__(name, value)

    # ─── Lifecycle ──────────────────────────────────────────────

    def change_status(self, new_status: TaskStatus, clock: Clock) -> TaskStatus:
        """Apply a legal status change. Returns the previous status."""
        previous = self.status
        if not can_transition(previous, new_status):
            raise IllegalTransitionError(previous, new_status)
        self.status = new_status
        if new_status == TaskStatus.DONE and self.completed_at is None:
            self.completed_at = clock.now()
        return previous

    def is_overdue(self, clock: Clock) -> bool:
        if self.due_date is None or is_terminal(self.status):
            return False
        return clock.now() > self.due_date

    # ─── Assignment ─────────────────────────────────────────────

    def assign_to(self, user_id: UserId | None) -> None:
        if user_id is None:
            raise IllegalAssignmentError()
        self.assigned_to = user_id

    def unassign(self) -> None:
        self.assigned_to = None

    def update_details(
        self,
        *,
        title=_UNSET,
        description=_UNSET,
        priority=_UNSET,
        due_date=_UNSET,
    ) -> list[str]:
        """Partial update of descriptive fields. Returns the names that changed."""
        if title is not _UNSET and (title is None or not title.strip()):
            raise ValidationError("Task title cannot be null or empty", "title")
        if priority is not _UNSET and not isinstance(priority, TaskPriority):
            raise ValidationError(f"Unknown priority: {priority!r}", "priority")
        if due_date is not _UNSET:
            _check_due_date(due_date)

        changed = []
        for name, value in (
            ("title", title),
            ("description", description),
            ("priority", priority),
            ("due_date", due_date),
        ):
            if value is not _UNSET and getattr(self, name) != value:
                setattr(self, name, value)
                changed.append(name)
        return changed

    # ─── Storage boundary ───────────────────────────────────────

    def touch(self, clock: Clock) -> None:
        now = clock.now()
        if self.created_at is None:
            self.created_at = now
        self.updated_at = now

    def validate(self, require_completion: bool = True) -> None:
        """Raise ValidationError if the task is not fit to be persisted."""
        if self.title is None or not self.title.strip():
            raise ValidationError("Task title cannot be null or empty", "title")
        if self.created_by is None:
            raise ValidationError("Task must have a creator", "created_by")
        _check_due_date(self.due_date)
        if require_completion and self.completed_at is None:
            raise ValidationError("Task must have a completed date", "completed_at")

    def __str__(self) -> str:
        return (
            f"Task{{id={self.id}, title='{self.title}', status={self.status.value}, "
            f"priority={self.priority.value}, createdBy={self.created_by}, "
            f"assignedTo={self.assigned_to or 'none'}}}"
        )

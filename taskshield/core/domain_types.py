"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, TaskId, AuditLogId wrap UUIDs — never use bare UUID in domain logic
    - TaskPriority levels are 1–4 and compared by level, never by name
    - UserRole order is an explicit rank table: USER < MANAGER < ADMIN < AUDITOR
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: persist as plain strings in the DB and serialize to JSON as-is
    - AUDITOR ranks above ADMIN and therefore passes has_permission(MANAGER).
      Kept as-is because task-edit authorization depends on it (see DESIGN.md)
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
TaskId = NewType("TaskId", UUID)
AuditLogId = NewType("AuditLogId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task lifecycle states — maps to DB `status` column.

    Soft-ordered TODO → IN_PROGRESS → REVIEW → DONE. Legality of a move
    between two states is decided by core/task_status.py.
    """
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    REVIEW = "REVIEW"
    DONE = "DONE"
    CANCELLED = "CANCELLED"

    @property
    def display_name(self) -> str:
        return _STATUS_DISPLAY_NAMES[self]


_STATUS_DISPLAY_NAMES: dict[TaskStatus, str] = {
    TaskStatus.TODO: "To Do",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.REVIEW: "Under Review",
    TaskStatus.DONE: "Completed",
    TaskStatus.CANCELLED: "Cancelled",
}


class TaskPriority(str, Enum):
    """Task priority — ordered by level (LOW=1 … URGENT=4)."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @property
    def level(self) -> int:
        return _PRIORITY_LEVELS[self]

    def is_higher_than(self, other: "TaskPriority") -> bool:
        return self.level > other.level


_PRIORITY_LEVELS: dict[TaskPriority, int] = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
    TaskPriority.URGENT: 4,
}


class UserRole(str, Enum):
    """User roles — permission is rank-based, see ROLE_RANK."""
    USER = "USER"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"
    AUDITOR = "AUDITOR"

    @property
    def rank(self) -> int:
        return ROLE_RANK[self]

    @property
    def authority(self) -> str:
        """Granted-authority label, e.g. ROLE_ADMIN."""
        return f"ROLE_{self.value}"

    def has_permission(self, required: "UserRole") -> bool:
        """True when this role ranks at or above `required`."""
        return self.rank >= required.rank


ROLE_RANK: dict[UserRole, int] = {
    UserRole.USER: 0,
    UserRole.MANAGER: 1,
    UserRole.ADMIN: 2,
    UserRole.AUDITOR: 3,
}


class AuditAction(str, Enum):
    """Audit action labels emitted by the services layer."""
    USER_LOGIN = "USER_LOGIN"
    USER_LOGIN_FAILED = "USER_LOGIN_FAILED"
    USER_LOCKED = "USER_LOCKED"
    USER_UNLOCKED = "USER_UNLOCKED"
    TASK_CREATED = "TASK_CREATED"
    TASK_UPDATED = "TASK_UPDATED"
    TASK_STATUS_CHANGED = "TASK_STATUS_CHANGED"
    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_UNASSIGNED = "TASK_UNASSIGNED"

"""Authorization Policy — who may mutate a task.

Invariants:
    - can_be_edited_by is PURE: a function of (task, user) only, no IO, no clock
    - Checks run in order: no user → creator → assignee → role rank ≥ MANAGER
    - A missing user is always denied, whatever the task looks like

Design Decisions:
    - Free function over Task method: the policy composes two entities, neither owns it
    - Role check goes through UserRole.has_permission, so AUDITOR passes (ranked above ADMIN)
"""

from taskshield.core.domain_types import UserRole
from taskshield.core.errors import PermissionDeniedError
from taskshield.core.task import Task
from taskshield.core.user import User


EDIT_ANY_TASK_ROLE: UserRole = UserRole.MANAGER


def can_be_edited_by(task: Task, user: User | None) -> bool:
    if user is None:
        return False
    if user.id == task.created_by:
        return True
    if task.assigned_to is not None and user.id == task.assigned_to:
        return True
    return user.role.has_permission(EDIT_ANY_TASK_ROLE)


def ensure_can_edit(task: Task, user: User | None) -> None:
    """Raise PermissionDeniedError when can_be_edited_by says no."""
    if not can_be_edited_by(task, user):
        raise PermissionDeniedError(
            str(user.id) if user is not None else None, str(task.id),
        )

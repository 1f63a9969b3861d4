"""Task Status State Machine — transition legality for the task lifecycle.

Invariants:
    - CANCELLED is fully terminal: no transition out of it is legal
    - DONE allows exactly one exit: DONE → CANCELLED
    - TODO, IN_PROGRESS, REVIEW may move to any state, including backward and to themselves
    - ALLOWED_TRANSITIONS covers every TaskStatus member

Design Decisions:
    - Explicit table over if-chains: the whole matrix is readable in one place
    - Pure function, not an Enum method: domain_types stays free of rules
"""

from taskshield.core.domain_types import TaskStatus


TERMINAL_STATES: frozenset[TaskStatus] = frozenset(
    {TaskStatus.DONE, TaskStatus.CANCELLED},
)

_ANY_STATUS: frozenset[TaskStatus] = frozenset(TaskStatus)

ALLOWED_TRANSITIONS: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.TODO: _ANY_STATUS,
    TaskStatus.IN_PROGRESS: _ANY_STATUS,
    TaskStatus.REVIEW: _ANY_STATUS,
    TaskStatus.DONE: frozenset({TaskStatus.CANCELLED}),
    TaskStatus.CANCELLED: frozenset(),
}


def can_transition(from_status: TaskStatus, to_status: TaskStatus) -> bool:
    """True when moving a task from `from_status` to `to_status` is legal."""
    return to_status in ALLOWED_TRANSITIONS[from_status]


def is_terminal(status: TaskStatus) -> bool:
    return status in TERMINAL_STATES

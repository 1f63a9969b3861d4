"""Task Status State Machine — exhaustive legality matrix.

Tests cover:
    - CANCELLED rejects every target
    - DONE accepts only CANCELLED
    - Non-terminal states accept every target, including backward and self moves
"""

import pytest

from taskshield.core.domain_types import TaskStatus
from taskshield.core.task_status import (
    ALLOWED_TRANSITIONS, TERMINAL_STATES, can_transition, is_terminal,
)


NON_TERMINAL = [TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.REVIEW]


def test_table_covers_every_status():
    assert set(ALLOWED_TRANSITIONS) == set(TaskStatus)


@pytest.mark.parametrize("target", list(TaskStatus))
def test_cancelled_is_fully_terminal(target):
    assert not can_transition(TaskStatus.CANCELLED, target)


@pytest.mark.parametrize("target", list(TaskStatus))
def test_done_only_allows_cancel(target):
    assert can_transition(TaskStatus.DONE, target) is (target == TaskStatus.CANCELLED)


@pytest.mark.parametrize("source", NON_TERMINAL)
@pytest.mark.parametrize("target", list(TaskStatus))
def test_non_terminal_states_allow_everything(source, target):
    assert can_transition(source, target)


def test_backward_move_is_legal():
    assert can_transition(TaskStatus.REVIEW, TaskStatus.TODO)
    assert can_transition(TaskStatus.IN_PROGRESS, TaskStatus.TODO)


def test_terminal_states():
    assert TERMINAL_STATES == {TaskStatus.DONE, TaskStatus.CANCELLED}
    assert is_terminal(TaskStatus.DONE)
    assert not is_terminal(TaskStatus.REVIEW)

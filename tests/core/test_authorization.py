"""Authorization Policy — who may edit a task.

Tests cover:
    - Creator, assignee, MANAGER/ADMIN/AUDITOR allowed
    - Stranger with USER role and None denied
    - ensure_can_edit raises PermissionDeniedError with context
"""

import pytest

from taskshield.core.authorization import can_be_edited_by, ensure_can_edit
from taskshield.core.domain_types import TaskStatus, UserRole
from taskshield.core.errors import PermissionDeniedError


@pytest.fixture
def creator(make_user):
    return make_user(email="creator@example.com")


@pytest.fixture
def assignee(make_user):
    return make_user(email="assignee@example.com")


@pytest.fixture
def task(make_task, creator, assignee):
    task = make_task(creator)
    task.assign_to(assignee.id)
    return task


def test_creator_can_edit(task, creator):
    assert can_be_edited_by(task, creator)


def test_assignee_can_edit(task, assignee):
    assert can_be_edited_by(task, assignee)


def test_stranger_user_cannot_edit(task, make_user):
    assert not can_be_edited_by(task, make_user(email="other@example.com"))


def test_none_cannot_edit(task):
    assert not can_be_edited_by(task, None)


@pytest.mark.parametrize("role", [UserRole.MANAGER, UserRole.ADMIN, UserRole.AUDITOR])
def test_elevated_roles_can_edit_any_task(task, make_user, role):
    assert can_be_edited_by(task, make_user(email="boss@example.com", role=role))


def test_former_assignee_loses_access(task, assignee):
    task.unassign()
    assert not can_be_edited_by(task, assignee)


def test_creator_keeps_access_on_terminal_task(make_task, creator, clock):
    task = make_task(creator)
    task.change_status(TaskStatus.CANCELLED, clock)
    assert can_be_edited_by(task, creator)


def test_ensure_can_edit_passes_silently(task, creator):
    ensure_can_edit(task, creator)


def test_ensure_can_edit_raises_with_context(task, make_user):
    stranger = make_user(email="other@example.com")
    with pytest.raises(PermissionDeniedError) as exc:
        ensure_can_edit(task, stranger)
    assert exc.value.code == "PERMISSION_DENIED"
    assert exc.value.context.user_id == str(stranger.id)
    assert exc.value.context.task_id == str(task.id)


def test_ensure_can_edit_rejects_none(task):
    with pytest.raises(PermissionDeniedError) as exc:
        ensure_can_edit(task, None)
    assert exc.value.context.user_id is None

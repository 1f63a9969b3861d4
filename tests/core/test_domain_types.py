"""Domain Types — verifies enum members, explicit ranks, and priority levels.

Tests:
    - TaskStatus has five states with display names
    - TaskPriority levels 1–4 drive is_higher_than
    - UserRole rank order USER < MANAGER < ADMIN < AUDITOR drives has_permission
    - AUDITOR passes MANAGER and ADMIN checks (preserved ordering)
"""

from uuid import uuid4

import pytest

from taskshield.core.domain_types import (
    ROLE_RANK, AuditAction, TaskId, TaskPriority, TaskStatus, UserId, UserRole,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert UserId(uid) == uid
    assert TaskId(uid) == uid


def test_task_status_has_five_states():
    assert [s.value for s in TaskStatus] == [
        "TODO", "IN_PROGRESS", "REVIEW", "DONE", "CANCELLED",
    ]


def test_task_status_display_names():
    assert TaskStatus.TODO.display_name == "To Do"
    assert TaskStatus.IN_PROGRESS.display_name == "In Progress"
    assert TaskStatus.REVIEW.display_name == "Under Review"
    assert TaskStatus.DONE.display_name == "Completed"
    assert TaskStatus.CANCELLED.display_name == "Cancelled"


def test_priority_levels_are_one_to_four():
    assert [p.level for p in TaskPriority] == [1, 2, 3, 4]


def test_priority_is_higher_than_is_strict():
    assert TaskPriority.URGENT.is_higher_than(TaskPriority.HIGH)
    assert TaskPriority.MEDIUM.is_higher_than(TaskPriority.LOW)
    assert not TaskPriority.MEDIUM.is_higher_than(TaskPriority.MEDIUM)
    assert not TaskPriority.LOW.is_higher_than(TaskPriority.URGENT)


def test_role_rank_covers_every_role():
    assert set(ROLE_RANK) == set(UserRole)
    assert ROLE_RANK[UserRole.USER] < ROLE_RANK[UserRole.MANAGER]
    assert ROLE_RANK[UserRole.MANAGER] < ROLE_RANK[UserRole.ADMIN]
    assert ROLE_RANK[UserRole.ADMIN] < ROLE_RANK[UserRole.AUDITOR]


@pytest.mark.parametrize("role, expected", [
    (UserRole.USER, False),
    (UserRole.MANAGER, True),
    (UserRole.ADMIN, True),
    (UserRole.AUDITOR, True),
])
def test_has_permission_manager(role, expected):
    assert role.has_permission(UserRole.MANAGER) is expected


def test_auditor_outranks_admin():
    assert UserRole.AUDITOR.has_permission(UserRole.ADMIN)
    assert not UserRole.ADMIN.has_permission(UserRole.AUDITOR)


def test_every_role_has_its_own_permission():
    for role in UserRole:
        assert role.has_permission(role)
        assert role.has_permission(UserRole.USER)


def test_role_authority_label():
    assert UserRole.ADMIN.authority == "ROLE_ADMIN"
    assert UserRole.USER.authority == "ROLE_USER"


def test_enums_round_trip_from_stored_strings():
    assert TaskStatus("IN_PROGRESS") is TaskStatus.IN_PROGRESS
    assert UserRole("AUDITOR") is UserRole.AUDITOR
    assert AuditAction("USER_LOCKED") is AuditAction.USER_LOCKED

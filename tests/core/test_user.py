"""User Entity — tests for validation and the lockout state machine.

Tests cover:
    - Defaults on creation (role USER, counter 0, unlocked)
    - Email validation accepts/rejects per the local@domain.tld shape
    - Exactly the 5th consecutive failure locks for 30 minutes
    - Locks self-expire by clock; reset always clears state
"""

from datetime import timedelta

import pytest

from taskshield.core.domain_types import UserRole
from taskshield.core.errors import InvalidEmailError, ValidationError
from taskshield.core.user import LOCKOUT_DURATION, MAX_FAILED_LOGIN_ATTEMPTS


# ─── Creation ────────────────────────────────────────────────────

def test_new_user_defaults(make_user, clock):
    user = make_user()
    assert user.role == UserRole.USER
    assert user.failed_login_attempts == 0
    assert user.account_non_locked is True
    assert user.locked_until is None
    assert user.enabled is True
    assert user.created_at is None
    assert user.is_account_usable(clock)


def test_full_name_and_username(make_user):
    user = make_user(first_name="John", last_name="Smith")
    assert user.full_name == "John Smith"
    assert user.username == "john.doe@example.com"


def test_authorities_follow_role(make_user):
    assert make_user(role=UserRole.ADMIN).authorities == ["ROLE_ADMIN"]


# ─── Validation ──────────────────────────────────────────────────

@pytest.mark.parametrize("email", [
    "test@example.com",
    "user.name@domain.co.uk",
    "user+tag@example.org",
    "user_name@sub.domain.com",
])
def test_validate_accepts_valid_emails(make_user, email):
    make_user(email=email).validate()


@pytest.mark.parametrize("email", [
    "invalid-email",
    "@example.com",
    "test@",
    "test@.com",
    "test@com.",
    "",
    "   ",
    None,
])
def test_validate_rejects_invalid_emails(make_user, email):
    with pytest.raises(InvalidEmailError) as exc:
        make_user(email=email).validate()
    assert exc.value.field == "email"
    assert exc.value.code == "INVALID_EMAIL"


def test_invalid_email_is_a_validation_error(make_user):
    with pytest.raises(ValidationError):
        make_user(email="nope").validate()


def test_validate_rejects_trailing_newline(make_user):
    with pytest.raises(InvalidEmailError):
        make_user(email="test@example.com\n").validate()


def test_validate_rejects_negative_counter(make_user):
    user = make_user()
    user.failed_login_attempts = -1
    with pytest.raises(ValidationError) as exc:
        user.validate()
    assert exc.value.field == "failed_login_attempts"


def test_touch_sets_created_once_and_updated_always(make_user, clock):
    user = make_user()
    user.touch(clock)
    created = user.created_at
    clock.advance(timedelta(minutes=5))
    user.touch(clock)
    assert user.created_at == created
    assert user.updated_at == created + timedelta(minutes=5)


# ─── Lockout state machine ───────────────────────────────────────

def test_four_failures_leave_account_usable(make_user, clock):
    user = make_user()
    for _ in range(4):
        assert user.increment_failed_login_attempts(clock) is False
    assert user.failed_login_attempts == 4
    assert user.is_account_usable(clock)
    assert user.locked_until is None


def test_fifth_failure_locks_for_thirty_minutes(make_user, clock):
    user = make_user()
    for _ in range(4):
        user.increment_failed_login_attempts(clock)
    assert user.increment_failed_login_attempts(clock) is True
    assert user.failed_login_attempts == MAX_FAILED_LOGIN_ATTEMPTS
    assert user.account_non_locked is False
    assert user.locked_until == clock.now() + timedelta(minutes=30)
    assert not user.is_account_usable(clock)


def test_failures_past_threshold_do_not_extend_lock(make_user, clock):
    user = make_user()
    for _ in range(5):
        user.increment_failed_login_attempts(clock)
    locked_until = user.locked_until
    clock.advance(timedelta(minutes=10))
    assert user.increment_failed_login_attempts(clock) is False
    assert user.failed_login_attempts == 6
    assert user.locked_until == locked_until


def test_expired_lock_falls_back_to_persisted_flag(make_user, clock):
    user = make_user()
    for _ in range(5):
        user.increment_failed_login_attempts(clock)
    clock.advance(LOCKOUT_DURATION)
    # locked_until is no longer in the future: the persisted flag decides
    assert user.account_non_locked is False
    assert not user.is_account_usable(clock)


def test_future_locked_until_overrides_flag(make_user, clock):
    user = make_user()
    user.locked_until = clock.now() + timedelta(minutes=30)
    assert user.account_non_locked is True
    assert not user.is_account_usable(clock)

    user.locked_until = clock.now() - timedelta(minutes=1)
    assert user.is_account_usable(clock)


def test_reset_clears_everything(make_user, clock):
    user = make_user()
    for _ in range(7):
        user.increment_failed_login_attempts(clock)
    user.reset_failed_login_attempts()
    assert user.failed_login_attempts == 0
    assert user.account_non_locked is True
    assert user.locked_until is None
    assert user.is_account_usable(clock)


def test_reset_on_fresh_user_is_noop(make_user, clock):
    user = make_user()
    user.reset_failed_login_attempts()
    assert user.failed_login_attempts == 0
    assert user.is_account_usable(clock)


def test_reset_then_five_more_failures_locks_again(make_user, clock):
    user = make_user()
    for _ in range(3):
        user.increment_failed_login_attempts(clock)
    user.reset_failed_login_attempts()
    for _ in range(4):
        user.increment_failed_login_attempts(clock)
    assert user.is_account_usable(clock)
    user.increment_failed_login_attempts(clock)
    assert not user.is_account_usable(clock)


def test_successful_login_resets_and_stamps(make_user, clock):
    user = make_user()
    user.increment_failed_login_attempts(clock)
    user.record_successful_login(clock)
    assert user.failed_login_attempts == 0
    assert user.last_login_at == clock.now()


@pytest.mark.parametrize("flag", [
    "enabled", "account_non_expired", "credentials_non_expired",
])
def test_can_authenticate_requires_every_flag(make_user, clock, flag):
    user = make_user()
    assert user.can_authenticate(clock)
    setattr(user, flag, False)
    assert not user.can_authenticate(clock)


def test_can_authenticate_false_while_locked(make_user, clock):
    user = make_user()
    for _ in range(5):
        user.increment_failed_login_attempts(clock)
    assert not user.can_authenticate(clock)

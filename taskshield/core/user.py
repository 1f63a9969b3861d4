"""User Entity — identity, role, and the failed-login lockout state machine.

Invariants:
    - failed_login_attempts is never negative
    - The 5th consecutive failure (no reset in between) locks the account for 30 minutes;
      the lock side effect happens only on the threshold-crossing call
    - is_account_usable() is the authority on lock state: a future locked_until
      overrides account_non_locked, and an expired lock needs no explicit unlock
    - reset_failed_login_attempts() always yields counter 0, unlocked, locked_until None
    - validate() must be called by the storage boundary before every create/update

Design Decisions:
    - Dataclass with methods: pure, deterministic, testable without mocks
    - Clock passed per call, never stored on the entity (entities stay plain data)
    - account_non_locked keeps its positive sense (True = not locked) so the
      persisted column matches the flag name
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from uuid import uuid4

from taskshield.core.clock import Clock
from taskshield.core.domain_types import UserId, UserRole
from taskshield.core.errors import InvalidEmailError, ValidationError


MAX_FAILED_LOGIN_ATTEMPTS: int = 5
LOCKOUT_DURATION: timedelta = timedelta(minutes=30)
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


def is_valid_email(email: str | None) -> bool:
    if email is None or not email.strip():
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


@dataclass
class User:
    """System user — pure dataclass, no IO."""

    email: str | None
    password_hash: str = ""
    first_name: str = ""
    last_name: str = ""
    role: UserRole = UserRole.USER
    id: UserId = field(default_factory=lambda: UserId(uuid4()))

    # Account flags
    enabled: bool = True
    account_non_expired: bool = True
    account_non_locked: bool = True
    credentials_non_expired: bool = True

    # Lockout state
    failed_login_attempts: int = 0
    locked_until: datetime | None = None

    # Timestamps (stamped by touch() at the storage boundary)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_login_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def username(self) -> str | None:
        return self.email

    @property
    def authorities(self) -> list[str]:
        return [self.role.authority]

    # ─── Lockout state machine ──────────────────────────────────

    def increment_failed_login_attempts(self, clock: Clock) -> bool:
        """Record one failed login. Returns True if this call locked the account."""
        self.failed_login_attempts += 1
        if self.failed_login_attempts == MAX_FAILED_LOGIN_ATTEMPTS:
            self.account_non_locked = False
            self.locked_until = clock.now() + LOCKOUT_DURATION
            return True
        return False

    def reset_failed_login_attempts(self) -> None:
        self.failed_login_attempts = 0
        self.account_non_locked = True
        self.locked_until = None

    def record_successful_login(self, clock: Clock) -> None:
        """Reset lockout state and stamp last_login_at."""
        self.reset_failed_login_attempts()
        self.last_login_at = clock.now()

    def is_account_usable(self, clock: Clock) -> bool:
        if self.locked_until is not None and clock.now() < self.locked_until:
            return False
        return self.account_non_locked

    def can_authenticate(self, clock: Clock) -> bool:
        return (
            self.enabled
            and self.account_non_expired
            and self.credentials_non_expired
            and self.is_account_usable(clock)
        )

    # ─── Storage boundary ───────────────────────────────────────

    def touch(self, clock: Clock) -> None:
        now = clock.now()
        if self.created_at is None:
            self.created_at = now
        self.updated_at = now

    def validate(self) -> None:
        """Raise ValidationError if the user is not fit to be persisted."""
        if not is_valid_email(self.email):
            raise InvalidEmailError(self.email)
        if not isinstance(self.role, UserRole):
            raise ValidationError(f"Unknown role: {self.role!r}", "role")
        if self.failed_login_attempts < 0:
            raise ValidationError(
                "Failed login attempts cannot be negative", "failed_login_attempts",
            )

    def __str__(self) -> str:
        return (
            f"User{{id={self.id}, email='{self.email}', "
            f"fullName='{self.full_name}', role={self.role.value}, "
            f"enabled={self.enabled}}}"
        )

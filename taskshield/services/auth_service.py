"""Auth Service — drives the user lockout state machine from login outcomes.

Invariants:
    - Password checking is NOT done here; callers report the outcome
    - A failure that crosses the lockout threshold emits USER_LOGIN_FAILED and USER_LOCKED
    - A success on an account that cannot authenticate raises AccountLockedError
      and leaves the stored user untouched
    - Only ADMIN-ranked actors may unlock another account

Design Decisions:
    - Lookup by email: it is the login identifier (User.username)
    - Unknown emails raise ResourceNotFoundError; masking them is the transport's job
"""

import logging

from taskshield.core.audit_event import AuditEvent, RESOURCE_USER
from taskshield.core.clock import Clock, SystemClock
from taskshield.core.domain_types import AuditAction, UserId, UserRole
from taskshield.core.errors import (
    AccountLockedError, PermissionDeniedError, ResourceNotFoundError,
)
from taskshield.core.repository_protocols import AuditLogRepository, UserRepository
from taskshield.core.user import User

logger = logging.getLogger(__name__)


class AuthService:
    """Application service for login bookkeeping."""

    def __init__(
        self,
        users: UserRepository,
        audit: AuditLogRepository,
        clock: Clock | None = None,
    ):
        self.users = users
        self.audit = audit
        self.clock = clock or SystemClock()

    async def record_login_failure(
        self, email: str, ip_address: str | None = None,
    ) -> User:
        user = await self._load_by_email(email)
        locked_now = user.increment_failed_login_attempts(self.clock)
        await self.users.save(user)

        await self._record(
            user, AuditAction.USER_LOGIN_FAILED,
            f"attempt={user.failed_login_attempts}", ip_address,
        )
        if locked_now:
            logger.warning(
                "Account locked after repeated login failures",
                extra={
                    "user_id": str(user.id),
                    "failed_attempts": user.failed_login_attempts,
                },
            )
            await self._record(
                user, AuditAction.USER_LOCKED,
                f"locked_until={user.locked_until.isoformat()}", ip_address,
            )
        return user

    async def record_login_success(
        self, email: str, ip_address: str | None = None,
    ) -> User:
        user = await self._load_by_email(email)
        if not user.can_authenticate(self.clock):
            locked_until = user.locked_until
            if locked_until is not None and locked_until <= self.clock.now():
                locked_until = None
            raise AccountLockedError(str(user.id), locked_until)

        user.record_successful_login(self.clock)
        await self.users.save(user)
        logger.info("Login recorded", extra={"user_id": str(user.id)})
        await self._record(user, AuditAction.USER_LOGIN, None, ip_address)
        return user

    async def unlock_account(self, user_id: UserId, actor_id: UserId) -> User:
        """Administrative unlock: clears the counter and any pending lock."""
        actor = await self.users.get(actor_id)
        if actor is None:
            raise ResourceNotFoundError("User", str(actor_id))
        if not actor.role.has_permission(UserRole.ADMIN):
            raise PermissionDeniedError(str(actor.id), str(user_id), RESOURCE_USER)

        user = await self.users.get(user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(user_id))
        user.reset_failed_login_attempts()
        await self.users.save(user)

        await self.audit.record(AuditEvent(
            action=AuditAction.USER_UNLOCKED,
            created_at=self.clock.now(),
            actor_id=actor.id,
            actor_email=actor.email,
            resource_type=RESOURCE_USER,
            resource_id=user.id,
        ))
        return user

    async def _load_by_email(self, email: str) -> User:
        user = await self.users.get_by_email(email)
        if user is None:
            raise ResourceNotFoundError("User", email)
        return user

    async def _record(
        self,
        user: User,
        action: AuditAction,
        details: str | None,
        ip_address: str | None,
    ) -> None:
        await self.audit.record(AuditEvent(
            action=action,
            created_at=self.clock.now(),
            actor_id=user.id,
            actor_email=user.email,
            resource_type=RESOURCE_USER,
            resource_id=user.id,
            details=details,
            ip_address=ip_address,
        ))


def create_auth_service(db, clock: Clock | None = None) -> AuthService:
    """Wire an AuthService over SQL repositories sharing one AsyncSession."""
    from taskshield.infrastructure.audit_repository import SqlAuditLogRepository
    from taskshield.infrastructure.user_repository import SqlUserRepository

    clock = clock or SystemClock()
    return AuthService(
        users=SqlUserRepository(db, clock),
        audit=SqlAuditLogRepository(db),
        clock=clock,
    )

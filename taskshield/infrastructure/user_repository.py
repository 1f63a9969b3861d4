"""SQL User Repository — SQLAlchemy implementation of core.UserRepository.

Invariants:
    - save() runs user.validate() first, then user.touch(clock); nothing is written on failure
    - Email uniqueness checked before insert/update (ValidationError, not IntegrityError)
    - Each save() commits: one entity, one transaction

Design Decisions:
    - Repository owns the clock for touch(): entities never read time on their own
    - Lookups by email are exact-match; normalization is the caller's job
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskshield.core.clock import Clock, SystemClock
from taskshield.core.domain_types import UserId
from taskshield.core.errors import ValidationError
from taskshield.core.user import User
from taskshield.models.user import UserRow

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """User persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession, clock: Clock | None = None):
        self.db = db
        self.clock = clock or SystemClock()

    async def get(self, user_id: UserId) -> User | None:
        row = await self.db.get(UserRow, user_id)
        return row.to_domain() if row else None

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(UserRow).where(UserRow.email == email),
        )
        row = result.scalar_one_or_none()
        return row.to_domain() if row else None

    async def exists_by_email(
        self, email: str, exclude_id: UserId | None = None,
    ) -> bool:
        query = select(func.count()).select_from(UserRow).where(
            UserRow.email == email,
        )
        if exclude_id is not None:
            query = query.where(UserRow.id != exclude_id)
        result = await self.db.execute(query)
        return result.scalar_one() > 0

    async def save(self, user: User) -> User:
        user.validate()
        if await self.exists_by_email(user.email, exclude_id=user.id):
            raise ValidationError(f"Email already registered: {user.email}", "email")
        user.touch(self.clock)

        row = await self.db.get(UserRow, user.id)
        if row is None:
            row = UserRow()
            self.db.add(row)
        row.apply(user)
        await self.db.commit()
        logger.debug("User saved", extra={"user_id": str(user.id)})
        return user

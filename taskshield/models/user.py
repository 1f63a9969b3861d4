"""User ORM — persists identity, role, account flags, and lockout state.

Invariants:
    - id is UUID primary key (same value as the domain UserId)
    - email is unique and indexed
    - role stored as the UserRole value string
    - Rows are converted to core.user.User before leaving the infrastructure layer

Design Decisions:
    - to_domain()/apply() on the row: mapping lives next to the columns it maps
    - No relationship() to tasks: tasks reference users by id only
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from taskshield.core.domain_types import UserId, UserRole
from taskshield.core.user import User
from taskshield.db.base import Base
from taskshield.models._time import as_utc, to_utc


class UserRow(Base):
    """User table row."""
    __tablename__ = "users"
    __table_args__ = (
        Index("idx_user_role", "role"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.USER.value,
    )
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    account_non_expired: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    account_non_locked: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    credentials_non_expired: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    failed_login_attempts: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    locked_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    def to_domain(self) -> User:
        return User(
            id=UserId(self.id),
            email=self.email,
            password_hash=self.password_hash,
            first_name=self.first_name,
            last_name=self.last_name,
            role=UserRole(self.role),
            enabled=self.enabled,
            account_non_expired=self.account_non_expired,
            account_non_locked=self.account_non_locked,
            credentials_non_expired=self.credentials_non_expired,
            failed_login_attempts=self.failed_login_attempts,
            locked_until=as_utc(self.locked_until),
            created_at=as_utc(self.created_at),
            updated_at=as_utc(self.updated_at),
            last_login_at=as_utc(self.last_login_at),
        )

    def apply(self, user: User) -> None:
        """Copy every persisted field from the domain entity onto this row."""
        self.id = user.id
        self.email = user.email
        self.password_hash = user.password_hash
        self.first_name = user.first_name
        self.last_name = user.last_name
        self.role = user.role.value
        self.enabled = user.enabled
        self.account_non_expired = user.account_non_expired
        self.account_non_locked = user.account_non_locked
        self.credentials_non_expired = user.credentials_non_expired
        self.failed_login_attempts = user.failed_login_attempts
        self.locked_until = to_utc(user.locked_until)
        self.created_at = to_utc(user.created_at)
        self.updated_at = to_utc(user.updated_at)
        self.last_login_at = to_utc(user.last_login_at)

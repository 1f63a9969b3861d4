"""AuditLog ORM — append-only audit trail table.

Invariants:
    - Rows are inserted, never updated
    - user_id is nullable: system actions have no actor
    - Indexed on user_id, action, created_at (the audit query columns)

Design Decisions:
    - actor_email denormalized: descriptions survive user deletion
    - ip_address sized for IPv6 (45 chars)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from taskshield.core.audit_event import AuditEvent
from taskshield.core.domain_types import AuditAction, AuditLogId, UserId
from taskshield.db.base import Base
from taskshield.models._time import as_utc, to_utc


class AuditLogRow(Base):
    """AuditLog table row."""
    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("idx_audit_user", "user_id"),
        Index("idx_audit_action", "action"),
        Index("idx_audit_created", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=True,
    )
    actor_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    action: Mapped[str] = mapped_column(String(100), nullable=False)
    resource_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    resource_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @classmethod
    def from_domain(cls, event: AuditEvent) -> "AuditLogRow":
        return cls(
            id=event.id,
            user_id=event.actor_id,
            actor_email=event.actor_email,
            action=event.action.value,
            resource_type=event.resource_type,
            resource_id=event.resource_id,
            ip_address=event.ip_address,
            user_agent=event.user_agent,
            details=event.details,
            created_at=to_utc(event.created_at),
        )

    def to_domain(self) -> AuditEvent:
        return AuditEvent(
            id=AuditLogId(self.id),
            action=AuditAction(self.action),
            created_at=as_utc(self.created_at),
            actor_id=UserId(self.user_id) if self.user_id else None,
            actor_email=self.actor_email,
            resource_type=self.resource_type,
            resource_id=self.resource_id,
            details=self.details,
            ip_address=self.ip_address,
            user_agent=self.user_agent,
        )

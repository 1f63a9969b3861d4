"""SQL AuditLog Repository — SQLAlchemy implementation of core.AuditLogRepository.

Invariants:
    - record() only inserts; audit rows are never updated
    - Query results ordered newest-first

Design Decisions:
    - record() commits on its own: an audit entry must not depend on a later commit
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskshield.core.audit_event import AuditEvent
from taskshield.core.domain_types import AuditAction, UserId
from taskshield.models._time import to_utc
from taskshield.models.audit_log import AuditLogRow

logger = logging.getLogger(__name__)


class SqlAuditLogRepository:
    """Audit trail sink over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(self, event: AuditEvent) -> None:
        self.db.add(AuditLogRow.from_domain(event))
        await self.db.commit()
        logger.info(
            f"Audit: {event.action.value}",
            extra={
                "action": event.action.value,
                "user_id": str(event.actor_id) if event.actor_id else None,
            },
        )

    async def find_by_resource(
        self, resource_type: str, resource_id: UUID,
    ) -> list[AuditEvent]:
        result = await self.db.execute(
            select(AuditLogRow)
            .where(AuditLogRow.resource_type == resource_type)
            .where(AuditLogRow.resource_id == resource_id)
            .order_by(AuditLogRow.created_at.desc()),
        )
        return [row.to_domain() for row in result.scalars().all()]

    async def find_failed_logins(
        self, user_id: UserId, since: datetime,
    ) -> list[AuditEvent]:
        result = await self.db.execute(
            select(AuditLogRow)
            .where(AuditLogRow.user_id == user_id)
            .where(AuditLogRow.action == AuditAction.USER_LOGIN_FAILED.value)
            .where(AuditLogRow.created_at >= to_utc(since))
            .order_by(AuditLogRow.created_at.desc()),
        )
        return [row.to_domain() for row in result.scalars().all()]

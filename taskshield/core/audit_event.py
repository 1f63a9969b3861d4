"""Audit Event — structured record of who did what to which resource.

Invariants:
    - AuditEvent is immutable once built
    - The core never emits events; services build them around successful mutations
    - describe_audit_event is PURE string building, no IO

Design Decisions:
    - Actor email denormalized onto the event: the description must not need a user lookup
    - created_at required at construction: the caller's clock decides the timestamp
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from taskshield.core.domain_types import AuditAction, AuditLogId, UserId


RESOURCE_TASK = "Task"
RESOURCE_USER = "User"


@dataclass(frozen=True)
class AuditEvent:
    """One audit trail entry."""
    action: AuditAction
    created_at: datetime
    actor_id: UserId | None = None
    actor_email: str | None = None
    resource_type: str | None = None
    resource_id: UUID | None = None
    details: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    id: AuditLogId = field(default_factory=lambda: AuditLogId(uuid4()))


def describe_audit_event(event: AuditEvent) -> str:
    """Human-readable one-line description of an audit event."""
    parts = []
    if event.actor_email is not None:
        parts.append(f"User: {event.actor_email} ")
    else:
        parts.append("System ")

    action = event.action.value if isinstance(event.action, AuditAction) else event.action
    parts.append(f"performed action: {action}")

    if event.resource_type is not None:
        parts.append(f" on {event.resource_type}")
        if event.resource_id is not None:
            parts.append(f" (ID: {event.resource_id})")

    parts.append(f" at {event.created_at.isoformat()}")

    if event.ip_address is not None:
        parts.append(f" from IP: {event.ip_address}")

    return "".join(parts)

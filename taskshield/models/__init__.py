"""ORM Models — SQLAlchemy declarative rows for users, tasks, and the audit trail.

Invariants:
    - All models inherit from Base (db/base.py)
    - Rows never leave infrastructure/: repositories convert them to core dataclasses

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from taskshield.models.user import UserRow  # noqa: F401
from taskshield.models.task import TaskRow  # noqa: F401
from taskshield.models.audit_log import AuditLogRow  # noqa: F401

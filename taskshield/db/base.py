"""SQLAlchemy Declarative Base — shared base class for users, tasks, audit_logs.

Invariants:
    - All rows inherit from Base
    - Base.metadata is the single source of truth for alembic autogenerate

Design Decisions:
    - Explicit naming convention: constraint names stay stable across SQLite and PostgreSQL
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all TaskShield ORM rows."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)

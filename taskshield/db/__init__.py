"""Declarative base shared by every ORM row and by alembic autogenerate."""

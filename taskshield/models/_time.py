"""Timestamp normalization shared by the ORM mappers.

SQLite drops tzinfo on DateTime(timezone=True) columns; PostgreSQL keeps it.
Values are converted to UTC on write so the stored wall-clock time is the UTC
instant, and labelled UTC again on read.
"""

from datetime import datetime, timezone


def to_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)

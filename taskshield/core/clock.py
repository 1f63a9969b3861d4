"""Clock — the single source of "now" for every time-dependent rule.

Invariants:
    - All timestamps are timezone-aware UTC
    - Core code receives a Clock argument; it never calls datetime.now() itself

Design Decisions:
    - Protocol over ABC: any object with now() works (ADR: structural subtyping)
    - FixedClock lives here, not in tests: scripts and replays need it too
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Structural contract for wall-clock sources."""
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock backed by datetime.now(timezone.utc)."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass
class FixedClock:
    """Manually advanced clock for deterministic lockout and overdue checks."""

    current: datetime = field(
        default_factory=lambda: datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
    )

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current = self.current + delta

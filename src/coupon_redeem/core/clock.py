"""Clock abstraction and calendar-day window math.

Business logic never reads wall-clock time directly; it asks a ``Clock``.
Day boundaries are computed in one declared reference timezone
(``Settings.redemption_timezone``) and handed to storage as UTC.
"""

from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Protocol


class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock pinned to one instant; ``advance`` moves it forward."""

    def __init__(self, instant: datetime):
        self._instant = ensure_aware(instant)

    def now(self) -> datetime:
        return self._instant

    def advance(self, delta: timedelta) -> None:
        self._instant = self._instant + delta


def ensure_aware(value: datetime) -> datetime:
    """Interpret naive datetimes (as read back from SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def day_window(now: datetime, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the half-open ``[start, end)`` calendar day containing ``now``.

    @param now - Reference instant (aware)
    @param tz - Timezone whose calendar defines the day
    @returns Local midnight and next local midnight, both in UTC
    """
    local_date = ensure_aware(now).astimezone(tz).date()
    start = datetime.combine(local_date, time.min, tzinfo=tz)
    end = datetime.combine(local_date + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)

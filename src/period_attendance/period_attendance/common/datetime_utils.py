from __future__ import annotations

from datetime import date, datetime, time
from typing import Union

DateLike = Union[date, datetime, str]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def as_day(value: DateLike) -> date:
    """Normalize a date, datetime or ISO string to a calendar day.

    Time-of-day and timezone are dropped so every comparison happens on the
    same day-granular calendar.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value)[:10])


def minutes_since_midnight(value: Union[time, datetime]) -> int:
    return value.hour * 60 + value.minute


def iso_week_id(day: date) -> str:
    """ISO-8601 week identifier, e.g. ``2026-W03``.

    The year is the ISO year, i.e. the year of that week's Thursday.
    """
    iso_year, iso_week, _ = day.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def now_local() -> datetime:
    """Current local time.

    Services take ``now`` as a parameter and fall back to this.
    """
    return datetime.now()

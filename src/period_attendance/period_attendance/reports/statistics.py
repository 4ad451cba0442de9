"""Fold resolved cells over a date range into minute totals and percentages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Iterator, Mapping, Optional, Sequence

from ..absences.model import AbsenceRange
from ..attendance.model import DayAttendance, was_held
from ..attendance.resolver import resolve_status
from ..common.datetime_utils import DateLike, as_day, iso_week_id
from ..core.constants import NOT_AVAILABLE
from ..core.enums import AttendanceStatus
from ..periods.model import Period, ScheduleOverride
from ..periods.schedule import effective_periods, is_active, is_past, order_periods
from .calculator.base import HeldCell, MinutesCalculator
from .calculator.summary_calculator import SummaryMinutesCalculator
from .calculator.weekly_calculator import WeeklyMinutesCalculator


def format_percentage(attended: int, possible: int) -> str:
    """One decimal, exact halves rounded up (56.25 -> "56.3")."""
    if possible <= 0:
        return NOT_AVAILABLE
    value = Decimal(int(attended) * 100) / Decimal(int(possible))
    return str(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass
class MinuteTotals:
    possible: int = 0
    attended: int = 0

    def add(self, possible: int, attended: int) -> None:
        self.possible += possible
        self.attended += attended

    @property
    def percentage(self) -> str:
        return format_percentage(self.attended, self.possible)


@dataclass(frozen=True)
class SummaryStats:
    present_percentage: str
    total_minutes_late: int
    possible_minutes: int
    attended_minutes: int
    per_period: dict[str, MinuteTotals] = field(default_factory=dict)


@dataclass(frozen=True)
class WeeklyPoint:
    week: str
    possible_minutes: int
    attended_minutes: int

    @property
    def percentage(self) -> float:
        return self.attended_minutes / self.possible_minutes * 100


def dates_in_range(
    attendance_by_date: Mapping[DateLike, DayAttendance],
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[tuple[date, DayAttendance]]:
    """Dates present in the data within inclusive bounds, oldest first."""
    out: list[tuple[date, DayAttendance]] = []
    for key, day in attendance_by_date.items():
        d = as_day(key)
        if start and d < start:
            continue
        if end and d > end:
            continue
        out.append((d, day or {}))
    out.sort(key=lambda x: x[0])
    return out


def _held_cells(
    person_id: str,
    on: date,
    day: DayAttendance,
    ordered: Sequence[Period],
    overrides: Sequence[ScheduleOverride],
    absences: Sequence[AbsenceRange],
    now: datetime,
) -> Iterator[tuple[str, HeldCell]]:
    for period in effective_periods(ordered, overrides, on):
        if not was_held(day, period.period_id):
            continue
        cell = resolve_status(
            person_id=person_id,
            period=period,
            on=on,
            day=day,
            periods=ordered,
            absences=absences,
            now=now,
        )
        yield period.period_id, HeldCell(
            cell=cell,
            duration_minutes=period.duration_minutes,
            is_past=is_past(period, on, now),
            is_active=is_active(period, on, now),
        )


def summary_stats(
    person_id: str,
    attendance_by_date: Mapping[DateLike, DayAttendance],
    periods: Iterable[Period],
    overrides: Iterable[ScheduleOverride],
    absences: Iterable[AbsenceRange],
    *,
    now: datetime,
    start: Optional[date] = None,
    end: Optional[date] = None,
    calculator: Optional[MinutesCalculator] = None,
) -> SummaryStats:
    calculator = calculator or SummaryMinutesCalculator()
    ordered = order_periods(periods)
    overrides = list(overrides)
    absences = list(absences)

    total = MinuteTotals()
    per_period = {p.period_id: MinuteTotals() for p in ordered}
    minutes_late = 0

    for on, day in dates_in_range(attendance_by_date, start=start, end=end):
        for period_id, held in _held_cells(person_id, on, day, ordered, overrides, absences, now):
            credit = calculator.credit(held)
            total.add(credit.possible, credit.attended)
            per_period[period_id].add(credit.possible, credit.attended)

        # Late minutes come from the raw records, held or not.
        for record in (day.get(person_id) or {}).values():
            if record.status == AttendanceStatus.LATE:
                minutes_late += int(record.minutes_late or 0)

    return SummaryStats(
        present_percentage=total.percentage,
        total_minutes_late=minutes_late,
        possible_minutes=total.possible,
        attended_minutes=total.attended,
        per_period=per_period,
    )


def weekly_trend(
    person_id: str,
    attendance_by_date: Mapping[DateLike, DayAttendance],
    periods: Iterable[Period],
    overrides: Iterable[ScheduleOverride],
    absences: Iterable[AbsenceRange],
    *,
    now: datetime,
    start: Optional[date] = None,
    end: Optional[date] = None,
    calculator: Optional[MinutesCalculator] = None,
) -> list[WeeklyPoint]:
    """Per ISO week attendance, oldest week first; weeks with nothing possible are dropped."""
    calculator = calculator or WeeklyMinutesCalculator()
    ordered = order_periods(periods)
    overrides = list(overrides)
    absences = list(absences)

    weeks: dict[str, MinuteTotals] = {}
    for on, day in dates_in_range(attendance_by_date, start=start, end=end):
        bucket = weeks.setdefault(iso_week_id(on), MinuteTotals())
        for _, held in _held_cells(person_id, on, day, ordered, overrides, absences, now):
            credit = calculator.credit(held)
            bucket.add(credit.possible, credit.attended)

    return [
        WeeklyPoint(week=week, possible_minutes=t.possible, attended_minutes=t.attended)
        for week, t in sorted(weeks.items())
        if t.possible > 0
    ]

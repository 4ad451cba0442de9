from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..absences.repository import AbsenceRepository
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.constants import LOW_PERCENTAGE, MEDIUM_PERCENTAGE, NOT_AVAILABLE
from ..core.enums import PersonRole, ReportPreset
from ..core.exceptions import ValidationError
from ..people.model import Person
from ..people.repository import PersonRepository
from ..periods.repository import OverrideRepository, PeriodRepository
from .statistics import SummaryStats, WeeklyPoint, summary_stats, weekly_trend


@dataclass(frozen=True)
class PersonReport:
    person: Person
    start: Optional[date]
    end: Optional[date]
    summary: SummaryStats
    weekly: list[WeeklyPoint]


@dataclass(frozen=True)
class DashboardRow:
    person: Person
    summary: SummaryStats
    band: Optional[str]


@dataclass(frozen=True)
class Dashboard:
    start: Optional[date]
    end: Optional[date]
    students: list[DashboardRow]
    staff: list[DashboardRow]


def preset_range(preset: ReportPreset, today: date) -> tuple[Optional[date], Optional[date]]:
    """``week`` starts on the most recent Sunday, ``month`` on the 1st; ``all`` is unbounded."""
    preset = ReportPreset(preset)
    if preset == ReportPreset.WEEK:
        return today - timedelta(days=(today.weekday() + 1) % 7), today
    if preset == ReportPreset.MONTH:
        return today.replace(day=1), today
    return None, None


def percentage_band(percentage: str) -> Optional[str]:
    if percentage == NOT_AVAILABLE:
        return None
    try:
        value = float(percentage)
    except (TypeError, ValueError):
        return None
    if value < LOW_PERCENTAGE:
        return "low"
    if value < MEDIUM_PERCENTAGE:
        return "medium"
    return "high"


class ReportService:
    """Use case: attendance percentages and weekly trends per person."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        periods: PeriodRepository,
        overrides: OverrideRepository,
        absences: AbsenceRepository,
        people: PersonRepository,
    ):
        self._attendance = attendance
        self._periods = periods
        self._overrides = overrides
        self._absences = absences
        self._people = people

    def _inputs(self):
        return (
            self._attendance.get_all(),
            list(self._periods.list_all()),
            list(self._overrides.list_all()),
            list(self._absences.list_all()),
        )

    def person_report(
        self,
        *,
        person_id: str,
        preset: ReportPreset = ReportPreset.ALL,
        start: Optional[date] = None,
        end: Optional[date] = None,
        now: datetime | None = None,
    ) -> PersonReport:
        now = now or now_local()
        person = self._people.get_by_id(person_id)
        if not person:
            raise ValidationError("Person not found")

        if start is None and end is None:
            start, end = preset_range(preset, now.date())

        data, periods, overrides, absences = self._inputs()
        summary = summary_stats(person_id, data, periods, overrides, absences, now=now, start=start, end=end)
        weekly = weekly_trend(person_id, data, periods, overrides, absences, now=now, start=start, end=end)
        return PersonReport(person=person, start=start, end=end, summary=summary, weekly=weekly)

    def dashboard(self, *, preset: ReportPreset = ReportPreset.ALL, now: datetime | None = None) -> Dashboard:
        now = now or now_local()
        start, end = preset_range(preset, now.date())
        data, periods, overrides, absences = self._inputs()

        students: list[DashboardRow] = []
        staff: list[DashboardRow] = []
        people = sorted(self._people.list_all(), key=lambda p: (p.last_name.lower(), p.first_name.lower()))
        for person in people:
            summary = summary_stats(person.person_id, data, periods, overrides, absences, now=now, start=start, end=end)
            row = DashboardRow(person=person, summary=summary, band=percentage_band(summary.present_percentage))
            (students if person.role == PersonRole.STUDENT else staff).append(row)

        return Dashboard(start=start, end=end, students=students, staff=staff)

from __future__ import annotations

import logging
from dataclasses import dataclass

from .absences.mysql_absence_repository import MySQLAbsenceRepository
from .absences.repository import AbsenceRepository
from .absences.service import AbsenceGroupCoordinator, AbsenceService
from .attendance.factory import LatenessStrategyFactory
from .attendance.history import MutationHistory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import MAX_MINUTES_LATE
from .database.connection import DBConfig, DatabaseConnection
from .notes.mysql_note_repository import MySQLNoteRepository
from .notes.repository import NoteRepository
from .notes.service import NoteService
from .people.mysql_person_repository import MySQLPersonRepository
from .people.repository import PersonRepository
from .people.service import RosterService
from .periods.mysql_period_repository import MySQLOverrideRepository, MySQLPeriodRepository
from .periods.repository import OverrideRepository, PeriodRepository
from .periods.service import PeriodService
from .reports.service import ReportService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    people_repo: PersonRepository
    periods_repo: PeriodRepository
    overrides_repo: OverrideRepository
    attendance_repo: AttendanceRepository
    absences_repo: AbsenceRepository
    notes_repo: NoteRepository

    roster_service: RosterService
    period_service: PeriodService
    attendance_service: AttendanceService
    absence_service: AbsenceService
    group_absence_service: AbsenceGroupCoordinator
    note_service: NoteService
    report_service: ReportService


def assemble(
    *,
    people_repo: PersonRepository,
    periods_repo: PeriodRepository,
    overrides_repo: OverrideRepository,
    attendance_repo: AttendanceRepository,
    absences_repo: AbsenceRepository,
    notes_repo: NoteRepository,
    max_minutes_late: int = MAX_MINUTES_LATE,
) -> Container:
    """Wire services over any set of repositories."""
    absence_service = AbsenceService(absences_repo, periods_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        periods_repo,
        overrides_repo,
        absences_repo,
        people_repo,
        history=MutationHistory(),
        strategy_factory=LatenessStrategyFactory(),
        max_minutes_late=max_minutes_late,
    )

    return Container(
        people_repo=people_repo,
        periods_repo=periods_repo,
        overrides_repo=overrides_repo,
        attendance_repo=attendance_repo,
        absences_repo=absences_repo,
        notes_repo=notes_repo,
        roster_service=RosterService(people_repo),
        period_service=PeriodService(periods_repo, overrides_repo),
        attendance_service=attendance_service,
        absence_service=absence_service,
        group_absence_service=AbsenceGroupCoordinator(absences_repo, absence_service),
        note_service=NoteService(notes_repo),
        report_service=ReportService(attendance_repo, periods_repo, overrides_repo, absences_repo, people_repo),
    )


def build_container(*, db_config: dict, max_minutes_late: int = MAX_MINUTES_LATE) -> Container:
    config = DBConfig.from_settings(db_config)
    conn = DatabaseConnection.get_instance(config)
    logger.info("Using database %s", config.describe())

    return assemble(
        people_repo=MySQLPersonRepository(conn),
        periods_repo=MySQLPeriodRepository(conn),
        overrides_repo=MySQLOverrideRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        absences_repo=MySQLAbsenceRepository(conn),
        notes_repo=MySQLNoteRepository(conn),
        max_minutes_late=max_minutes_late,
    )

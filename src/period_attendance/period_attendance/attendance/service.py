from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..absences.matcher import is_person_marked_out
from ..absences.repository import AbsenceRepository
from ..common.datetime_utils import now_local
from ..core.constants import MAX_MINUTES_LATE
from ..core.enums import AttendanceStatus
from ..core.exceptions import StoreError, ValidationError
from ..people.repository import PersonRepository
from ..periods.model import EffectivePeriod
from ..periods.repository import OverrideRepository, PeriodRepository
from ..periods.schedule import active_period, effective_periods, is_active, is_past, order_periods
from .factory import LatenessStrategyFactory
from .history import MutationHistory
from .model import AttendanceRecord, CellStatus, GridCell
from .repository import AttendanceRepository
from .resolver import resolve_status

logger = logging.getLogger(__name__)

WRITABLE_STATUSES = frozenset(
    {
        AttendanceStatus.ON_TIME,
        AttendanceStatus.LATE,
        AttendanceStatus.EXCUSED,
        AttendanceStatus.ABSENT,
        AttendanceStatus.NOT_MARKED,
    }
)


@dataclass(frozen=True)
class DayGrid:
    on: date
    periods: list[EffectivePeriod]
    active_period_id: Optional[str]
    cells: list[GridCell]
    can_undo: bool
    can_redo: bool


class AttendanceService:
    """Use case: mark cells for the viewed date, with undo/redo history."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        periods: PeriodRepository,
        overrides: OverrideRepository,
        absences: AbsenceRepository,
        people: PersonRepository,
        *,
        history: MutationHistory | None = None,
        strategy_factory: LatenessStrategyFactory | None = None,
        max_minutes_late: int = MAX_MINUTES_LATE,
    ):
        self._attendance = attendance
        self._periods = periods
        self._overrides = overrides
        self._absences = absences
        self._people = people
        self._history = history or MutationHistory()
        self._factory = strategy_factory or LatenessStrategyFactory()
        self._max_minutes_late = int(max_minutes_late)

    @property
    def history(self) -> MutationHistory:
        return self._history

    def view(self, on: date) -> None:
        """Change the viewed date; undo/redo never span dates."""
        if self._history.viewed_date == on:
            return
        logger.debug("Viewing %s, history cleared", on.isoformat())
        self._history.view(on)

    def _day_periods(self, on: date):
        ordered = order_periods(self._periods.list_all())
        return ordered, effective_periods(ordered, self._overrides.list_all(), on)

    def _clamp(self, minutes: int) -> int:
        return max(0, min(int(minutes), self._max_minutes_late))

    def cell_status(self, *, on: date, person_id: str, period_id: str, now: datetime | None = None) -> CellStatus:
        now = now or now_local()
        ordered, day_periods = self._day_periods(on)
        period = next((p for p in day_periods if p.period_id == period_id), None)
        if period is None:
            return CellStatus(status=AttendanceStatus.NOT_MARKED)
        return resolve_status(
            person_id=person_id,
            period=period,
            on=on,
            day=self._attendance.get_day(on),
            periods=ordered,
            absences=self._absences.list_all(),
            now=now,
        )

    def mark(
        self,
        *,
        on: date,
        person_id: str,
        period_id: str,
        status: AttendanceStatus,
        note: Optional[str] = None,
        minutes_late: int = 0,
        now: datetime | None = None,
    ) -> Optional[CellStatus]:
        """Write one cell. Returns None when the person is out on an absence range."""
        now = now or now_local()
        status = AttendanceStatus(status)
        if status not in WRITABLE_STATUSES:
            raise ValidationError(f"Status '{status.value}' cannot be written")

        self.view(on)
        ordered, day_periods = self._day_periods(on)
        period = next((p for p in day_periods if p.period_id == period_id), None)
        if period is None:
            raise ValidationError("Class period not found")

        if is_person_marked_out(person_id, on, period_id, ordered, self._absences.list_all()):
            logger.info("Ignored %s for %s/%s on %s: covered by an absence", status.value, person_id, period_id, on)
            return None

        before = self._attendance.get_day(on)

        try:
            if status == AttendanceStatus.NOT_MARKED:
                self._attendance.delete_cell(on=on, person_id=person_id, period_id=period_id)
                result = CellStatus(status=AttendanceStatus.NOT_MARKED)
            else:
                record = self._build_record(status=status, period=period, on=on, note=note, minutes_late=minutes_late, now=now)
                self._attendance.upsert_cell(on=on, person_id=person_id, period_id=period_id, record=record)
                result = CellStatus.from_record(record)
        except StoreError:
            logger.error("Could not save %s for %s/%s on %s", status.value, person_id, period_id, on)
            raise

        self._history.record(before)
        logger.info("Marked %s/%s on %s as %s", person_id, period_id, on, result.status.value)
        return result

    def _build_record(
        self,
        *,
        status: AttendanceStatus,
        period: EffectivePeriod,
        on: date,
        note: Optional[str],
        minutes_late: int,
        now: datetime,
    ) -> AttendanceRecord:
        minutes = 0
        if status == AttendanceStatus.LATE:
            minutes = int(minutes_late or 0)
            if minutes == 0:
                strategy = self._factory.for_mark(on=on, now=now)
                minutes = strategy.minutes_late(period=period, on=on, now=now)
            minutes = self._clamp(minutes)

        return AttendanceRecord(
            status=status,
            minutes_late=minutes,
            note=note if status == AttendanceStatus.EXCUSED else None,
            timestamp=now,
        )

    def toggle(
        self,
        *,
        on: date,
        person_id: str,
        period_id: str,
        status: AttendanceStatus,
        note: Optional[str] = None,
        now: datetime | None = None,
    ) -> Optional[CellStatus]:
        """Status click: choosing the status a cell already has clears it."""
        now = now or now_local()
        status = AttendanceStatus(status)
        current = self.cell_status(on=on, person_id=person_id, period_id=period_id, now=now)
        target = AttendanceStatus.NOT_MARKED if current.status == status else status
        if target == AttendanceStatus.EXCUSED and note is None:
            note = current.note
        return self.mark(on=on, person_id=person_id, period_id=period_id, status=target, note=note, now=now)

    def unmark_period(self, *, on: date, period_id: str) -> int:
        """Clear every explicit record of one period on one date, as one undoable step."""
        self.view(on)
        before = self._attendance.get_day(on)
        try:
            removed = self._attendance.delete_period(on=on, period_id=period_id)
        except StoreError:
            logger.error("Could not unmark period %s on %s", period_id, on)
            raise
        self._history.record(before)
        logger.info("Unmarked %d records of period %s on %s", removed, period_id, on)
        return removed

    def undo(self, *, on: date) -> bool:
        self.view(on)
        target = self._history.peek_undo()
        if target is None:
            return False
        current = self._attendance.get_day(on)
        self._attendance.overwrite_day(on=on, day=target)
        self._history.undo(current)
        logger.info("Undo on %s", on)
        return True

    def redo(self, *, on: date) -> bool:
        self.view(on)
        target = self._history.peek_redo()
        if target is None:
            return False
        current = self._attendance.get_day(on)
        self._attendance.overwrite_day(on=on, day=target)
        self._history.redo(current)
        logger.info("Redo on %s", on)
        return True

    def day_grid(self, *, on: date, now: datetime | None = None, person_ids: Sequence[str] | None = None) -> DayGrid:
        now = now or now_local()
        ordered, day_periods = self._day_periods(on)
        day = self._attendance.get_day(on)
        absences = list(self._absences.list_all())
        if person_ids is None:
            person_ids = [p.person_id for p in self._people.list_all()]

        cells: list[GridCell] = []
        for person_id in person_ids:
            for period in day_periods:
                cell = resolve_status(
                    person_id=person_id,
                    period=period,
                    on=on,
                    day=day,
                    periods=ordered,
                    absences=absences,
                    now=now,
                )
                cells.append(
                    GridCell(
                        person_id=person_id,
                        period_id=period.period_id,
                        cell=cell,
                        is_past=is_past(period, on, now),
                        is_active=is_active(period, on, now),
                    )
                )

        active = active_period(day_periods, now, on)
        return DayGrid(
            on=on,
            periods=day_periods,
            active_period_id=active.period_id if active else None,
            cells=cells,
            can_undo=self._history.viewed_date == on and self._history.can_undo,
            can_redo=self._history.viewed_date == on and self._history.can_redo,
        )

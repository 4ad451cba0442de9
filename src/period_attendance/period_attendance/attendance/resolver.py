from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Sequence

from ..absences.matcher import find_covering_range
from ..absences.model import AbsenceRange
from ..core.constants import DEFAULT_EXCUSED_NOTE
from ..core.enums import AttendanceStatus
from ..periods.model import EffectivePeriod, Period
from ..periods.schedule import is_past
from .model import CellStatus, DayAttendance, was_held


def resolve_status(
    *,
    person_id: str,
    period: EffectivePeriod,
    on: date,
    day: DayAttendance,
    periods: Sequence[Period],
    absences: Iterable[AbsenceRange],
    now: datetime,
) -> CellStatus:
    """Authoritative status of one cell; first matching rule wins.

    1. covered by an absence range -> Excused with the range note
    2. explicit record -> the record
    3. past period -> Unmarked (sentinel note when others were marked)
    4. otherwise -> Not Marked
    """
    covering = find_covering_range(person_id, on, period.period_id, periods, absences)
    if covering is not None:
        return CellStatus(status=AttendanceStatus.EXCUSED, note=covering.note, is_range_excuse=True)

    record = day.get(person_id, {}).get(period.period_id)
    if record is not None:
        return CellStatus.from_record(record)

    if is_past(period, on, now):
        if not was_held(day, period.period_id):
            return CellStatus(status=AttendanceStatus.UNMARKED)
        return CellStatus(status=AttendanceStatus.UNMARKED, note=DEFAULT_EXCUSED_NOTE)

    return CellStatus(status=AttendanceStatus.NOT_MARKED)

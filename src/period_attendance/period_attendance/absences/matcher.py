from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import DateLike, as_day
from ..periods.model import Period
from ..periods.schedule import period_index
from .model import AbsenceRange


def covers(record: AbsenceRange, *, on: DateLike, target_index: int, periods: Sequence[Period]) -> bool:
    """Whether ``record`` excuses the period at ``target_index`` on ``on``."""
    day = as_day(on)
    start = as_day(record.start_date)
    end = as_day(record.end_date)
    if day < start or day > end:
        return False

    start_index = period_index(periods, record.start_period_id)
    end_index = period_index(periods, record.end_period_id)

    if start == end:
        return start_index <= target_index <= end_index
    if day == start:
        return target_index >= start_index
    if day == end:
        return target_index <= end_index
    return True


def find_covering_range(
    person_id: str,
    on: DateLike,
    period_id: str,
    periods: Sequence[Period],
    absences: Iterable[AbsenceRange],
) -> Optional[AbsenceRange]:
    """First absence range of ``person_id`` covering (on, period_id), if any.

    ``periods`` must be the sequence ordered by nominal start time.
    """
    target_index = period_index(periods, period_id)
    for record in absences:
        if record.person_id != person_id:
            continue
        if covers(record, on=on, target_index=target_index, periods=periods):
            return record
    return None


def is_person_marked_out(
    person_id: str,
    on: DateLike,
    period_id: str,
    periods: Sequence[Period],
    absences: Iterable[AbsenceRange],
) -> bool:
    return find_covering_range(person_id, on, period_id, periods, absences) is not None

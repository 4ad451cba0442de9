from __future__ import annotations

from datetime import date
from typing import Mapping, Protocol

from .model import AttendanceRecord, DayAttendance


class AttendanceRepository(Protocol):
    def get_day(self, on: date) -> DayAttendance:
        raise NotImplementedError

    def get_all(self) -> Mapping[date, DayAttendance]:
        raise NotImplementedError

    def upsert_cell(self, *, on: date, person_id: str, period_id: str, record: AttendanceRecord) -> None:
        raise NotImplementedError

    def delete_cell(self, *, on: date, person_id: str, period_id: str) -> bool:
        raise NotImplementedError

    def delete_period(self, *, on: date, period_id: str) -> int:
        """Remove every person's record for one period on one date."""

        raise NotImplementedError

    def overwrite_day(self, *, on: date, day: DayAttendance) -> None:
        """Replace the whole map of ``on`` (used by undo/redo)."""

        raise NotImplementedError

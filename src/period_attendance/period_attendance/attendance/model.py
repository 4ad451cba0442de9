from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Explicit mark for one (date, person, period) cell."""

    status: AttendanceStatus
    minutes_late: int = 0
    note: Optional[str] = None
    timestamp: Optional[datetime] = None


# person_id -> period_id -> record, for one date
DayAttendance = Dict[str, Dict[str, AttendanceRecord]]


def copy_day(day: DayAttendance) -> DayAttendance:
    """Independent copy of a day map (records themselves are immutable)."""
    return {person_id: dict(cells) for person_id, cells in day.items() if cells}


def was_held(day: DayAttendance, period_id: str) -> bool:
    """A period was held on a day when anyone has an explicit record for it."""
    return any(period_id in cells for cells in day.values())


@dataclass(frozen=True)
class CellStatus:
    """Resolved status of a cell, explicit or derived."""

    status: AttendanceStatus
    minutes_late: int = 0
    note: Optional[str] = None
    is_range_excuse: bool = False

    @classmethod
    def from_record(cls, record: AttendanceRecord) -> "CellStatus":
        return cls(status=record.status, minutes_late=int(record.minutes_late or 0), note=record.note)


@dataclass(frozen=True)
class GridCell:
    person_id: str
    period_id: str
    cell: CellStatus
    is_past: bool
    is_active: bool

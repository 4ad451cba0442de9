from __future__ import annotations

from datetime import date
from typing import Mapping

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord, DayAttendance
from .repository import AttendanceRepository

_COLUMNS = "attendance_date, person_id, period_id, status, minutes_late, note, recorded_at"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        status=AttendanceStatus(r["status"]),
        minutes_late=int(r.get("minutes_late") or 0),
        note=r.get("note"),
        timestamp=r.get("recorded_at"),
    )


def _fold(rows) -> dict[date, DayAttendance]:
    out: dict[date, DayAttendance] = {}
    for r in rows:
        day = out.setdefault(r["attendance_date"], {})
        day.setdefault(str(r["person_id"]), {})[str(r["period_id"])] = _row_to_record(r)
    return out


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_day(self, on: date) -> DayAttendance:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_cells WHERE attendance_date=%s", (on,))
            return _fold(fetchall(cur)).get(on, {})

    def get_all(self) -> Mapping[date, DayAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_cells ORDER BY attendance_date ASC")
            return _fold(fetchall(cur))

    def upsert_cell(self, *, on: date, person_id: str, period_id: str, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_cells(attendance_date, person_id, period_id, status, minutes_late, note, recorded_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status), minutes_late=VALUES(minutes_late),
                    note=VALUES(note), recorded_at=VALUES(recorded_at)
                """,
                (on, person_id, period_id, record.status.value, int(record.minutes_late), record.note, record.timestamp),
            )

    def delete_cell(self, *, on: date, person_id: str, period_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_cells WHERE attendance_date=%s AND person_id=%s AND period_id=%s",
                (on, person_id, period_id),
            )
            return cur.rowcount > 0

    def delete_period(self, *, on: date, period_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_cells WHERE attendance_date=%s AND period_id=%s",
                (on, period_id),
            )
            return int(cur.rowcount)

    def overwrite_day(self, *, on: date, day: DayAttendance) -> None:
        rows = [
            (on, person_id, period_id, r.status.value, int(r.minutes_late), r.note, r.timestamp)
            for person_id, cells in day.items()
            for period_id, r in cells.items()
        ]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_cells WHERE attendance_date=%s", (on,))
            if rows:
                cur.executemany(
                    f"INSERT INTO attendance_cells({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s)",
                    rows,
                )

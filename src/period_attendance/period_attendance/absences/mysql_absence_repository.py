from __future__ import annotations

from typing import Optional, Sequence

from ..common.ids import generate_id
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AbsenceDraft, AbsenceRange
from .repository import AbsenceRepository

_COLUMNS = "absence_id, person_id, group_id, start_date, end_date, start_period_id, end_period_id, note"


def _row_to_absence(r: dict) -> AbsenceRange:
    return AbsenceRange(
        absence_id=str(r["absence_id"]),
        person_id=str(r["person_id"]),
        group_id=r.get("group_id") or None,
        start_date=r["start_date"],
        end_date=r["end_date"],
        start_period_id=str(r["start_period_id"]),
        end_period_id=str(r["end_period_id"]),
        note=r.get("note") or "",
    )


class MySQLAbsenceRepository(AbsenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AbsenceRange]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM absence_ranges ORDER BY start_date DESC")
            return [_row_to_absence(r) for r in fetchall(cur)]

    def list_for_group(self, *, group_id: str) -> Sequence[AbsenceRange]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM absence_ranges WHERE group_id=%s", (group_id,))
            return [_row_to_absence(r) for r in fetchall(cur)]

    def create(self, *, person_id: str, draft: AbsenceDraft, group_id: Optional[str] = None) -> str:
        absence_id = generate_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO absence_ranges({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s)",
                (
                    absence_id,
                    person_id,
                    group_id,
                    draft.start_date,
                    draft.end_date,
                    draft.start_period_id,
                    draft.end_period_id,
                    draft.note,
                ),
            )
        return absence_id

    def update(self, *, absence_id: str, draft: AbsenceDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE absence_ranges
                SET start_date=%s, end_date=%s, start_period_id=%s, end_period_id=%s, note=%s
                WHERE absence_id=%s
                """,
                (draft.start_date, draft.end_date, draft.start_period_id, draft.end_period_id, draft.note, absence_id),
            )
            return cur.rowcount > 0

    def delete(self, *, absence_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM absence_ranges WHERE absence_id=%s", (absence_id,))
            return cur.rowcount > 0

    def replace_group(self, *, group_id: str, records: Sequence[AbsenceRange]) -> int:
        rows = [
            (
                r.absence_id,
                r.person_id,
                group_id,
                r.start_date,
                r.end_date,
                r.start_period_id,
                r.end_period_id,
                r.note,
            )
            for r in records
        ]
        # Single transaction: db_cursor rolls back both statements on failure.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM absence_ranges WHERE group_id=%s", (group_id,))
            removed = int(cur.rowcount)
            if rows:
                cur.executemany(f"INSERT INTO absence_ranges({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s)", rows)
            return removed

    def delete_group(self, *, group_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM absence_ranges WHERE group_id=%s", (group_id,))
            return int(cur.rowcount)

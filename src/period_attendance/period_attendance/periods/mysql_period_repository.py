from __future__ import annotations

from datetime import date, time
from typing import Sequence

from ..common.ids import generate_id
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import Period, ScheduleOverride
from .repository import OverrideRepository, PeriodRepository


class MySQLPeriodRepository(PeriodRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Period]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT period_id, name, start_time, duration_minutes FROM periods ORDER BY start_time ASC")
            return [
                Period(
                    period_id=str(r["period_id"]),
                    name=r["name"],
                    start_time=normalize_mysql_time(r["start_time"]),
                    duration_minutes=int(r["duration_minutes"]),
                )
                for r in fetchall(cur)
            ]

    def create(self, *, name: str, start_time: time, duration_minutes: int) -> str:
        period_id = generate_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO periods(period_id, name, start_time, duration_minutes) VALUES(%s,%s,%s,%s)",
                (period_id, name, start_time, int(duration_minutes)),
            )
        return period_id

    def update(self, *, period_id: str, name: str, start_time: time, duration_minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE periods SET name=%s, start_time=%s, duration_minutes=%s WHERE period_id=%s",
                (name, start_time, int(duration_minutes), period_id),
            )
            return cur.rowcount > 0

    def delete(self, *, period_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM periods WHERE period_id=%s", (period_id,))
            return cur.rowcount > 0


class MySQLOverrideRepository(OverrideRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ScheduleOverride]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT override_date, period_id, new_time FROM schedule_overrides")
            return [
                ScheduleOverride(
                    override_date=r["override_date"],
                    period_id=str(r["period_id"]),
                    new_time=normalize_mysql_time(r["new_time"]),
                )
                for r in fetchall(cur)
            ]

    def upsert(self, *, override_date: date, period_id: str, new_time: time) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedule_overrides(override_date, period_id, new_time)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE new_time=VALUES(new_time)
                """,
                (override_date, period_id, new_time),
            )

    def delete(self, *, override_date: date, period_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM schedule_overrides WHERE override_date=%s AND period_id=%s",
                (override_date, period_id),
            )
            return cur.rowcount > 0

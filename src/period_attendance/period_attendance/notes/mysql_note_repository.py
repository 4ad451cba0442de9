from __future__ import annotations

from typing import Mapping

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import NoteRepository


class MySQLNoteRepository(NoteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_all(self) -> Mapping[tuple[str, str], str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT person_id, period_id, note FROM persistent_notes")
            return {(str(r["person_id"]), str(r["period_id"])): r["note"] for r in fetchall(cur)}

    def upsert(self, *, person_id: str, period_id: str, note: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO persistent_notes(person_id, period_id, note)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE note=VALUES(note)
                """,
                (person_id, period_id, note),
            )

    def delete(self, *, person_id: str, period_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM persistent_notes WHERE person_id=%s AND period_id=%s", (person_id, period_id))
            return cur.rowcount > 0

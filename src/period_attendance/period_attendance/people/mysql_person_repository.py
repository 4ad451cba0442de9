from __future__ import annotations

from typing import Optional, Sequence

from ..common.ids import generate_id
from ..core.enums import PersonRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Person
from .repository import PersonRepository


def _row_to_person(r: dict) -> Person:
    return Person(
        person_id=str(r["person_id"]),
        first_name=r["first_name"],
        last_name=r.get("last_name") or "",
        role=PersonRole(r["role"]),
        email=r.get("email"),
    )


class MySQLPersonRepository(PersonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT person_id, first_name, last_name, role, email FROM people")
            return [_row_to_person(r) for r in fetchall(cur)]

    def get_by_id(self, person_id: str) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT person_id, first_name, last_name, role, email FROM people WHERE person_id=%s",
                (person_id,),
            )
            r = fetchone(cur)
            return _row_to_person(r) if r else None

    def create(self, *, first_name: str, last_name: str, role: PersonRole, email: Optional[str] = None) -> str:
        person_id = generate_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO people(person_id, first_name, last_name, role, email)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (person_id, first_name, last_name, role.value, email),
            )
        return person_id

    def update(
        self,
        *,
        person_id: str,
        first_name: str,
        last_name: str,
        role: PersonRole,
        email: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE people
                SET first_name=%s, last_name=%s, role=%s, email=%s
                WHERE person_id=%s
                """,
                (first_name, last_name, role.value, email, person_id),
            )
            return cur.rowcount > 0

    def delete(self, *, person_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM people WHERE person_id=%s", (person_id,))
            return cur.rowcount > 0

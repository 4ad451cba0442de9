from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import ALL_PERIODS
from ..core.enums import PersonRole, SortField
from ..core.exceptions import ValidationError
from .model import Person
from .repository import PersonRepository

logger = logging.getLogger(__name__)


def split_full_name(full_name: str) -> tuple[str, str]:
    """First word is the first name, everything after it the last name."""
    parts = require_non_empty(full_name, "Name").split()
    return parts[0], " ".join(parts[1:])


def search_people(people: Sequence[Person], query: str) -> list[Person]:
    q = (query or "").strip().lower()
    if not q:
        return list(people)
    return [p for p in people if q in p.first_name.lower() or q in p.last_name.lower()]


def sort_people(
    people: Sequence[Person],
    *,
    sort_field: SortField,
    notes: Mapping[tuple[str, str], str] | None = None,
    period_filter: str = ALL_PERIODS,
) -> list[Person]:
    """Order the roster.

    Note order needs a single period: people with a persistent note for
    that period come first, by note text (case-insensitive), then the rest
    by last name. With every period shown it falls back to last name.
    """
    notes = notes or {}
    sort_field = SortField(sort_field)

    if sort_field == SortField.FIRST_NAME:
        return sorted(people, key=lambda p: (p.first_name.lower(), p.last_name.lower()))

    if sort_field == SortField.NOTE and period_filter != ALL_PERIODS:
        def note_key(p: Person):
            note = (notes.get((p.person_id, period_filter)) or "").strip().lower()
            return (0 if note else 1, note, p.last_name.lower())

        return sorted(people, key=note_key)

    return sorted(people, key=lambda p: (p.last_name.lower(), p.first_name.lower()))


class RosterService:
    """Use case: maintain and query the list of people."""

    def __init__(self, people: PersonRepository):
        self._people = people

    def all(self) -> list[Person]:
        return list(self._people.list_all())

    def by_role(self, role: PersonRole) -> list[Person]:
        return [p for p in self._people.list_all() if p.role == role]

    def add(self, *, full_name: str, role: str, email: Optional[str] = None) -> str:
        first, last = split_full_name(full_name)
        try:
            role_enum = PersonRole(role)
        except ValueError:
            raise ValidationError("Role must be student or staff")
        person_id = self._people.create(first_name=first, last_name=last, role=role_enum, email=(email or "").strip() or None)
        logger.info("Added %s %s (%s)", role_enum.value, person_id, first)
        return person_id

    def edit(self, *, person_id: str, full_name: str, role: str, email: Optional[str] = None) -> None:
        first, last = split_full_name(full_name)
        try:
            role_enum = PersonRole(role)
        except ValueError:
            raise ValidationError("Role must be student or staff")
        ok = self._people.update(
            person_id=person_id,
            first_name=first,
            last_name=last,
            role=role_enum,
            email=(email or "").strip() or None,
        )
        if not ok:
            raise ValidationError("Person not found")
        logger.info("Updated person %s", person_id)

    def remove(self, *, person_id: str) -> None:
        if not self._people.delete(person_id=person_id):
            raise ValidationError("Person not found")
        logger.info("Removed person %s", person_id)

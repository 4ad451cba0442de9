from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

import pytest

from src.period_attendance.period_attendance.absences.model import AbsenceDraft, AbsenceRange
from src.period_attendance.period_attendance.attendance.model import AttendanceRecord, DayAttendance, copy_day
from src.period_attendance.period_attendance.container import assemble
from src.period_attendance.period_attendance.core.enums import PersonRole
from src.period_attendance.period_attendance.core.exceptions import StoreError
from src.period_attendance.period_attendance.people.model import Person
from src.period_attendance.period_attendance.periods.model import Period, ScheduleOverride


class InMemoryPeople:
    def __init__(self, people=()):
        self._by_id: dict[str, Person] = {p.person_id: p for p in people}
        self._id = 0

    def list_all(self):
        return list(self._by_id.values())

    def get_by_id(self, person_id: str) -> Optional[Person]:
        return self._by_id.get(person_id)

    def create(self, *, first_name, last_name, role, email=None) -> str:
        self._id += 1
        person_id = f"new{self._id}"
        self._by_id[person_id] = Person(person_id, first_name, last_name, role, email)
        return person_id

    def update(self, *, person_id, first_name, last_name, role, email=None) -> bool:
        if person_id not in self._by_id:
            return False
        self._by_id[person_id] = Person(person_id, first_name, last_name, role, email)
        return True

    def delete(self, *, person_id) -> bool:
        return self._by_id.pop(person_id, None) is not None


class InMemoryPeriods:
    def __init__(self, periods=()):
        self._by_id: dict[str, Period] = {p.period_id: p for p in periods}
        self._id = 0

    def list_all(self):
        return list(self._by_id.values())

    def create(self, *, name, start_time, duration_minutes) -> str:
        self._id += 1
        period_id = f"new{self._id}"
        self._by_id[period_id] = Period(period_id, name, start_time, duration_minutes)
        return period_id

    def update(self, *, period_id, name, start_time, duration_minutes) -> bool:
        if period_id not in self._by_id:
            return False
        self._by_id[period_id] = Period(period_id, name, start_time, duration_minutes)
        return True

    def delete(self, *, period_id) -> bool:
        return self._by_id.pop(period_id, None) is not None


class InMemoryOverrides:
    def __init__(self):
        self._by_key: dict[tuple[date, str], ScheduleOverride] = {}

    def list_all(self):
        return list(self._by_key.values())

    def upsert(self, *, override_date, period_id, new_time) -> None:
        self._by_key[(override_date, period_id)] = ScheduleOverride(override_date, period_id, new_time)

    def delete(self, *, override_date, period_id) -> bool:
        return self._by_key.pop((override_date, period_id), None) is not None


class InMemoryAttendance:
    """Day maps keyed by date; ``fail_writes`` makes every write raise StoreError."""

    def __init__(self):
        self.data: dict[date, DayAttendance] = {}
        self.fail_writes = False

    def _check(self):
        if self.fail_writes:
            raise StoreError("store offline")

    def get_day(self, on: date) -> DayAttendance:
        return copy_day(self.data.get(on, {}))

    def get_all(self):
        return {d: copy_day(day) for d, day in self.data.items()}

    def upsert_cell(self, *, on, person_id, period_id, record: AttendanceRecord) -> None:
        self._check()
        self.data.setdefault(on, {}).setdefault(person_id, {})[period_id] = record

    def delete_cell(self, *, on, person_id, period_id) -> bool:
        self._check()
        cells = self.data.get(on, {}).get(person_id, {})
        return cells.pop(period_id, None) is not None

    def delete_period(self, *, on, period_id) -> int:
        self._check()
        removed = 0
        for cells in self.data.get(on, {}).values():
            if cells.pop(period_id, None) is not None:
                removed += 1
        return removed

    def overwrite_day(self, *, on, day: DayAttendance) -> None:
        self._check()
        self.data[on] = copy_day(day)


class InMemoryAbsences:
    """``fail_writes`` makes group writes raise StoreError before touching anything."""

    def __init__(self):
        self.records: list[AbsenceRange] = []
        self._id = 0
        self.fail_writes = False

    def list_all(self):
        return list(self.records)

    def list_for_group(self, *, group_id):
        return [r for r in self.records if r.group_id == group_id]

    def create(self, *, person_id, draft: AbsenceDraft, group_id=None) -> str:
        self._id += 1
        absence_id = f"a{self._id}"
        self.records.append(
            AbsenceRange(
                absence_id=absence_id,
                person_id=person_id,
                start_date=draft.start_date,
                end_date=draft.end_date,
                start_period_id=draft.start_period_id,
                end_period_id=draft.end_period_id,
                note=draft.note,
                group_id=group_id,
            )
        )
        return absence_id

    def update(self, *, absence_id, draft: AbsenceDraft) -> bool:
        for i, r in enumerate(self.records):
            if r.absence_id == absence_id:
                self.records[i] = AbsenceRange(
                    absence_id=absence_id,
                    person_id=r.person_id,
                    start_date=draft.start_date,
                    end_date=draft.end_date,
                    start_period_id=draft.start_period_id,
                    end_period_id=draft.end_period_id,
                    note=draft.note,
                    group_id=r.group_id,
                )
                return True
        return False

    def delete(self, *, absence_id) -> bool:
        before = len(self.records)
        self.records = [r for r in self.records if r.absence_id != absence_id]
        return len(self.records) < before

    def replace_group(self, *, group_id, records) -> int:
        if self.fail_writes:
            raise StoreError("store offline")
        removed = self.delete_group(group_id=group_id)
        self.records.extend(records)
        return removed

    def delete_group(self, *, group_id) -> int:
        before = len(self.records)
        self.records = [r for r in self.records if r.group_id != group_id]
        return before - len(self.records)


class InMemoryNotes:
    def __init__(self):
        self.notes: dict[tuple[str, str], str] = {}

    def get_all(self):
        return dict(self.notes)

    def upsert(self, *, person_id, period_id, note) -> None:
        self.notes[(person_id, period_id)] = note

    def delete(self, *, person_id, period_id) -> bool:
        return self.notes.pop((person_id, period_id), None) is not None


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday, fifteen minutes into period 3
    return datetime(2025, 3, 12, 10, 15)


@pytest.fixture
def periods():
    return [
        Period("p1", "Period 1", time(8, 0), 50),
        Period("p2", "Period 2", time(9, 0), 50),
        Period("p3", "Period 3", time(10, 0), 50),
    ]


@pytest.fixture
def people():
    return [
        Person("alice", "Alice", "Smith", PersonRole.STUDENT, "alice@example.com"),
        Person("bob", "Bob", "Adams", PersonRole.STUDENT),
        Person("carol", "Carol", "Jones", PersonRole.STAFF),
    ]


@pytest.fixture
def people_repo(people):
    return InMemoryPeople(people)


@pytest.fixture
def periods_repo(periods):
    return InMemoryPeriods(periods)


@pytest.fixture
def overrides_repo():
    return InMemoryOverrides()


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def absences_repo():
    return InMemoryAbsences()


@pytest.fixture
def notes_repo():
    return InMemoryNotes()


@pytest.fixture
def container(people_repo, periods_repo, overrides_repo, attendance_repo, absences_repo, notes_repo):
    return assemble(
        people_repo=people_repo,
        periods_repo=periods_repo,
        overrides_repo=overrides_repo,
        attendance_repo=attendance_repo,
        absences_repo=absences_repo,
        notes_repo=notes_repo,
    )

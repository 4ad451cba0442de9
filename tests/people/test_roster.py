import pytest

from src.period_attendance.period_attendance.core.enums import PersonRole, SortField
from src.period_attendance.period_attendance.core.exceptions import ValidationError
from src.period_attendance.period_attendance.notes.service import NoteService
from src.period_attendance.period_attendance.people.service import RosterService, search_people, sort_people, split_full_name


def test_split_full_name_at_first_space():
    assert split_full_name("Mary Ann Lee") == ("Mary", "Ann Lee")
    assert split_full_name("  Cher ") == ("Cher", "")


def test_search_matches_first_or_last_name(people):
    assert [p.person_id for p in search_people(people, "ADA")] == ["bob"]
    assert [p.person_id for p in search_people(people, "carol")] == ["carol"]
    assert len(search_people(people, "")) == 3


def test_sort_by_first_and_last_name(people):
    assert [p.person_id for p in sort_people(people, sort_field=SortField.FIRST_NAME)] == ["alice", "bob", "carol"]
    assert [p.person_id for p in sort_people(people, sort_field=SortField.LAST_NAME)] == ["bob", "carol", "alice"]


def test_sort_by_note_puts_noted_people_first(people):
    notes = {("alice", "p1"): "b seat by window", ("carol", "p1"): "A front row", ("bob", "p2"): "other period"}

    ordered = sort_people(people, sort_field=SortField.NOTE, notes=notes, period_filter="p1")

    assert [p.person_id for p in ordered] == ["carol", "alice", "bob"]


def test_sort_by_note_without_period_falls_back_to_last_name(people):
    notes = {("alice", "p1"): "a"}

    ordered = sort_people(people, sort_field=SortField.NOTE, notes=notes, period_filter="all")

    assert [p.person_id for p in ordered] == ["bob", "carol", "alice"]


def test_roster_add_and_edit(people_repo):
    roster = RosterService(people_repo)

    person_id = roster.add(full_name="Dana Scully", role="staff", email="  ")
    added = people_repo.get_by_id(person_id)
    assert (added.first_name, added.last_name, added.role, added.email) == ("Dana", "Scully", PersonRole.STAFF, None)

    roster.edit(person_id=person_id, full_name="Dana K Scully", role="student", email="d@example.com")
    assert people_repo.get_by_id(person_id).last_name == "K Scully"
    assert [p.person_id for p in roster.by_role(PersonRole.STAFF)] == ["carol"]


def test_roster_rejects_bad_input(people_repo):
    roster = RosterService(people_repo)

    with pytest.raises(ValidationError, match="Role must be student or staff"):
        roster.add(full_name="Dana Scully", role="principal")
    with pytest.raises(ValidationError, match="Name is required"):
        roster.add(full_name=" ", role="student")
    with pytest.raises(ValidationError, match="Person not found"):
        roster.remove(person_id="nobody")


def test_blank_note_removes_it(notes_repo):
    notes = NoteService(notes_repo)

    notes.save(person_id="alice", period_id="p1", note="  front row ")
    assert notes.get(person_id="alice", period_id="p1") == "front row"

    notes.save(person_id="alice", period_id="p1", note="   ")
    assert notes.get(person_id="alice", period_id="p1") is None

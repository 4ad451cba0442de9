from datetime import date

import pytest

from src.period_attendance.period_attendance.absences.model import AbsenceDraft
from src.period_attendance.period_attendance.core.enums import AttendanceStatus
from src.period_attendance.period_attendance.core.exceptions import StoreError, ValidationError


@pytest.fixture
def service(container):
    return container.attendance_service


def test_toggle_same_status_twice_clears_the_cell(service, attendance_repo, fixed_now):
    on = date(2025, 3, 11)

    first = service.toggle(on=on, person_id="alice", period_id="p1", status=AttendanceStatus.LATE, now=fixed_now)
    second = service.toggle(on=on, person_id="alice", period_id="p1", status=AttendanceStatus.LATE, now=fixed_now)

    assert first.status == AttendanceStatus.LATE
    assert second.status == AttendanceStatus.NOT_MARKED
    assert "p1" not in attendance_repo.get_day(on).get("alice", {})


def test_late_today_uses_elapsed_minutes(service, fixed_now):
    cell = service.mark(on=fixed_now.date(), person_id="alice", period_id="p3", status=AttendanceStatus.LATE, now=fixed_now)

    assert cell.minutes_late == 15


def test_late_on_another_day_uses_quarter_duration(service, fixed_now):
    cell = service.mark(on=date(2025, 3, 11), person_id="alice", period_id="p1", status=AttendanceStatus.LATE, now=fixed_now)

    assert cell.minutes_late == 12


def test_minutes_late_is_clamped(service, fixed_now):
    elapsed = service.mark(on=fixed_now.date(), person_id="alice", period_id="p1", status=AttendanceStatus.LATE, now=fixed_now)
    explicit = service.mark(
        on=fixed_now.date(),
        person_id="bob",
        period_id="p1",
        status=AttendanceStatus.LATE,
        minutes_late=80,
        now=fixed_now,
    )
    negative = service.mark(
        on=fixed_now.date(),
        person_id="carol",
        period_id="p1",
        status=AttendanceStatus.LATE,
        minutes_late=-5,
        now=fixed_now,
    )

    assert elapsed.minutes_late == 50
    assert explicit.minutes_late == 50
    assert negative.minutes_late == 0


def test_note_is_kept_only_for_excused(service, attendance_repo, fixed_now):
    on = date(2025, 3, 11)
    service.mark(on=on, person_id="alice", period_id="p1", status=AttendanceStatus.EXCUSED, note="doctor", now=fixed_now)
    service.mark(on=on, person_id="bob", period_id="p1", status=AttendanceStatus.ON_TIME, note="ignored", now=fixed_now)

    day = attendance_repo.get_day(on)
    assert day["alice"]["p1"].note == "doctor"
    assert day["bob"]["p1"].note is None
    assert day["bob"]["p1"].timestamp == fixed_now


def test_write_for_person_out_on_absence_is_ignored(container, service, attendance_repo, fixed_now):
    on = date(2025, 3, 11)
    container.absence_service.create(
        person_id="alice",
        draft=AbsenceDraft(start_date=on, end_date=on, start_period_id="p1", end_period_id="p2"),
    )

    result = service.mark(on=on, person_id="alice", period_id="p2", status=AttendanceStatus.ABSENT, now=fixed_now)

    assert result is None
    assert attendance_repo.get_day(on) == {}
    assert not service.history.can_undo


def test_unwritable_status_and_unknown_period(service, fixed_now):
    with pytest.raises(ValidationError):
        service.mark(on=date(2025, 3, 11), person_id="alice", period_id="p1", status=AttendanceStatus.UNMARKED, now=fixed_now)
    with pytest.raises(ValidationError, match="Class period not found"):
        service.mark(on=date(2025, 3, 11), person_id="alice", period_id="gone", status=AttendanceStatus.ON_TIME, now=fixed_now)


def test_unknown_period_resolves_to_not_marked(service, fixed_now):
    cell = service.cell_status(on=date(2025, 3, 11), person_id="alice", period_id="gone", now=fixed_now)

    assert cell.status == AttendanceStatus.NOT_MARKED


def test_undo_restores_snapshot_and_redo_reapplies(service, attendance_repo, fixed_now):
    on = date(2025, 3, 11)
    service.mark(on=on, person_id="alice", period_id="p1", status=AttendanceStatus.ON_TIME, now=fixed_now)
    after = attendance_repo.get_day(on)

    assert service.undo(on=on)
    assert attendance_repo.get_day(on) == {}

    assert service.redo(on=on)
    assert attendance_repo.get_day(on) == after


def test_changing_viewed_date_clears_history(service, fixed_now):
    on = date(2025, 3, 11)
    service.mark(on=on, person_id="alice", period_id="p1", status=AttendanceStatus.ON_TIME, now=fixed_now)

    service.view(date(2025, 3, 10))

    assert not service.undo(on=on)


def test_failed_write_leaves_history_untouched(service, attendance_repo, fixed_now):
    attendance_repo.fail_writes = True

    with pytest.raises(StoreError):
        service.mark(on=date(2025, 3, 11), person_id="alice", period_id="p1", status=AttendanceStatus.ON_TIME, now=fixed_now)

    assert not service.history.can_undo


def test_unmark_period_is_one_undoable_step(service, attendance_repo, fixed_now):
    on = date(2025, 3, 11)
    service.mark(on=on, person_id="alice", period_id="p1", status=AttendanceStatus.ON_TIME, now=fixed_now)
    service.mark(on=on, person_id="bob", period_id="p1", status=AttendanceStatus.ABSENT, now=fixed_now)
    before = attendance_repo.get_day(on)

    assert service.unmark_period(on=on, period_id="p1") == 2
    assert attendance_repo.get_day(on) == {}

    service.undo(on=on)
    assert attendance_repo.get_day(on) == before


def test_day_grid_resolves_every_cell(service, fixed_now):
    today = fixed_now.date()
    service.mark(on=today, person_id="bob", period_id="p1", status=AttendanceStatus.ON_TIME, now=fixed_now)

    grid = service.day_grid(on=today, now=fixed_now)

    assert grid.active_period_id == "p3"
    assert grid.can_undo
    assert len(grid.cells) == 9
    by_key = {(c.person_id, c.period_id): c for c in grid.cells}
    assert by_key[("bob", "p1")].cell.status == AttendanceStatus.ON_TIME
    assert by_key[("alice", "p1")].cell.status == AttendanceStatus.UNMARKED
    assert by_key[("alice", "p3")].is_active
    assert by_key[("alice", "p3")].cell.status == AttendanceStatus.NOT_MARKED

from datetime import date, time

import pytest

from src.period_attendance.period_attendance.core.exceptions import ValidationError
from src.period_attendance.period_attendance.periods.service import PeriodService


def test_add_defaults_invalid_duration_to_sixty(periods_repo, overrides_repo):
    service = PeriodService(periods_repo, overrides_repo)

    period_id = service.add(name="Lab", start_time="13:00", duration="abc")

    added = next(p for p in service.ordered() if p.period_id == period_id)
    assert added.duration_minutes == 60
    assert added.start_time == time(13, 0)
    assert service.ordered()[-1].period_id == period_id


def test_add_rejects_bad_time_and_blank_name(periods_repo, overrides_repo):
    service = PeriodService(periods_repo, overrides_repo)

    with pytest.raises(ValidationError, match="must be HH:MM"):
        service.add(name="Lab", start_time="9am", duration=50)
    with pytest.raises(ValidationError, match="is required"):
        service.add(name="  ", start_time="09:00", duration=50)


def test_edit_and_remove_unknown_period(periods_repo, overrides_repo):
    service = PeriodService(periods_repo, overrides_repo)

    with pytest.raises(ValidationError, match="Period not found"):
        service.edit(period_id="nope", name="X", start_time="09:00", duration=50)
    with pytest.raises(ValidationError, match="Period not found"):
        service.remove(period_id="nope")


def test_override_last_write_wins(periods_repo, overrides_repo):
    service = PeriodService(periods_repo, overrides_repo)
    day = date(2025, 3, 12)

    service.set_override(override_date=day, period_id="p2", new_time="09:30")
    service.set_override(override_date=day, period_id="p2", new_time="09:45")

    assert len(service.overrides()) == 1
    assert service.for_date(day)[1].effective_start == time(9, 45)

    service.remove_override(override_date=day, period_id="p2")
    assert service.for_date(day)[1].effective_start == time(9, 0)


def test_override_requires_date(periods_repo, overrides_repo):
    service = PeriodService(periods_repo, overrides_repo)

    with pytest.raises(ValidationError):
        service.set_override(override_date=None, period_id="p2", new_time="09:30")

from datetime import date, datetime, time

import pytest

from src.period_attendance.period_attendance.absences.model import AbsenceRange
from src.period_attendance.period_attendance.attendance.model import AttendanceRecord
from src.period_attendance.period_attendance.common.datetime_utils import iso_week_id
from src.period_attendance.period_attendance.core.enums import AttendanceStatus
from src.period_attendance.period_attendance.periods.model import Period
from src.period_attendance.period_attendance.reports.statistics import format_percentage, summary_stats, weekly_trend

ON_TIME = AttendanceStatus.ON_TIME
LATE = AttendanceStatus.LATE
ABSENT = AttendanceStatus.ABSENT
EXCUSED = AttendanceStatus.EXCUSED


def _stats(data, periods, now, absences=(), **bounds):
    return summary_stats("alice", data, periods, [], list(absences), now=now, **bounds)


def test_nothing_held_is_not_available(periods, fixed_now):
    stats = _stats({date(2025, 3, 10): {}}, periods, fixed_now)

    assert stats.present_percentage == "N/A"
    assert stats.total_minutes_late == 0


def test_single_on_time_period_is_full_attendance(fixed_now):
    periods = [Period("p", "Only", time(8, 0), 50)]
    data = {date(2025, 3, 10): {"alice": {"p": AttendanceRecord(ON_TIME)}}}

    assert _stats(data, periods, fixed_now).present_percentage == "100.0"


def test_late_minutes_reduce_attended(fixed_now):
    periods = [Period("p", "Only", time(8, 0), 60)]
    data = {date(2025, 3, 10): {"alice": {"p": AttendanceRecord(LATE, minutes_late=20)}}}

    stats = _stats(data, periods, fixed_now)

    assert stats.present_percentage == "66.7"
    assert stats.attended_minutes == 40
    assert stats.possible_minutes == 60
    assert stats.total_minutes_late == 20


def test_excused_and_absent(periods, fixed_now):
    day = date(2025, 3, 10)
    data = {
        day: {
            "alice": {"p1": AttendanceRecord(ON_TIME), "p2": AttendanceRecord(ABSENT), "p3": AttendanceRecord(EXCUSED)},
        }
    }

    stats = _stats(data, periods, fixed_now)

    assert stats.possible_minutes == 100
    assert stats.attended_minutes == 50
    assert stats.present_percentage == "50.0"
    assert stats.per_period["p3"].percentage == "N/A"
    assert stats.per_period["p1"].percentage == "100.0"


def test_range_excuse_is_excluded(periods, fixed_now):
    day = date(2025, 3, 10)
    data = {day: {"alice": {"p1": AttendanceRecord(ABSENT)}}}
    absences = [AbsenceRange("a1", "alice", day, day, "p1", "p1")]

    assert _stats(data, periods, fixed_now, absences).present_percentage == "N/A"


def test_unmarked_running_period_counts_as_missed(periods, fixed_now):
    data = {fixed_now.date(): {"bob": {"p3": AttendanceRecord(ON_TIME)}}}

    stats = _stats(data, periods, fixed_now)

    assert stats.possible_minutes == 50
    assert stats.present_percentage == "0.0"


def test_unmarked_past_period_is_excluded(periods, fixed_now):
    data = {date(2025, 3, 10): {"bob": {"p1": AttendanceRecord(ON_TIME)}}}

    assert _stats(data, periods, fixed_now).present_percentage == "N/A"


def test_date_bounds_are_inclusive(periods, fixed_now):
    data = {
        date(2025, 3, 3): {"alice": {"p1": AttendanceRecord(ABSENT)}},
        date(2025, 3, 10): {"alice": {"p1": AttendanceRecord(ON_TIME)}},
    }

    stats = _stats(data, periods, fixed_now, start=date(2025, 3, 10), end=date(2025, 3, 10))

    assert stats.present_percentage == "100.0"


def test_format_percentage_rounds_to_one_decimal():
    assert format_percentage(1, 3) == "33.3"
    assert format_percentage(0, 0) == "N/A"


def test_exact_half_rounds_up(fixed_now):
    periods = [Period("p", "Only", time(8, 0), 80)]
    data = {date(2025, 3, 10): {"alice": {"p": AttendanceRecord(LATE, minutes_late=35)}}}

    assert _stats(data, periods, fixed_now).present_percentage == "56.3"
    assert format_percentage(1, 16) == "6.3"
    assert format_percentage(1, 8) == "12.5"


def test_iso_week_uses_thursday_year():
    assert iso_week_id(date(2024, 12, 30)) == "2025-W01"
    assert iso_week_id(date(2021, 1, 3)) == "2020-W53"


def test_weekly_trend_buckets_by_iso_week(periods, fixed_now):
    data = {
        date(2025, 3, 10): {"alice": {"p1": AttendanceRecord(ABSENT), "p2": AttendanceRecord(ON_TIME)}},
        date(2025, 3, 3): {"alice": {"p1": AttendanceRecord(LATE, minutes_late=10)}},
        date(2025, 2, 24): {"alice": {"p1": AttendanceRecord(EXCUSED)}},
    }

    trend = weekly_trend("alice", data, periods, [], [], now=fixed_now)

    assert [w.week for w in trend] == ["2025-W10", "2025-W11"]
    assert trend[0].percentage == pytest.approx(80.0)
    assert trend[1].percentage == 50.0


def test_weekly_trend_counts_unmarked_held_period_as_possible(periods):
    now = datetime(2025, 3, 12, 18, 0)
    data = {date(2025, 3, 10): {"bob": {"p1": AttendanceRecord(ON_TIME)}}}

    trend = weekly_trend("alice", data, periods, [], [], now=now)

    assert len(trend) == 1
    assert trend[0].possible_minutes == 50
    assert trend[0].percentage == 0.0

from __future__ import annotations

from enum import Enum


class PersonRole(str, Enum):
    """Role tag of a person on the roster."""

    STUDENT = "student"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Status of one (date, person, period) cell.

    The first four are persisted; UNMARKED and NOT_MARKED are only produced
    by the status resolver and never stored.
    """

    ON_TIME = "On Time"
    LATE = "Late"
    EXCUSED = "Excused"
    ABSENT = "Absent"
    UNMARKED = "Unmarked"
    NOT_MARKED = "Not Marked"



class SortField(str, Enum):
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    NOTE = "note"


class ReportPreset(str, Enum):
    WEEK = "week"
    MONTH = "month"
    ALL = "all"

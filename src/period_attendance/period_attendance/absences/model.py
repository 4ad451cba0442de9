from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class AbsenceRange:
    """One person excused over a contiguous span of days and periods.

    Inclusive on both ends. On the first day the span starts at
    ``start_period_id``; on the last day it stops after ``end_period_id``;
    days in between are fully covered.
    """

    absence_id: str
    person_id: str
    start_date: date
    end_date: date
    start_period_id: str
    end_period_id: str
    note: str = ""
    group_id: Optional[str] = None


@dataclass(frozen=True)
class AbsenceDraft:
    """Shared bounds of a new absence (or of every member of a group)."""

    start_date: date
    end_date: date
    start_period_id: str
    end_period_id: str
    note: str = ""


@dataclass(frozen=True)
class AbsenceGroup:
    """Read-model: sibling absence ranges sharing one group_id."""

    group_id: str
    start_date: date
    end_date: date
    start_period_id: str
    end_period_id: str
    note: str
    person_ids: list[str] = field(default_factory=list)

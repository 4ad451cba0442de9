"""Schedule resolution: effective start times and past/active predicates.

All functions are pure; "now" is always passed in by the caller.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import minutes_since_midnight
from .model import EffectivePeriod, Period, ScheduleOverride


def order_periods(periods: Iterable[Period]) -> list[Period]:
    """Periods ordered by nominal start time (stable for equal starts)."""
    return sorted(periods, key=lambda p: p.start_time)


def period_index(periods: Sequence[Period], period_id: str) -> int:
    """Rank of ``period_id`` in the ordered sequence, or -1 when unknown."""
    for i, p in enumerate(periods):
        if p.period_id == period_id:
            return i
    return -1


def find_override(overrides: Iterable[ScheduleOverride], *, period_id: str, on: date) -> Optional[ScheduleOverride]:
    for o in overrides:
        if o.period_id == period_id and o.override_date == on:
            return o
    return None


def effective_periods(
    periods: Sequence[Period],
    overrides: Iterable[ScheduleOverride],
    on: date,
) -> list[EffectivePeriod]:
    """Apply the overrides of ``on`` to ``periods``, keeping their stored order."""
    overrides = list(overrides)
    out: list[EffectivePeriod] = []
    for i, p in enumerate(periods):
        o = find_override(overrides, period_id=p.period_id, on=on)
        out.append(EffectivePeriod(period=p, effective_start=o.new_time if o else p.start_time, index=i))
    return out


def active_period(periods: Sequence[EffectivePeriod], now: datetime, on: date) -> Optional[EffectivePeriod]:
    """The period currently running on ``on``, evaluated only for today.

    Scans in stored order and keeps the last period whose effective start is
    not after ``now``. When an override moves a period out of chronological
    order, list order decides, not the true latest start.
    """
    if on != now.date():
        return None

    current = minutes_since_midnight(now)
    active: Optional[EffectivePeriod] = None
    for p in periods:
        if current >= minutes_since_midnight(p.effective_start):
            active = p
    return active


def _bounds(period: EffectivePeriod) -> tuple[int, int]:
    start = minutes_since_midnight(period.effective_start)
    return start, start + int(period.duration_minutes)


def is_past(period: EffectivePeriod, on: date, now: datetime) -> bool:
    today = now.date()
    if on < today:
        return True
    if on > today:
        return False
    _, end = _bounds(period)
    return minutes_since_midnight(now) >= end


def is_active(period: EffectivePeriod, on: date, now: datetime) -> bool:
    if on != now.date():
        return False
    start, end = _bounds(period)
    return start <= minutes_since_midnight(now) < end

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time


@dataclass(frozen=True)
class Period:
    """Domain entity: a class period with a nominal daily start."""

    period_id: str
    name: str
    start_time: time
    duration_minutes: int


@dataclass(frozen=True)
class ScheduleOverride:
    """Replacement start time for one period, valid on one date only."""

    override_date: date
    period_id: str
    new_time: time


@dataclass(frozen=True)
class EffectivePeriod:
    """A period as it runs on a specific date.

    ``index`` is the rank by nominal start time and is never changed by an
    override; only ``effective_start`` is.
    """

    period: Period
    effective_start: time
    index: int

    @property
    def period_id(self) -> str:
        return self.period.period_id

    @property
    def name(self) -> str:
        return self.period.name

    @property
    def duration_minutes(self) -> int:
        return self.period.duration_minutes

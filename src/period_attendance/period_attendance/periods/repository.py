from __future__ import annotations

from datetime import date, time
from typing import Protocol, Sequence

from .model import Period, ScheduleOverride


class PeriodRepository(Protocol):
    def list_all(self) -> Sequence[Period]:
        raise NotImplementedError

    def create(self, *, name: str, start_time: time, duration_minutes: int) -> str:
        """Returns period_id."""

        raise NotImplementedError

    def update(self, *, period_id: str, name: str, start_time: time, duration_minutes: int) -> bool:
        raise NotImplementedError

    def delete(self, *, period_id: str) -> bool:
        raise NotImplementedError


class OverrideRepository(Protocol):
    def list_all(self) -> Sequence[ScheduleOverride]:
        raise NotImplementedError

    def upsert(self, *, override_date: date, period_id: str, new_time: time) -> None:
        """At most one override per (date, period); last write wins."""

        raise NotImplementedError

    def delete(self, *, override_date: date, period_id: str) -> bool:
        raise NotImplementedError

from __future__ import annotations

from datetime import date, datetime

from ...core.constants import DEFAULT_LATE_DIVISOR
from ...periods.model import EffectivePeriod
from .base import LatenessStrategy


class FractionLatenessStrategy(LatenessStrategy):
    """Marked on another day: a fixed fraction of the period's duration."""

    def __init__(self, divisor: int = DEFAULT_LATE_DIVISOR):
        self._divisor = int(divisor)

    def minutes_late(self, *, period: EffectivePeriod, on: date, now: datetime) -> int:
        return int(period.duration_minutes) // self._divisor

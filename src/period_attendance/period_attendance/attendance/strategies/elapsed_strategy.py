from __future__ import annotations

from datetime import date, datetime

from ...periods.model import EffectivePeriod
from .base import LatenessStrategy


class ElapsedLatenessStrategy(LatenessStrategy):
    """Marked on the day itself: minutes elapsed since the effective start."""

    def minutes_late(self, *, period: EffectivePeriod, on: date, now: datetime) -> int:
        start = datetime.combine(on, period.effective_start)
        return max(0, int((now - start).total_seconds() // 60))

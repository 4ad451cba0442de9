from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime

from ...periods.model import EffectivePeriod


class LatenessStrategy(ABC):
    """Strategy Pattern: encapsulate how we estimate minutes late for a Late mark."""

    @abstractmethod
    def minutes_late(self, *, period: EffectivePeriod, on: date, now: datetime) -> int:
        raise NotImplementedError

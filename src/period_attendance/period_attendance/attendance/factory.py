from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from .strategies.base import LatenessStrategy
from .strategies.elapsed_strategy import ElapsedLatenessStrategy
from .strategies.fraction_strategy import FractionLatenessStrategy


@dataclass
class LatenessStrategyFactory:
    """Factory Pattern: choose appropriate lateness estimate based on the marked date."""

    def for_mark(self, *, on: date, now: datetime) -> LatenessStrategy:
        if on == now.date():
            return ElapsedLatenessStrategy()
        return FractionLatenessStrategy()

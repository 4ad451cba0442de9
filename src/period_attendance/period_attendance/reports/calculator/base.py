from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...attendance.model import CellStatus


@dataclass(frozen=True)
class HeldCell:
    """A resolved cell of a held period, with its timing on that date."""

    cell: CellStatus
    duration_minutes: int
    is_past: bool
    is_active: bool


@dataclass(frozen=True)
class MinuteCredit:
    possible: int = 0
    attended: int = 0


NO_CREDIT = MinuteCredit()


class MinutesCalculator(ABC):
    """Calculator interface (Strategy Pattern for crediting minutes)."""

    @abstractmethod
    def credit(self, held: HeldCell) -> MinuteCredit:
        raise NotImplementedError

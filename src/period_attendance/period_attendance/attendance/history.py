from __future__ import annotations

from datetime import date
from typing import Optional

from .model import DayAttendance, copy_day


class MutationHistory:
    """Undo/redo stacks of full day snapshots, scoped to one viewed date.

    Stacks are unbounded and never mix snapshots from different dates:
    switching the viewed date empties both.
    """

    def __init__(self, viewed_date: Optional[date] = None):
        self._viewed_date = viewed_date
        self._undo: list[DayAttendance] = []
        self._redo: list[DayAttendance] = []

    @property
    def viewed_date(self) -> Optional[date]:
        return self._viewed_date

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def view(self, on: date) -> None:
        """Switch the viewed date; history is cleared unconditionally."""
        self._viewed_date = on
        self.clear()

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def record(self, before: DayAttendance) -> None:
        """Snapshot taken before a mutation; invalidates redo."""
        self._undo.append(copy_day(before))
        self._redo.clear()

    def peek_undo(self) -> Optional[DayAttendance]:
        return copy_day(self._undo[-1]) if self._undo else None

    def peek_redo(self) -> Optional[DayAttendance]:
        return copy_day(self._redo[-1]) if self._redo else None

    def undo(self, current: DayAttendance) -> Optional[DayAttendance]:
        """Pop the last snapshot, parking ``current`` on the redo stack.

        Returns the state to restore, or None when there is nothing to undo.
        """
        if not self._undo:
            return None
        previous = self._undo.pop()
        self._redo.append(copy_day(current))
        return copy_day(previous)

    def redo(self, current: DayAttendance) -> Optional[DayAttendance]:
        if not self._redo:
            return None
        following = self._redo.pop()
        self._undo.append(copy_day(current))
        return copy_day(following)

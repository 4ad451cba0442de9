from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import NO_CREDIT, HeldCell, MinuteCredit, MinutesCalculator


class WeeklyMinutesCalculator(MinutesCalculator):
    """Trend rule: every non-excused held period is possible; only On Time
    and Late earn attended minutes."""

    def credit(self, held: HeldCell) -> MinuteCredit:
        status = held.cell.status
        duration = int(held.duration_minutes)

        if status == AttendanceStatus.EXCUSED:
            return NO_CREDIT
        if status == AttendanceStatus.ON_TIME:
            return MinuteCredit(possible=duration, attended=duration)
        if status == AttendanceStatus.LATE:
            return MinuteCredit(possible=duration, attended=max(0, duration - int(held.cell.minutes_late or 0)))
        return MinuteCredit(possible=duration)

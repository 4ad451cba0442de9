from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import NO_CREDIT, HeldCell, MinuteCredit, MinutesCalculator


class SummaryMinutesCalculator(MinutesCalculator):
    """Overall rule: only started periods count; Absent and an unmarked
    running period are possible-but-not-attended; excused never counts."""

    def credit(self, held: HeldCell) -> MinuteCredit:
        status = held.cell.status
        duration = int(held.duration_minutes)

        if status == AttendanceStatus.EXCUSED:
            return NO_CREDIT
        if not (held.is_past or held.is_active):
            return NO_CREDIT

        if status == AttendanceStatus.ON_TIME:
            return MinuteCredit(possible=duration, attended=duration)
        if status == AttendanceStatus.LATE:
            return MinuteCredit(possible=duration, attended=max(0, duration - int(held.cell.minutes_late or 0)))
        if status == AttendanceStatus.ABSENT:
            return MinuteCredit(possible=duration)
        if held.is_active:
            return MinuteCredit(possible=duration)
        return NO_CREDIT

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.validators import duration_or_default, require_non_empty, require_time
from ..core.constants import DEFAULT_PERIOD_DURATION
from ..core.exceptions import ValidationError
from .model import Period, ScheduleOverride
from .repository import OverrideRepository, PeriodRepository
from .schedule import effective_periods, order_periods

logger = logging.getLogger(__name__)


class PeriodService:
    """Use case: maintain the period list and its per-date start-time overrides."""

    def __init__(self, periods: PeriodRepository, overrides: OverrideRepository):
        self._periods = periods
        self._overrides = overrides

    def ordered(self) -> list[Period]:
        return order_periods(self._periods.list_all())

    def overrides(self) -> list[ScheduleOverride]:
        return list(self._overrides.list_all())

    def for_date(self, on: date):
        return effective_periods(self.ordered(), self.overrides(), on)

    def add(self, *, name: str, start_time: str, duration) -> str:
        name = require_non_empty(name, "Period name")
        start = require_time(start_time, "Start time")
        minutes = duration_or_default(duration, DEFAULT_PERIOD_DURATION)
        period_id = self._periods.create(name=name, start_time=start, duration_minutes=minutes)
        logger.info("Added period %s (%s at %s, %d min)", period_id, name, start.strftime("%H:%M"), minutes)
        return period_id

    def edit(self, *, period_id: str, name: str, start_time: str, duration) -> None:
        name = require_non_empty(name, "Period name")
        start = require_time(start_time, "Start time")
        minutes = duration_or_default(duration, DEFAULT_PERIOD_DURATION)
        if not self._periods.update(period_id=period_id, name=name, start_time=start, duration_minutes=minutes):
            raise ValidationError("Period not found")
        logger.info("Updated period %s", period_id)

    def remove(self, *, period_id: str) -> None:
        if not self._periods.delete(period_id=period_id):
            raise ValidationError("Period not found")
        logger.info("Removed period %s", period_id)

    def set_override(self, *, override_date: Optional[date], period_id: str, new_time: str) -> None:
        if override_date is None:
            raise ValidationError("Override date is required")
        period_id = require_non_empty(period_id, "Period")
        start = require_time(new_time, "New start time")
        self._overrides.upsert(override_date=override_date, period_id=period_id, new_time=start)
        logger.info("Period %s starts at %s on %s", period_id, start.strftime("%H:%M"), override_date.isoformat())

    def remove_override(self, *, override_date: date, period_id: str) -> None:
        if not self._overrides.delete(override_date=override_date, period_id=period_id):
            logger.debug("No override for period %s on %s", period_id, override_date.isoformat())

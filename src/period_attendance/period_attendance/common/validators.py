from __future__ import annotations

from datetime import time
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_hhmm


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_time(value: Optional[str], field_name: str) -> time:
    v = require_non_empty(value, field_name)
    try:
        return parse_hhmm(v)
    except ValueError:
        raise ValidationError(f"{field_name} must be HH:MM")


def duration_or_default(value, default: int) -> int:
    """Parse a duration in minutes, falling back to ``default`` when missing or not positive."""
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        return default
    return minutes if minutes > 0 else default

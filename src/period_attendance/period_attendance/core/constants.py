"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_MINUTES_LATE = 50
DEFAULT_LATE_DIVISOR = 4
DEFAULT_PERIOD_DURATION = 60

DEFAULT_EXCUSED_NOTE = "Excused by default"
NOT_AVAILABLE = "N/A"

ALL_PERIODS = "all"

LOW_PERCENTAGE = 60
MEDIUM_PERCENTAGE = 80

"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_LATE_THRESHOLD = "08:00"
MIN_PASSWORD_LENGTH = 6
JWT_ALGORITHM = "HS256"
TIME_FORMAT = "%H:%M"
DATE_FORMAT = "%Y-%m-%d"

# Dashboard: flag students absent this many days within the trailing window
ABSENCE_ALERT_DAYS = 3
ABSENCE_WINDOW_DAYS = 7

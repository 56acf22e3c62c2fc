from __future__ import annotations

from datetime import date, datetime

from ..core.constants import DATE_FORMAT, TIME_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_hhmm(value: str) -> str:
    """Validate a 24-hour HH:MM string and return it zero-padded."""
    try:
        return datetime.strptime(value, TIME_FORMAT).strftime(TIME_FORMAT)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM")


def format_hhmm(value: datetime) -> str:
    return value.strftime(TIME_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()

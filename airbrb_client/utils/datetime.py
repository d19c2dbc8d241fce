"""UTC datetime and calendar-day utilities."""

from datetime import date, datetime, timezone
from typing import Any, Optional

from dateutil import parser as date_parser


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(timezone.utc)


def to_day(value: Any) -> Optional[date]:
    """
    Normalize a date-like value to a calendar day.

    Accepts ``date``, ``datetime`` and ISO-8601 strings (``2025-12-01`` or
    ``2025-12-01T00:00:00.000Z``). Aware datetimes are converted to UTC
    before the day is taken, so a timestamp written by ``day_to_timestamp``
    reads back as the same day.

    Args:
        value: Date-like value, possibly None or empty

    Returns:
        The calendar day, or None if the value is missing or unparseable
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        parsed = date_parser.isoparse(value.strip())
    except (ValueError, OverflowError):
        return None
    return to_day(parsed)


def day_to_timestamp(day: date) -> str:
    """Render a calendar day as a midnight-UTC ISO timestamp (``2025-12-01T00:00:00.000Z``)."""
    return f"{day.isoformat()}T00:00:00.000Z"

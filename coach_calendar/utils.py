"""Shared utilities used across the coach calendar."""

import re
from datetime import date, datetime
from typing import Union


def normalize_phone(value: str) -> str:
    """Normalize a phone number by stripping everything except digits and a leading +.

    Examples:
        >>> normalize_phone("+91-9876543210")
        '+919876543210'
        >>> normalize_phone("(987) 654 3210")
        '9876543210'
    """
    value = value.strip()
    if value.startswith("+"):
        return "+" + re.sub(r"[^\d]", "", value[1:])
    return re.sub(r"[^\d]", "", value)


def parse_time_slot(value: str) -> int:
    """Convert an ``HH:MM`` time of day into minutes since midnight.

    Raises:
        ValueError: If the value is not a valid 24-hour ``HH:MM`` time.
    """
    try:
        parsed = datetime.strptime(value.strip(), "%H:%M")
    except (ValueError, AttributeError):
        raise ValueError(f"Invalid time slot {value!r}, expected HH:MM") from None
    return parsed.hour * 60 + parsed.minute


def format_time_slot(minutes: int) -> str:
    """Render minutes since midnight as a zero-padded ``HH:MM`` string."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def as_calendar_day(value: Union[date, datetime]) -> date:
    """Strip the time of day, leaving the calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value

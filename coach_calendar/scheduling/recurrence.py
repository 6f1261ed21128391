"""
Recurrence expansion.

A stored booking is a single record even when it recurs: follow-up calls
repeat weekly on the anchor's weekday, open-ended forward and never
before the anchor day itself. This module decides which concrete dates a
record occupies.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Union

from coach_calendar.schemas.booking_schema import Booking
from coach_calendar.utils import as_calendar_day

DayLike = Union[date, datetime]


def applies_on(booking: Booking, target: DayLike) -> bool:
    """Return True if the booking occupies its time slot on ``target``."""
    anchor = booking.anchor_date
    day = as_calendar_day(target)
    if not booking.is_recurring:
        return day == anchor
    return day.weekday() == anchor.weekday() and day >= anchor


def filter_effective(bookings: Iterable[Booking], target: DayLike) -> list[Booking]:
    """Keep the bookings that apply on ``target``, preserving input order."""
    return [b for b in bookings if applies_on(b, target)]


def next_occurrences(booking: Booking, start: DayLike, limit: int) -> list[date]:
    """
    List up to ``limit`` dates on or after ``start`` on which the booking applies.

    One-off bookings yield at most their anchor day.
    """
    if limit < 1:
        return []
    day = as_calendar_day(start)
    anchor = booking.anchor_date
    if not booking.is_recurring:
        return [anchor] if anchor >= day else []

    first = max(day, anchor)
    first += timedelta(days=(anchor.weekday() - first.weekday()) % 7)
    return [first + timedelta(weeks=i) for i in range(limit)]

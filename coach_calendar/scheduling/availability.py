"""
Slot availability checks.

Candidate and existing calls are half-open minute intervals
``[start, start + duration)``. Each existing booking uses its own call
type's duration, so a 20-minute follow-up can be checked against a
40-minute onboarding. Touching endpoints are compatible.

Callers must pass the day's effective bookings (direct plus expanded
recurring), never the raw stored records.
"""

from typing import Iterable, Union

from coach_calendar.schemas.booking_schema import Booking, BookingConflict
from coach_calendar.scheduling.time_grid import Slot
from coach_calendar.utils import parse_time_slot

SlotLike = Union[Slot, str]


def _slot_minutes(candidate: SlotLike) -> int:
    if isinstance(candidate, Slot):
        return candidate.minutes
    return parse_time_slot(candidate)


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open interval intersection."""
    return start_a < end_b and end_a > start_b


def find_conflicts(
    candidate: SlotLike, duration_minutes: int, effective_bookings: Iterable[Booking]
) -> list[Booking]:
    """Return every booking whose interval intersects the candidate's."""
    start = _slot_minutes(candidate)
    end = start + duration_minutes
    return [
        b for b in effective_bookings
        if intervals_overlap(start, end, b.start_minute, b.end_minute)
    ]


def is_available(
    candidate: SlotLike, duration_minutes: int, effective_bookings: Iterable[Booking]
) -> bool:
    """Return False on the first conflicting booking, True if none conflict."""
    start = _slot_minutes(candidate)
    end = start + duration_minutes
    for booking in effective_bookings:
        if intervals_overlap(start, end, booking.start_minute, booking.end_minute):
            return False
    return True


def check_conflicts(
    candidate: SlotLike, duration_minutes: int, effective_bookings: Iterable[Booking]
) -> BookingConflict:
    conflicting = find_conflicts(candidate, duration_minutes, effective_bookings)
    return BookingConflict(has_conflict=bool(conflicting), conflicting_bookings=conflicting)

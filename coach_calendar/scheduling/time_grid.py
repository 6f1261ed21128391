"""
Daily slot grid.

Every calendar day offers the same slots: 10:30 AM through 7:30 PM
inclusive, every 20 minutes. No per-day variation, holidays or blackouts.
"""

from dataclasses import dataclass

from coach_calendar.utils import format_time_slot, parse_time_slot

DAY_START = "10:30"
DAY_END = "19:30"
SLOT_STEP_MINUTES = 20


@dataclass(frozen=True)
class Slot:
    """A bookable start time on the day grid."""

    time: str
    display: str

    @property
    def minutes(self) -> int:
        return parse_time_slot(self.time)


def format_time_label(time_slot: str) -> str:
    """Render ``HH:MM`` as a 12-hour label, e.g. ``"19:30"`` -> ``"7:30 PM"``."""
    minutes = parse_time_slot(time_slot)
    hours, mins = divmod(minutes, 60)
    period = "PM" if hours >= 12 else "AM"
    if hours > 12:
        display_hours = hours - 12
    elif hours == 0:
        display_hours = 12
    else:
        display_hours = hours
    return f"{display_hours}:{mins:02d} {period}"


def generate_slots() -> list[Slot]:
    """Return the ordered slot grid; the end boundary is included when it lands on a step."""
    start = parse_time_slot(DAY_START)
    end = parse_time_slot(DAY_END)
    slots = []
    for minutes in range(start, end + 1, SLOT_STEP_MINUTES):
        time_slot = format_time_slot(minutes)
        slots.append(Slot(time=time_slot, display=format_time_label(time_slot)))
    return slots

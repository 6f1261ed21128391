from coach_calendar.scheduling.availability import (
    check_conflicts,
    find_conflicts,
    is_available,
)
from coach_calendar.scheduling.facade import CalendarSummary, ScheduleRow, SchedulingFacade
from coach_calendar.scheduling.recurrence import applies_on, filter_effective, next_occurrences
from coach_calendar.scheduling.time_grid import Slot, format_time_label, generate_slots

__all__ = [
    "Slot",
    "generate_slots",
    "format_time_label",
    "applies_on",
    "filter_effective",
    "next_occurrences",
    "is_available",
    "find_conflicts",
    "check_conflicts",
    "SchedulingFacade",
    "ScheduleRow",
    "CalendarSummary",
]

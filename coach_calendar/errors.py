"""Exception hierarchy shared by the scheduling core and storage layers."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from coach_calendar.schemas.booking_schema import Booking, CallType


class SchedulingError(Exception):
    """Base class for every error raised by the calendar."""


class SlotConflictError(SchedulingError):
    """Raised when a requested call overlaps an existing effective booking."""

    def __init__(
        self,
        day: date,
        time_slot: str,
        call_type: CallType,
        conflicting: Sequence[Booking] = (),
    ) -> None:
        self.day = day
        self.time_slot = time_slot
        self.call_type = call_type
        self.conflicting: list[Booking] = list(conflicting)
        names = ", ".join(b.client_name for b in self.conflicting) or "an existing booking"
        super().__init__(
            f"{call_type.label} at {time_slot} on {day.isoformat()} "
            f"conflicts with {names}."
        )


class NotFoundError(SchedulingError, LookupError):
    """Raised when a booking or client id does not exist."""

    def __init__(self, kind: str, identifier: Optional[str]) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind.capitalize()} {identifier} not found.")


class StoreUnavailableError(SchedulingError):
    """Raised when the persistence layer cannot complete a read or write."""

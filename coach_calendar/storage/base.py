"""
Storage contract the scheduling core depends on.

Any object with these coroutine methods can back the calendar: the core
behaves identically whether bookings come from a durable store or an
in-memory stand-in.
"""

import uuid
from datetime import date
from typing import Any, Protocol, runtime_checkable

from coach_calendar.schemas.booking_schema import Booking, CallType
from coach_calendar.schemas.client_schema import Client

IMMUTABLE_BOOKING_FIELDS = frozenset({"id", "is_recurring", "created_at"})


@runtime_checkable
class BookingStore(Protocol):
    """Keyed collection of clients and bookings."""

    async def list_clients(self) -> list[Client]: ...

    async def insert_client(self, client: Client) -> str: ...

    async def list_all_bookings(self) -> list[Booking]: ...

    async def query_bookings_by_date(self, day: date) -> list[Booking]:
        """Non-recurring bookings anchored exactly on ``day``."""
        ...

    async def query_recurring_bookings(self) -> list[Booking]: ...

    async def insert_booking(self, booking: Booking) -> str: ...

    async def delete_booking(self, booking_id: str) -> None:
        """Remove a booking; raises NotFoundError for an unknown id."""
        ...

    async def update_booking(self, booking_id: str, **changes: Any) -> Booking: ...


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"


def apply_booking_changes(booking: Booking, changes: dict[str, Any]) -> Booking:
    """
    Return a re-validated copy of ``booking`` with ``changes`` applied.

    The recurrence flag is re-derived when the call type changes.
    """
    blocked = IMMUTABLE_BOOKING_FIELDS.intersection(changes)
    if blocked:
        raise ValueError(f"Cannot update booking fields: {', '.join(sorted(blocked))}")
    unknown = set(changes) - set(Booking.model_fields)
    if unknown:
        raise ValueError(f"Unknown booking fields: {', '.join(sorted(unknown))}")

    data = booking.model_dump()
    data.update(changes)
    data["is_recurring"] = CallType(data["call_type"]).recurs_weekly
    return Booking.model_validate(data)

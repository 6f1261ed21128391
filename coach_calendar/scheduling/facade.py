"""
Scheduling facade: the library boundary a presentation layer talks to.

Resolves the bookings effective on a date (direct plus recurring), books
calls with conflict rejection, and cancels bookings. Every availability
decision here is made against ``effective_bookings(day)``, never against
raw stored records.

Usage:
    facade = SchedulingFacade(InMemoryBookingStore())
    booking = await facade.book("3", CallType.ONBOARDING, date(2024, 6, 5), "10:30")
    await facade.cancel(booking.id)
"""

import asyncio
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, TypedDict, Union

from coach_calendar.directory import ClientDirectory
from coach_calendar.errors import NotFoundError, SlotConflictError
from coach_calendar.logging_context import get_request_logger
from coach_calendar.schemas.booking_schema import Booking, CallType
from coach_calendar.scheduling.availability import find_conflicts, is_available
from coach_calendar.scheduling.recurrence import applies_on
from coach_calendar.scheduling.time_grid import Slot, generate_slots
from coach_calendar.storage.base import BookingStore
from coach_calendar.utils import as_calendar_day, format_time_slot, parse_time_slot

logger = get_request_logger(__name__)


@dataclass(frozen=True)
class ScheduleRow:
    """One grid slot on a given day."""

    slot: Slot
    booking: Optional[Booking]
    available: bool


class CalendarSummary(TypedDict):
    """Counts shown alongside a day's schedule."""

    total_bookings: int
    bookings_on_day: int
    recurring_series: int


def _slot_time(slot: Union[Slot, str]) -> str:
    raw = slot.time if isinstance(slot, Slot) else slot
    return format_time_slot(parse_time_slot(raw))


class SchedulingFacade:
    """
    Books and cancels calls for a single coach.

    ``book`` checks availability and then writes; an ``asyncio.Lock``
    serializes that sequence within this instance. Separate processes
    sharing one store are not arbitrated: two writers can still pass the
    check for the same slot before either insert lands.
    """

    def __init__(self, store: BookingStore) -> None:
        self._store = store
        self._directory = ClientDirectory(store)
        self._book_lock = asyncio.Lock()

    @property
    def store(self) -> BookingStore:
        return self._store

    async def effective_bookings(self, day: Union[date, datetime]) -> list[Booking]:
        """Bookings occupying slots on ``day``, ordered by time slot."""
        target = as_calendar_day(day)
        direct, recurring = await asyncio.gather(
            self._store.query_bookings_by_date(target),
            self._store.query_recurring_bookings(),
        )

        effective: dict[Optional[str], Booking] = {}
        for booking in [*direct, *recurring]:
            if booking.id not in effective and applies_on(booking, target):
                effective[booking.id] = booking
        return sorted(effective.values(), key=lambda b: (b.start_minute, b.created_at))

    async def is_slot_available(
        self, day: Union[date, datetime], slot: Union[Slot, str], call_type: CallType
    ) -> bool:
        bookings = await self.effective_bookings(day)
        return is_available(_slot_time(slot), call_type.duration_minutes, bookings)

    async def book(
        self,
        client_id: str,
        call_type: CallType,
        day: Union[date, datetime],
        slot: Union[Slot, str],
    ) -> Booking:
        """
        Book a call after re-validating the slot.

        Follow-up calls always recur weekly and onboarding calls never do;
        the flag is derived here, not accepted from the caller.

        Raises:
            NotFoundError: The client id is unknown.
            SlotConflictError: The call would overlap an effective booking.
                Nothing is written.
            StoreUnavailableError: The store could not complete the read
                or the write.
        """
        call_type = CallType(call_type)
        target = as_calendar_day(day)
        time_slot = _slot_time(slot)

        async with self._book_lock:
            client = await self._directory.get(client_id)
            if client is None:
                raise NotFoundError("client", client_id)
            bookings = await self.effective_bookings(target)
            conflicts = find_conflicts(time_slot, call_type.duration_minutes, bookings)
            if conflicts:
                logger.info(
                    "Booking rejected: %s at %s on %s conflicts with %s",
                    call_type.value, time_slot, target,
                    [b.id for b in conflicts],
                )
                raise SlotConflictError(target, time_slot, call_type, conflicts)

            booking = Booking.for_client(client, call_type, target, time_slot)
            booking_id = await self._store.insert_booking(booking)

        booking = booking.model_copy(update={"id": booking_id})
        logger.info(
            "Booking created: %s for %s on %s at %s (%s%s)",
            booking_id, client.name, target, time_slot, call_type.value,
            ", weekly" if booking.is_recurring else "",
        )
        return booking

    async def cancel(self, booking_id: str) -> None:
        """Delete a booking. A recurring booking is removed as a whole series.

        Raises:
            NotFoundError: No booking with this id exists.
        """
        await self._store.delete_booking(booking_id)
        logger.info("Booking cancelled: %s", booking_id)

    async def available_slots(
        self, day: Union[date, datetime], call_type: CallType
    ) -> list[Slot]:
        """Grid slots on ``day`` that can take a call of ``call_type``."""
        bookings = await self.effective_bookings(day)
        duration = CallType(call_type).duration_minutes
        return [s for s in generate_slots() if is_available(s, duration, bookings)]

    async def day_schedule(
        self, day: Union[date, datetime], call_type: CallType = CallType.ONBOARDING
    ) -> list[ScheduleRow]:
        """
        Render the grid for ``day``.

        Each row carries the booking starting at that slot, if any, and
        whether a call of ``call_type`` could start there.
        """
        bookings = await self.effective_bookings(day)
        duration = CallType(call_type).duration_minutes
        by_start = {}
        for booking in bookings:
            by_start.setdefault(booking.time_slot, booking)
        return [
            ScheduleRow(
                slot=slot,
                booking=by_start.get(slot.time),
                available=is_available(slot, duration, bookings),
            )
            for slot in generate_slots()
        ]

    async def summary(self, day: Union[date, datetime]) -> CalendarSummary:
        all_bookings = await self._store.list_all_bookings()
        effective = await self.effective_bookings(day)
        return {
            "total_bookings": len(all_bookings),
            "bookings_on_day": len(effective),
            "recurring_series": sum(1 for b in all_bookings if b.is_recurring),
        }

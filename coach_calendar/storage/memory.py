"""
Transient in-memory booking store.

Used in tests, in the console demo, and as the fallback when the local
data file cannot be read or written. Nothing survives the process.
"""

from datetime import date
from typing import Any

from coach_calendar.errors import NotFoundError
from coach_calendar.logging_context import get_request_logger
from coach_calendar.schemas.booking_schema import Booking
from coach_calendar.schemas.client_schema import Client
from coach_calendar.storage.base import apply_booking_changes, new_id

logger = get_request_logger(__name__)


class InMemoryBookingStore:
    """Dict-backed implementation of the BookingStore contract."""

    def __init__(self) -> None:
        self._clients: dict[str, Client] = {}
        self._bookings: dict[str, Booking] = {}

    async def list_clients(self) -> list[Client]:
        return sorted(self._clients.values(), key=lambda c: c.name)

    async def insert_client(self, client: Client) -> str:
        client_id = client.id or new_id("CL")
        if client_id in self._clients:
            raise ValueError(f"Client {client_id} already exists.")
        self._clients[client_id] = client.model_copy(update={"id": client_id})
        logger.debug("Client stored: %s (%s)", client_id, client.name)
        return client_id

    async def list_all_bookings(self) -> list[Booking]:
        return sorted(self._bookings.values(), key=lambda b: b.date)

    async def query_bookings_by_date(self, day: date) -> list[Booking]:
        return sorted(
            (b for b in self._bookings.values()
             if not b.is_recurring and b.anchor_date == day),
            key=lambda b: b.date,
        )

    async def query_recurring_bookings(self) -> list[Booking]:
        return sorted(
            (b for b in self._bookings.values() if b.is_recurring),
            key=lambda b: b.date,
        )

    async def insert_booking(self, booking: Booking) -> str:
        booking_id = booking.id or new_id("BK")
        if booking_id in self._bookings:
            raise ValueError(f"Booking {booking_id} already exists.")
        self._bookings[booking_id] = booking.model_copy(update={"id": booking_id})
        logger.debug("Booking stored: %s", booking_id)
        return booking_id

    async def delete_booking(self, booking_id: str) -> None:
        if self._bookings.pop(booking_id, None) is None:
            raise NotFoundError("booking", booking_id)
        logger.debug("Booking removed: %s", booking_id)

    async def update_booking(self, booking_id: str, **changes: Any) -> Booking:
        current = self._bookings.get(booking_id)
        if current is None:
            raise NotFoundError("booking", booking_id)
        updated = apply_booking_changes(current, changes)
        self._bookings[booking_id] = updated
        return updated

    def reset(self) -> None:
        """Clear all clients and bookings. Used by test fixtures for isolation."""
        self._clients.clear()
        self._bookings.clear()

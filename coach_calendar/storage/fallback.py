"""
Degraded-mode composition of two booking stores.

Calls go to the primary store; when it raises StoreUnavailableError the
same call is served by the fallback store (usually an in-memory store
seeded with the default client list) and the wrapper reports itself as
degraded. From then on every call, read or write, goes to the fallback,
so bookings written there are the ones availability is checked against.
The scheduling core never chooses this; the composing application does.
"""

from datetime import date
from typing import Any

from coach_calendar.errors import StoreUnavailableError
from coach_calendar.logging_context import get_request_logger
from coach_calendar.schemas.booking_schema import Booking
from coach_calendar.schemas.client_schema import Client
from coach_calendar.storage.base import BookingStore

logger = get_request_logger(__name__)


class FallbackBookingStore:
    """Serve from ``primary`` until it fails once, then only from ``fallback``."""

    def __init__(self, primary: BookingStore, fallback: BookingStore) -> None:
        self.primary = primary
        self.fallback = fallback
        self._degraded = False

    @property
    def degraded(self) -> bool:
        """True once any call has been served by the fallback store."""
        return self._degraded

    async def _call(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        if self._degraded:
            return await getattr(self.fallback, operation)(*args, **kwargs)
        try:
            return await getattr(self.primary, operation)(*args, **kwargs)
        except StoreUnavailableError as exc:
            logger.warning(
                "Primary store unavailable during %s (%s); "
                "serving all further calls from fallback store",
                operation, exc,
            )
            self._degraded = True
            return await getattr(self.fallback, operation)(*args, **kwargs)

    async def list_clients(self) -> list[Client]:
        return await self._call("list_clients")

    async def insert_client(self, client: Client) -> str:
        return await self._call("insert_client", client)

    async def list_all_bookings(self) -> list[Booking]:
        return await self._call("list_all_bookings")

    async def query_bookings_by_date(self, day: date) -> list[Booking]:
        return await self._call("query_bookings_by_date", day)

    async def query_recurring_bookings(self) -> list[Booking]:
        return await self._call("query_recurring_bookings")

    async def insert_booking(self, booking: Booking) -> str:
        return await self._call("insert_booking", booking)

    async def delete_booking(self, booking_id: str) -> None:
        await self._call("delete_booking", booking_id)

    async def update_booking(self, booking_id: str, **changes: Any) -> Booking:
        return await self._call("update_booking", booking_id, **changes)

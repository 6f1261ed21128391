"""Shared test fixtures and helpers."""

from datetime import date, datetime, time
from typing import Optional

import pytest
import pytest_asyncio

from coach_calendar.directory import ClientDirectory
from coach_calendar.errors import StoreUnavailableError
from coach_calendar.schemas.booking_schema import Booking, CallType
from coach_calendar.schemas.client_schema import Client
from coach_calendar.scheduling.facade import SchedulingFacade
from coach_calendar.storage.memory import InMemoryBookingStore

# 2024-06-05 is a Wednesday.
WEDNESDAY = date(2024, 6, 5)


@pytest.fixture
def store():
    return InMemoryBookingStore()


@pytest_asyncio.fixture
async def seeded_store(store):
    await ClientDirectory(store).seed_default_clients()
    return store


@pytest.fixture
def facade(seeded_store):
    return SchedulingFacade(seeded_store)


def make_client(
    client_id: Optional[str] = "1",
    name: str = "Sriram Kumar",
    phone: str = "+91-9876543210",
    email: Optional[str] = "sriram@example.com",
) -> Client:
    """Helper to create a Client."""
    return Client(id=client_id, name=name, phone=phone, email=email)


def make_booking(
    call_type: CallType = CallType.ONBOARDING,
    day: date = WEDNESDAY,
    time_slot: str = "10:30",
    booking_id: Optional[str] = None,
    client: Optional[Client] = None,
) -> Booking:
    """Helper to create a Booking with recurrence derived from the call type."""
    hours, minutes = (int(part) for part in time_slot.split(":"))
    return Booking(
        id=booking_id,
        client_id=(client.id if client else "1") or "1",
        client_name=client.name if client else "Sriram Kumar",
        client_phone=client.phone if client else "+91-9876543210",
        call_type=call_type,
        date=datetime.combine(day, time(hours, minutes)),
        time_slot=time_slot,
        is_recurring=call_type is CallType.FOLLOW_UP,
    )


class UnavailableStore:
    """A store whose every operation fails as if the backend were unreachable."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def _fail(self, operation: str):
        self.calls.append(operation)
        raise StoreUnavailableError(f"{operation} failed: backend unreachable")

    async def list_clients(self):
        return await self._fail("list_clients")

    async def insert_client(self, client):
        return await self._fail("insert_client")

    async def list_all_bookings(self):
        return await self._fail("list_all_bookings")

    async def query_bookings_by_date(self, day):
        return await self._fail("query_bookings_by_date")

    async def query_recurring_bookings(self):
        return await self._fail("query_recurring_bookings")

    async def insert_booking(self, booking):
        return await self._fail("insert_booking")

    async def delete_booking(self, booking_id):
        return await self._fail("delete_booking")

    async def update_booking(self, booking_id, **changes):
        return await self._fail("update_booking")

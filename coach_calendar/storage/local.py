"""
Local durable booking store backed by a single JSON document.

The whole calendar (clients and bookings) is read on every operation and
rewritten atomically on every change. Any I/O or decoding failure is
reported as StoreUnavailableError so the composing application can
decide whether to fall back.
"""

import asyncio
import os
from datetime import date
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, Field

from coach_calendar.errors import NotFoundError, StoreUnavailableError
from coach_calendar.logging_context import get_request_logger
from coach_calendar.schemas.booking_schema import Booking
from coach_calendar.schemas.client_schema import Client
from coach_calendar.storage.base import apply_booking_changes, new_id

logger = get_request_logger(__name__)


class CalendarDocument(BaseModel):
    """On-disk layout of the calendar file."""

    clients: list[Client] = Field(default_factory=list)
    bookings: list[Booking] = Field(default_factory=list)


class JsonFileBookingStore:
    """BookingStore implementation persisting to a local JSON file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _read(self) -> CalendarDocument:
        if not self.path.exists():
            return CalendarDocument()
        try:
            return CalendarDocument.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Could not read calendar file %s: %s", self.path, exc)
            raise StoreUnavailableError(f"Could not read {self.path}") from exc

    def _write(self, document: CalendarDocument) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(document.model_dump_json(indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.error("Could not write calendar file %s: %s", self.path, exc)
            raise StoreUnavailableError(f"Could not write {self.path}") from exc

    async def _load(self) -> CalendarDocument:
        return await asyncio.to_thread(self._read)

    async def _save(self, document: CalendarDocument) -> None:
        await asyncio.to_thread(self._write, document)

    async def list_clients(self) -> list[Client]:
        document = await self._load()
        return sorted(document.clients, key=lambda c: c.name)

    async def insert_client(self, client: Client) -> str:
        document = await self._load()
        client_id = client.id or new_id("CL")
        if any(c.id == client_id for c in document.clients):
            raise ValueError(f"Client {client_id} already exists.")
        document.clients.append(client.model_copy(update={"id": client_id}))
        await self._save(document)
        return client_id

    async def list_all_bookings(self) -> list[Booking]:
        document = await self._load()
        return sorted(document.bookings, key=lambda b: b.date)

    async def query_bookings_by_date(self, day: date) -> list[Booking]:
        bookings = await self.list_all_bookings()
        return [b for b in bookings if not b.is_recurring and b.anchor_date == day]

    async def query_recurring_bookings(self) -> list[Booking]:
        bookings = await self.list_all_bookings()
        return [b for b in bookings if b.is_recurring]

    async def insert_booking(self, booking: Booking) -> str:
        document = await self._load()
        booking_id = booking.id or new_id("BK")
        if any(b.id == booking_id for b in document.bookings):
            raise ValueError(f"Booking {booking_id} already exists.")
        document.bookings.append(booking.model_copy(update={"id": booking_id}))
        await self._save(document)
        logger.debug("Booking written to %s: %s", self.path, booking_id)
        return booking_id

    async def delete_booking(self, booking_id: str) -> None:
        document = await self._load()
        remaining = [b for b in document.bookings if b.id != booking_id]
        if len(remaining) == len(document.bookings):
            raise NotFoundError("booking", booking_id)
        document.bookings = remaining
        await self._save(document)

    async def update_booking(self, booking_id: str, **changes: Any) -> Booking:
        document = await self._load()
        for index, booking in enumerate(document.bookings):
            if booking.id == booking_id:
                updated = apply_booking_changes(booking, changes)
                document.bookings[index] = updated
                await self._save(document)
                return updated
        raise NotFoundError("booking", booking_id)

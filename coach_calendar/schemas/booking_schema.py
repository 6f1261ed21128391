"""Booking and call type data models."""

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from coach_calendar.schemas.client_schema import Client
from coach_calendar.utils import format_time_slot, parse_time_slot


class CallType(str, Enum):
    """Kinds of coaching call. Duration is derived, never stored."""

    ONBOARDING = "onboarding"
    FOLLOW_UP = "follow-up"

    @property
    def duration_minutes(self) -> int:
        return CALL_DURATIONS[self]

    @property
    def recurs_weekly(self) -> bool:
        return self is CallType.FOLLOW_UP

    @property
    def label(self) -> str:
        return "Onboarding" if self is CallType.ONBOARDING else "Follow-up"


CALL_DURATIONS: dict[CallType, int] = {
    CallType.ONBOARDING: 40,
    CallType.FOLLOW_UP: 20,
}


class Booking(BaseModel):
    """
    A booked call.

    ``date`` is the anchor: the first occurrence for a recurring series.
    ``client_name`` and ``client_phone`` are a snapshot taken at booking
    time and are not refreshed when the client record changes.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    client_id: str
    client_name: str
    client_phone: str
    call_type: CallType
    date: datetime
    time_slot: str
    is_recurring: bool
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("time_slot")
    @classmethod
    def _normalize_time_slot(cls, value: str) -> str:
        return format_time_slot(parse_time_slot(value))

    @model_validator(mode="after")
    def _recurrence_follows_call_type(self) -> "Booking":
        if self.is_recurring != self.call_type.recurs_weekly:
            raise ValueError(
                f"is_recurring must be {self.call_type.recurs_weekly} "
                f"for {self.call_type.value} calls"
            )
        return self

    @classmethod
    def for_client(
        cls, client: Client, call_type: CallType, day: date, time_slot: str
    ) -> "Booking":
        """Build a new booking, deriving recurrence from the call type."""
        minutes = parse_time_slot(time_slot)
        anchor = datetime.combine(day, time(minutes // 60, minutes % 60))
        return cls(
            client_id=client.id or "",
            client_name=client.name,
            client_phone=client.phone,
            call_type=call_type,
            date=anchor,
            time_slot=time_slot,
            is_recurring=call_type.recurs_weekly,
        )

    @property
    def anchor_date(self) -> date:
        return self.date.date()

    @property
    def duration_minutes(self) -> int:
        return self.call_type.duration_minutes

    @property
    def start_minute(self) -> int:
        return parse_time_slot(self.time_slot)

    @property
    def end_minute(self) -> int:
        return self.start_minute + self.duration_minutes


class BookingConflict(BaseModel):
    """Detailed result of checking a candidate slot against a day's bookings."""

    has_conflict: bool
    conflicting_bookings: list[Booking] = Field(default_factory=list)

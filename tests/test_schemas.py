"""Tests for booking and client models."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from coach_calendar.schemas.booking_schema import CALL_DURATIONS, Booking, CallType
from coach_calendar.schemas.client_schema import Client
from tests.conftest import WEDNESDAY, make_client


class TestCallType:
    def test_durations(self):
        assert CALL_DURATIONS == {CallType.ONBOARDING: 40, CallType.FOLLOW_UP: 20}
        assert CallType.ONBOARDING.duration_minutes == 40
        assert CallType.FOLLOW_UP.duration_minutes == 20

    def test_only_follow_ups_recur(self):
        assert CallType.FOLLOW_UP.recurs_weekly is True
        assert CallType.ONBOARDING.recurs_weekly is False

    def test_wire_values(self):
        assert CallType("follow-up") is CallType.FOLLOW_UP
        assert CallType("onboarding") is CallType.ONBOARDING


class TestBookingForClient:
    def test_follow_up_is_recurring(self):
        booking = Booking.for_client(make_client(), CallType.FOLLOW_UP, WEDNESDAY, "13:00")
        assert booking.is_recurring is True

    def test_onboarding_is_not_recurring(self):
        booking = Booking.for_client(make_client(), CallType.ONBOARDING, WEDNESDAY, "10:30")
        assert booking.is_recurring is False

    def test_anchor_combines_day_and_slot(self):
        booking = Booking.for_client(make_client(), CallType.ONBOARDING, WEDNESDAY, "10:30")
        assert booking.date == datetime(2024, 6, 5, 10, 30)
        assert booking.anchor_date == WEDNESDAY
        assert booking.time_slot == "10:30"

    def test_snapshots_client_details(self):
        client = make_client(client_id="7", name="Vikram Rao", phone="+91-9876543216")
        booking = Booking.for_client(client, CallType.ONBOARDING, WEDNESDAY, "10:30")
        assert booking.client_id == "7"
        assert booking.client_name == "Vikram Rao"
        assert booking.client_phone == "+91-9876543216"

    def test_duration_derived_from_call_type(self):
        booking = Booking.for_client(make_client(), CallType.ONBOARDING, WEDNESDAY, "10:30")
        assert booking.duration_minutes == 40
        assert (booking.start_minute, booking.end_minute) == (630, 670)


class TestBookingValidation:
    def _data(self, **overrides):
        data = {
            "client_id": "1",
            "client_name": "Sriram Kumar",
            "client_phone": "+91-9876543210",
            "call_type": "follow-up",
            "date": datetime(2024, 6, 5, 13, 0),
            "time_slot": "13:00",
            "is_recurring": True,
        }
        data.update(overrides)
        return data

    def test_valid_record(self):
        booking = Booking.model_validate(self._data())
        assert booking.call_type is CallType.FOLLOW_UP

    def test_non_recurring_follow_up_rejected(self):
        with pytest.raises(ValidationError, match="is_recurring"):
            Booking.model_validate(self._data(is_recurring=False))

    def test_recurring_onboarding_rejected(self):
        with pytest.raises(ValidationError, match="is_recurring"):
            Booking.model_validate(self._data(call_type="onboarding", is_recurring=True))

    def test_time_slot_zero_padded(self):
        booking = Booking.model_validate(self._data(time_slot="9:05"))
        assert booking.time_slot == "09:05"

    def test_invalid_time_slot_rejected(self):
        with pytest.raises(ValidationError):
            Booking.model_validate(self._data(time_slot="25:00"))

    def test_unknown_call_type_rejected(self):
        with pytest.raises(ValidationError):
            Booking.model_validate(self._data(call_type="check-in"))

    def test_bookings_are_immutable(self):
        booking = Booking.model_validate(self._data())
        with pytest.raises(ValidationError):
            booking.time_slot = "14:00"


class TestClientValidation:
    def test_valid_client(self):
        client = Client(name="  Priya Patel ", phone="+91-9876543213")
        assert client.name == "Priya Patel"
        assert client.email is None
        assert client.id is None

    def test_name_too_short(self):
        with pytest.raises(ValidationError):
            Client(name="P", phone="+91-9876543213")

    def test_phone_too_short(self):
        with pytest.raises(ValidationError):
            Client(name="Priya Patel", phone="12345")

    def test_blank_email_becomes_none(self):
        client = Client(name="Priya Patel", phone="+91-9876543213", email="  ")
        assert client.email is None

    def test_malformed_email_rejected(self):
        with pytest.raises(ValidationError):
            Client(name="Priya Patel", phone="+91-9876543213", email="priya.example.com")

    def test_created_at_defaults_to_now(self):
        client = Client(name="Priya Patel", phone="+91-9876543213")
        assert client.created_at.date() >= date(2024, 1, 1)
